"""Infrastructure — logging setup, database sessions, and the SQL tool repository.

Invariants:
    - Only layer allowed to touch the database driver or logging handlers
    - Maps driver failures to DatabaseError (core/errors.py)
"""
