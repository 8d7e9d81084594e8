"""Core Layer — pure draw logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Every transition takes an immutable snapshot and returns a new one

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
    - Randomness, time and id generation are injected callables, never module globals
"""
