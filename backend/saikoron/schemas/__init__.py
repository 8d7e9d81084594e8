"""Pydantic Schemas — request validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input), core never sees raw dicts
    - Domain types from core/ used for enum fields
    - Responses are core snapshots (core/tool_snapshot.py), not schema models

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
