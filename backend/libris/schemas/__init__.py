"""Pydantic Schemas — request validation and response shapes.

Invariants:
    - Schemas validate at system boundary (request payloads, public responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from models: schemas are request contracts, models are persistence
"""
