"""Pydantic Schemas: request body parsing at the API boundary.

Invariants:
    - Schemas validate at system boundary only; records past this point are dicts
"""
