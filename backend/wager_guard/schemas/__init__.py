"""Pydantic Schemas — argument shapes for incoming instructions.

Invariants:
    - Schemas validate shape at the system boundary (types, hex length, signs)
    - Domain rules (bet ceiling, team range, kill legitimacy) live in core/validation

Design Decisions:
    - Separate from core: schemas are wire contracts, core is protocol rules
"""
