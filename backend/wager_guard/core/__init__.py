"""Core Layer — pure domain logic, no IO, no logging, no funds movement.

Invariants:
    - No module in core/ imports from services/, schemas/ or infrastructure/
    - Validator and safe_math functions are pure and deterministic
    - reentrancy is the only module that mutates caller state (one flag)
"""
