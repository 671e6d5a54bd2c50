"""Wager Guard Package — input validation, checked arithmetic and reentrancy guard.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
