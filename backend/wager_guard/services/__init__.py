"""Service Layer — imperative shell composing validation, guard and arithmetic.

Invariants:
    - Services never move funds or create/destroy sessions
    - Every rejection is logged once, then re-raised unchanged
"""
