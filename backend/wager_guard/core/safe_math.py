"""Safe Arithmetic — checked u64 primitives for funds computations.

Invariants:
    - All functions are PURE and operate over [0, U64_MAX]
    - No result ever wraps: out-of-domain results raise ArithmeticFault
    - Division by zero is ARITHMETIC_ERROR, checked before dividing, never conflated with overflow
    - safe_earnings_calculation is built only from safe_multiply and safe_divide

Design Decisions:
    - Python ints are unbounded, so each primitive computes the exact result and
      range-checks it against the u64 domain (the checked_* semantics)
    - Operands outside the domain are rejected on entry: above U64_MAX is overflow,
      below zero is underflow
"""

from wager_guard.core.domain_types import EARNINGS_DIVISOR, U16_MAX, U64_MAX
from wager_guard.core.errors import ArithmeticFault, WagerErrorCode


def _checked(value: int) -> int:
    """Range-check an exact result against the u64 domain."""
    if value > U64_MAX:
        raise ArithmeticFault(WagerErrorCode.ARITHMETIC_OVERFLOW)
    if value < 0:
        raise ArithmeticFault(WagerErrorCode.ARITHMETIC_UNDERFLOW)
    return value


def _operands(*values: int) -> None:
    for value in values:
        _checked(value)


def safe_add(a: int, b: int) -> int:
    """a + b, ARITHMETIC_OVERFLOW above U64_MAX."""
    _operands(a, b)
    return _checked(a + b)


def safe_subtract(a: int, b: int) -> int:
    """a - b, ARITHMETIC_UNDERFLOW when b > a."""
    _operands(a, b)
    if b > a:
        raise ArithmeticFault(
            WagerErrorCode.ARITHMETIC_UNDERFLOW, f"Cannot subtract {b} from {a}",
        )
    return a - b


def safe_multiply(a: int, b: int) -> int:
    """a * b, ARITHMETIC_OVERFLOW above U64_MAX."""
    _operands(a, b)
    return _checked(a * b)


def safe_divide(a: int, b: int) -> int:
    """Truncating a // b. ARITHMETIC_ERROR when b is zero."""
    _operands(a, b)
    if b == 0:
        raise ArithmeticFault(WagerErrorCode.ARITHMETIC_ERROR)
    return _checked(a // b)


def safe_earnings_calculation(kills_and_spawns: int, session_bet: int) -> int:
    """Pay-to-spawn earnings: kills_and_spawns * session_bet / 10.

    kills_and_spawns is a u16 counter widened to u64 before multiplying.
    """
    if kills_and_spawns > U16_MAX:
        raise ArithmeticFault(
            WagerErrorCode.ARITHMETIC_OVERFLOW,
            f"kills_and_spawns {kills_and_spawns} does not fit u16",
        )
    multiplied = safe_multiply(kills_and_spawns, session_bet)
    return safe_divide(multiplied, EARNINGS_DIVISOR)
