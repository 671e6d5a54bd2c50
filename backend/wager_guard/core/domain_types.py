"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Amount lives in the u64 domain [0, U64_MAX]
    - Address is 32 bytes; DEFAULT_ADDRESS (all zero) is never a valid player
    - Team selectors are 0 or 1, named by Team
    - Protocol constants (MAX_BET_AMOUNT, EARNINGS_DIVISOR) are not configurable

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - KillRecord frozen: validators never mutate their input
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import NewType


# ─── Value Types ─────────────────────────────────────────────────

SessionIdentifier = NewType("SessionIdentifier", str)   # 1–32 chars, [alnum-_]
TeamSelector = NewType("TeamSelector", int)             # 0 or 1
Amount = NewType("Amount", int)                         # u64
Address = NewType("Address", bytes)                     # 32 bytes


# ─── Protocol Constants ──────────────────────────────────────────

U64_MAX: int = 2**64 - 1
U16_MAX: int = 2**16 - 1

MAX_SESSION_ID_LENGTH: int = 32
MAX_BET_AMOUNT: int = 1_000_000_000_000   # 1000 tokens at 9 decimals
EARNINGS_DIVISOR: int = 10                # 0.1 payout unit per kill/spawn point

ADDRESS_LENGTH: int = 32
DEFAULT_ADDRESS = Address(bytes(ADDRESS_LENGTH))


# ─── Enums ───────────────────────────────────────────────────────

class Team(IntEnum):
    """The two sides of a session."""
    TEAM_A = 0
    TEAM_B = 1


class GuardState(str, Enum):
    """Reentrancy guard states, derived from the session's is_processing flag."""
    IDLE = "idle"
    PROCESSING = "processing"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class KillRecord:
    """One reported kill. Legitimacy checked by validate_kill_record."""
    killer: Address
    victim: Address
    killer_team: TeamSelector
    victim_team: TeamSelector
