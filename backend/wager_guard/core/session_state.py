"""Session State — the caller-owned record the reentrancy guard toggles.

Invariants:
    - The core reads and writes is_processing only; every other field belongs to the caller
    - A fresh record starts Idle (is_processing False)

Design Decisions:
    - GuardedSession Protocol: any object with an is_processing attribute can be guarded,
      so the persistence layer keeps its own record type
    - SessionState dataclass: the in-memory record used by the shell helpers and tests
"""

from dataclasses import dataclass
from typing import Protocol


class GuardedSession(Protocol):
    """Structural contract for records passed to the reentrancy guard."""
    is_processing: bool


@dataclass
class SessionState:
    """Per-session mutable record; pure dataclass, no IO."""

    session_id: str = ""

    # Bet per player, in base units (u64)
    session_bet: int = 0

    # Reentrancy flag: True while an instruction holds the critical section
    is_processing: bool = False
