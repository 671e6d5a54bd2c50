"""Reentrancy Guard — single-slot, fail-fast lock over a session's is_processing flag.

Invariants:
    - Idle -> acquire -> Processing -> release -> Idle
    - acquire on Processing raises ALREADY_PROCESSING and leaves the flag untouched
    - release is unconditional, idempotent and never raises
    - guard() releases on every exit path out of its body, including exceptions

Design Decisions:
    - No queuing, no timeout, no blocking: contested entry fails immediately
    - guard() only releases what it acquired; a rejected nested entry must not
      clear the outer holder's claim
"""

from collections.abc import Iterator
from contextlib import contextmanager

from wager_guard.core.domain_types import GuardState
from wager_guard.core.errors import ReentrancyError
from wager_guard.core.session_state import GuardedSession


def acquire(session: GuardedSession) -> None:
    """Enter the critical section or raise ReentrancyError."""
    if session.is_processing:
        raise ReentrancyError()
    session.is_processing = True


def release(session: GuardedSession) -> None:
    """Leave the critical section."""
    session.is_processing = False


def guard_state(session: GuardedSession) -> GuardState:
    return GuardState.PROCESSING if session.is_processing else GuardState.IDLE


@contextmanager
def guard(session: GuardedSession) -> Iterator[GuardedSession]:
    """Scoped acquire/release. The body never runs if acquire fails."""
    acquire(session)
    try:
        yield session
    finally:
        release(session)
