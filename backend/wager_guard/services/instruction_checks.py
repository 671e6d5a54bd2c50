"""Instruction Checks — how an instruction handler composes validation, guard and arithmetic.

Invariants:
    - Arguments are validated before any session state is touched
    - State-dependent work runs inside guarded_instruction, which always releases
    - A WagerError is logged once (by the innermost check that sees it) and re-raised unchanged
    - Nothing here moves funds or creates/destroys sessions

Design Decisions:
    - One function per instruction shape: every composed check is visible in one place
    - ErrorContext.logged marks a failure as logged; the innermost check sets it
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from wager_guard.config import get_settings
from wager_guard.core.domain_types import KillRecord
from wager_guard.core.errors import WagerError
from wager_guard.core.reentrancy import guard, guard_state
from wager_guard.core.safe_math import safe_earnings_calculation
from wager_guard.core.session_state import GuardedSession, SessionState
from wager_guard.core.validation import (
    validate_bet_amount,
    validate_kill_record,
    validate_remaining_accounts_count,
    validate_session_id,
    validate_team_number,
)
from wager_guard.schemas.instructions import (
    BetInstruction,
    DistributeInstruction,
    JoinInstruction,
    RecordKillInstruction,
)

logger = logging.getLogger(__name__)


@contextmanager
def _rejections(instruction: str, session_id: str | None) -> Iterator[None]:
    """Log a WagerError raised in the block, tag its context, re-raise it."""
    try:
        yield
    except WagerError as exc:
        if not exc.context.logged:
            exc.context.logged = True
            exc.context.instruction = exc.context.instruction or instruction
            exc.context.session_id = exc.context.session_id or session_id
            logger.warning(
                f"Rejected {instruction}: {exc.message}",
                extra={
                    "session_id": session_id,
                    "instruction": instruction,
                    "error_code": exc.code.value,
                    "error_number": exc.error_number,
                },
            )
        raise


# ─── Argument Checks ────────────────────────────────────────────

def check_join(instr: JoinInstruction) -> None:
    with _rejections("join_user", instr.session_id):
        validate_session_id(instr.session_id)
        validate_team_number(instr.team)


def check_bet(instr: BetInstruction) -> None:
    with _rejections("place_bet", instr.session_id):
        validate_session_id(instr.session_id)
        validate_bet_amount(instr.bet_amount)


def check_record_kill(instr: RecordKillInstruction) -> KillRecord:
    """Validate a kill report and return it as a KillRecord."""
    with _rejections("record_kill", instr.session_id):
        validate_session_id(instr.session_id)
        record = instr.to_kill_record()
        validate_kill_record(record)
    return record


def check_distribution(
    instr: DistributeInstruction, max_count: int | None = None,
) -> None:
    """Winning team and remaining-accounts ceiling (Settings default)."""
    if max_count is None:
        max_count = get_settings().max_remaining_accounts
    with _rejections("distribute_winnings", instr.session_id):
        validate_session_id(instr.session_id)
        validate_team_number(instr.winning_team)
        validate_remaining_accounts_count(instr.remaining_accounts, max_count)


# ─── Guarded Section ────────────────────────────────────────────

@contextmanager
def guarded_instruction(
    session: GuardedSession, instruction: str,
) -> Iterator[GuardedSession]:
    """Hold the session guard for one instruction, logging entry and exit."""
    session_id = getattr(session, "session_id", None)
    with _rejections(instruction, session_id):
        with guard(session):
            logger.debug(
                f"Entered {instruction}",
                extra={
                    "session_id": session_id,
                    "instruction": instruction,
                    "guard_state": guard_state(session).value,
                },
            )
            yield session
    logger.debug(
        f"Left {instruction}",
        extra={
            "session_id": session_id,
            "instruction": instruction,
            "guard_state": guard_state(session).value,
        },
    )


def compute_pay_to_spawn_earnings(session: SessionState, kills_and_spawns: int) -> int:
    """Earnings owed for kills_and_spawns points at the session's bet."""
    with guarded_instruction(session, "distribute_pay_spawn_earnings"):
        return safe_earnings_calculation(kills_and_spawns, session.session_bet)
