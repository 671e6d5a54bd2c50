"""Instruction Checks — tests for the shell composing validation, guard and arithmetic.

Tests cover:
    - per-instruction checks surface the first failing validator's code
    - check_distribution defaults its ceiling to Settings.max_remaining_accounts
    - rejections are logged once with error_code and tag ErrorContext,
      including errors raised with a caller-built ErrorContext
    - guarded_instruction releases on success, on failure and rejects nesting
    - compute_pay_to_spawn_earnings uses the session bet inside the guard
"""

import logging

import pytest

from wager_guard.core.errors import (
    ArithmeticFault, ErrorContext, InputValidationError, ReentrancyError,
    WagerErrorCode,
)
from wager_guard.core.session_state import SessionState
from wager_guard.schemas.instructions import (
    BetInstruction,
    DistributeInstruction,
    JoinInstruction,
    RecordKillInstruction,
)
from wager_guard.services.instruction_checks import (
    check_bet,
    check_distribution,
    check_join,
    check_record_kill,
    compute_pay_to_spawn_earnings,
    guarded_instruction,
)


LOGGER = "wager_guard.services.instruction_checks"
KILLER_HEX = "01" * 32
VICTIM_HEX = "02" * 32


def _kill(**overrides) -> RecordKillInstruction:
    fields = dict(
        session_id="match-007", killer=KILLER_HEX, victim=VICTIM_HEX,
        killer_team=0, victim_team=1,
    )
    fields.update(overrides)
    return RecordKillInstruction(**fields)


# ─── Argument checks ─────────────────────────────────────────────

def test_check_join_accepts_valid_input():
    check_join(JoinInstruction(session_id="match-007", team=1))


def test_check_join_session_id_checked_before_team():
    with pytest.raises(InputValidationError) as exc_info:
        check_join(JoinInstruction(session_id="", team=9))
    assert exc_info.value.code is WagerErrorCode.INVALID_SESSION_ID


def test_check_join_rejects_third_team():
    with pytest.raises(InputValidationError) as exc_info:
        check_join(JoinInstruction(session_id="match-007", team=2))
    assert exc_info.value.code is WagerErrorCode.INVALID_TEAM_SELECTION


def test_check_bet_rejects_zero():
    with pytest.raises(InputValidationError) as exc_info:
        check_bet(BetInstruction(session_id="match-007", bet_amount=0))
    assert exc_info.value.code is WagerErrorCode.INVALID_BET_AMOUNT


def test_check_record_kill_returns_record():
    record = check_record_kill(_kill())
    assert record.killer == b"\x01" * 32


def test_check_record_kill_rejects_team_kill():
    with pytest.raises(InputValidationError) as exc_info:
        check_record_kill(_kill(victim_team=0))
    assert exc_info.value.code is WagerErrorCode.INVALID_KILL


def test_check_record_kill_rejects_default_victim():
    with pytest.raises(InputValidationError) as exc_info:
        check_record_kill(_kill(victim="00" * 32))
    assert exc_info.value.code is WagerErrorCode.INVALID_PLAYER


def test_check_distribution_uses_settings_ceiling(monkeypatch):
    monkeypatch.setenv("WAGER_MAX_REMAINING_ACCOUNTS", "4")
    instr = DistributeInstruction(
        session_id="match-007", winning_team=0, remaining_accounts=5,
    )
    with pytest.raises(InputValidationError) as exc_info:
        check_distribution(instr)
    assert exc_info.value.code is WagerErrorCode.TOO_MANY_REMAINING_ACCOUNTS


def test_check_distribution_explicit_ceiling_wins():
    instr = DistributeInstruction(
        session_id="match-007", winning_team=1, remaining_accounts=12,
    )
    check_distribution(instr, max_count=12)


# ─── Rejection logging ───────────────────────────────────────────

def test_rejection_logged_with_code_and_context_tagged(caplog):
    caplog.set_level(logging.WARNING, logger=LOGGER)
    with pytest.raises(InputValidationError) as exc_info:
        check_join(JoinInstruction(session_id="match-007", team=3))

    records = [r for r in caplog.records if r.name == LOGGER]
    assert len(records) == 1
    assert records[0].error_code == "InvalidTeamSelection"
    assert records[0].session_id == "match-007"
    assert exc_info.value.context.instruction == "join_user"
    assert exc_info.value.context.session_id == "match-007"


def test_nested_rejection_logged_once(caplog):
    caplog.set_level(logging.WARNING, logger=LOGGER)
    session = SessionState(session_id="match-007")
    with pytest.raises(ReentrancyError) as exc_info:
        with guarded_instruction(session, "distribute_winnings"):
            with guarded_instruction(session, "refund_wager"):
                pytest.fail("nested body must not run")

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].instruction == "refund_wager"
    assert exc_info.value.context.instruction == "refund_wager"
    assert session.is_processing is False


def test_caller_supplied_context_still_logged(caplog):
    caplog.set_level(logging.WARNING, logger=LOGGER)
    session = SessionState(session_id="match-007")
    ctx = ErrorContext(instruction="settle_pot")
    with pytest.raises(ArithmeticFault) as exc_info:
        with guarded_instruction(session, "distribute_winnings"):
            raise ArithmeticFault(WagerErrorCode.ARITHMETIC_OVERFLOW, context=ctx)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].error_code == "ArithmeticOverflow"
    assert exc_info.value.context.logged is True
    assert exc_info.value.context.instruction == "settle_pot"
    assert exc_info.value.context.session_id == "match-007"


# ─── Guarded section ─────────────────────────────────────────────

def test_guarded_instruction_holds_and_releases():
    session = SessionState(session_id="match-007")
    with guarded_instruction(session, "record_kill"):
        assert session.is_processing is True
    assert session.is_processing is False


def test_guarded_instruction_releases_on_failure():
    session = SessionState(session_id="match-007")
    with pytest.raises(InputValidationError):
        with guarded_instruction(session, "record_kill"):
            check_record_kill(_kill(victim=KILLER_HEX))
    assert session.is_processing is False


def test_busy_session_rejected_without_clearing_flag():
    session = SessionState(session_id="match-007", is_processing=True)
    with pytest.raises(ReentrancyError):
        with guarded_instruction(session, "record_kill"):
            pass
    assert session.is_processing is True


def test_pay_to_spawn_earnings():
    session = SessionState(session_id="match-007", session_bet=100)
    assert compute_pay_to_spawn_earnings(session, 10) == 100
    assert session.is_processing is False


def test_pay_to_spawn_earnings_overflow_releases_guard():
    session = SessionState(session_id="match-007", session_bet=2**64 - 1)
    with pytest.raises(ArithmeticFault) as exc_info:
        compute_pay_to_spawn_earnings(session, 2)
    assert exc_info.value.code is WagerErrorCode.ARITHMETIC_OVERFLOW
    assert session.is_processing is False
