"""Input Validation — pure predicates over instruction arguments.

Invariants:
    - All functions are PURE: no IO, no logging, no mutation of their input
    - Return None on success, raise InputValidationError on violation
    - Checks short-circuit in documented order; first failing check wins
    - validate_kill_data reuses validate_player_address and propagates INVALID_PLAYER unchanged

Design Decisions:
    - Exceptions over error dicts: the instruction handler aborts the whole
      instruction on any failure, so there is no partial result to return
    - Session id length counted in UTF-8 bytes, matching the on-chain string length
    - regex over re: its Alphabetic property class covers combining vowel signs and circled letters
      that str.isalnum rejects
"""

import regex

from wager_guard.core.domain_types import (
    DEFAULT_ADDRESS,
    MAX_BET_AMOUNT,
    MAX_SESSION_ID_LENGTH,
    Address,
    KillRecord,
    Team,
)
from wager_guard.core.errors import InputValidationError, WagerErrorCode


# Unicode Alphabetic (incl. Other_Alphabetic marks) or Numeric, plus - and _
_SESSION_ID_CHARS = regex.compile(r"[\p{Alphabetic}\p{N}_-]+")


def validate_session_id(session_id: str) -> None:
    """Non-empty, at most 32 bytes, alphanumerics plus '-' and '_'."""
    if not session_id:
        raise InputValidationError(WagerErrorCode.INVALID_SESSION_ID)
    if len(session_id.encode("utf-8")) > MAX_SESSION_ID_LENGTH:
        raise InputValidationError(
            WagerErrorCode.SESSION_ID_TOO_LONG,
            f"Session id exceeds {MAX_SESSION_ID_LENGTH} bytes",
        )
    if _SESSION_ID_CHARS.fullmatch(session_id) is None:
        raise InputValidationError(WagerErrorCode.INVALID_SESSION_ID_FORMAT)


def validate_team_number(team: int) -> None:
    """Team must be 0 or 1."""
    if team not in (Team.TEAM_A, Team.TEAM_B):
        raise InputValidationError(
            WagerErrorCode.INVALID_TEAM_SELECTION,
            f"Team must be 0 or 1, got {team}",
        )


def validate_bet_amount(amount: int) -> None:
    """Bet must be positive and at most MAX_BET_AMOUNT. Both bounds share one code."""
    if amount <= 0:
        raise InputValidationError(WagerErrorCode.INVALID_BET_AMOUNT)
    if amount > MAX_BET_AMOUNT:
        raise InputValidationError(
            WagerErrorCode.INVALID_BET_AMOUNT,
            f"Bet amount {amount} exceeds maximum {MAX_BET_AMOUNT}",
        )


def validate_player_address(player: Address) -> None:
    """Player address must not be the all-zero default."""
    if player == DEFAULT_ADDRESS:
        raise InputValidationError(WagerErrorCode.INVALID_PLAYER)


def validate_remaining_accounts_count(count: int, max_count: int) -> None:
    """Remaining accounts must not exceed the caller's ceiling."""
    if count > max_count:
        raise InputValidationError(
            WagerErrorCode.TOO_MANY_REMAINING_ACCOUNTS,
            f"Got {count} remaining accounts, maximum is {max_count}",
        )


def validate_kill_data(
    killer: Address, victim: Address, killer_team: int, victim_team: int,
) -> None:
    """A kill needs two distinct players on opposing teams, both non-default."""
    if killer == victim:
        raise InputValidationError(
            WagerErrorCode.INVALID_KILL, "Killer and victim are the same player",
        )
    if killer_team == victim_team:
        raise InputValidationError(
            WagerErrorCode.INVALID_KILL, "Killer and victim are on the same team",
        )
    validate_player_address(killer)
    validate_player_address(victim)


def validate_kill_record(record: KillRecord) -> None:
    """validate_kill_data over a KillRecord."""
    validate_kill_data(
        record.killer, record.victim, record.killer_team, record.victim_team,
    )
