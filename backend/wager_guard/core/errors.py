"""Error Hierarchy — typed, categorized exceptions for every wager guard failure mode.

Invariants:
    - Every error carries a code (WagerErrorCode), category (ErrorCategory), severity (ErrorSeverity)
    - WagerErrorCode is closed: twelve kinds, stable names, stable numbers
    - Callers branch on .code, never on message text
    - Errors are raised once and propagated unchanged (no wrapping, no downgrading)

Design Decisions:
    - Single hierarchy with WagerError base: the instruction handler catches one type
    - Error numbers follow the on-chain custom error convention (6000 + ordinal)
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


CUSTOM_ERROR_OFFSET: int = 6000


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    ARITHMETIC = "arithmetic"
    CONFLICT = "conflict"


class WagerErrorCode(str, Enum):
    """Failure kinds surfaced to the instruction handler. Order defines error numbers."""
    INVALID_SESSION_ID = "InvalidSessionId"
    SESSION_ID_TOO_LONG = "SessionIdTooLong"
    INVALID_SESSION_ID_FORMAT = "InvalidSessionIdFormat"
    INVALID_TEAM_SELECTION = "InvalidTeamSelection"
    INVALID_BET_AMOUNT = "InvalidBetAmount"
    INVALID_PLAYER = "InvalidPlayer"
    TOO_MANY_REMAINING_ACCOUNTS = "TooManyRemainingAccounts"
    INVALID_KILL = "InvalidKill"
    ARITHMETIC_OVERFLOW = "ArithmeticOverflow"
    ARITHMETIC_UNDERFLOW = "ArithmeticUnderflow"
    ARITHMETIC_ERROR = "ArithmeticError"
    ALREADY_PROCESSING = "AlreadyProcessing"

    @property
    def error_number(self) -> int:
        return CUSTOM_ERROR_OFFSET + list(WagerErrorCode).index(self)


_DEFAULT_MESSAGES: dict[WagerErrorCode, str] = {
    WagerErrorCode.INVALID_SESSION_ID: "Session id must not be empty",
    WagerErrorCode.SESSION_ID_TOO_LONG: "Session id exceeds 32 characters",
    WagerErrorCode.INVALID_SESSION_ID_FORMAT: (
        "Session id may only contain alphanumerics, '-' and '_'"
    ),
    WagerErrorCode.INVALID_TEAM_SELECTION: "Team must be 0 or 1",
    WagerErrorCode.INVALID_BET_AMOUNT: "Bet amount out of range",
    WagerErrorCode.INVALID_PLAYER: "Player address is the default address",
    WagerErrorCode.TOO_MANY_REMAINING_ACCOUNTS: "Too many remaining accounts",
    WagerErrorCode.INVALID_KILL: "Kill record is not legitimate",
    WagerErrorCode.ARITHMETIC_OVERFLOW: "Arithmetic overflow",
    WagerErrorCode.ARITHMETIC_UNDERFLOW: "Arithmetic underflow",
    WagerErrorCode.ARITHMETIC_ERROR: "Arithmetic error (division by zero)",
    WagerErrorCode.ALREADY_PROCESSING: "Session is already processing an instruction",
}


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    session_id: str | None = None
    instruction: str | None = None
    debug_info: dict[str, Any] | None = None
    # Set once the shell has logged this failure
    logged: bool = False


class WagerError(Exception):
    """Base exception for all wager guard errors."""

    def __init__(
        self,
        code: WagerErrorCode,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        self.message = message or _DEFAULT_MESSAGES[code]
        super().__init__(self.message)
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    @property
    def error_number(self) -> int:
        return self.code.error_number

    def to_response(self) -> dict:
        """Convert to the structured error envelope handed back to clients."""
        return {
            "error": {
                "code": self.code.value,
                "number": self.error_number,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "session_id": self.context.session_id,
                    "instruction": self.context.instruction,
                },
            }
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value})"


# ─── Input Errors ───────────────────────────────────────────────

class InputValidationError(WagerError):
    """Instruction argument rejected by a validator."""
    def __init__(
        self, code: WagerErrorCode, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            code, ErrorCategory.VALIDATION, ErrorSeverity.ERROR, message, context,
        )


# ─── Arithmetic Errors ──────────────────────────────────────────

class ArithmeticFault(WagerError):
    """Checked u64 operation failed. Never clamped, never defaulted."""
    def __init__(
        self, code: WagerErrorCode, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            code, ErrorCategory.ARITHMETIC, ErrorSeverity.CRITICAL, message, context,
        )


# ─── Concurrency Errors ─────────────────────────────────────────

class ReentrancyError(WagerError):
    """Session guard already held: nested entry into the critical section."""
    def __init__(
        self, message: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            WagerErrorCode.ALREADY_PROCESSING, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, message, context,
        )
