"""Instruction Schemas — Pydantic models for the argument shapes of incoming instructions.

Invariants:
    - Addresses decode from 64-char hex (or raw 32 bytes) into 32-byte values
    - Integer fields are bounded to their wire width (u8 teams, u64 amounts)
    - Unknown fields rejected; models are immutable once parsed
    - Schemas never apply domain rules: a team of 7 parses, validate_team_number rejects it

Design Decisions:
    - field_validator for address decoding: keeps the hex format in one place
    - to_kill_record() hands the core a KillRecord, not a pydantic model
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wager_guard.core.domain_types import (
    ADDRESS_LENGTH,
    U64_MAX,
    Address,
    KillRecord,
    TeamSelector,
)


U8_MAX = 255


def decode_address(value: object) -> bytes:
    """Decode a hex string or raw bytes into a 32-byte address."""
    if isinstance(value, str):
        text = value.removeprefix("0x")
        if len(text) != ADDRESS_LENGTH * 2:
            raise ValueError(
                f"address must be {ADDRESS_LENGTH * 2} hex characters"
            )
        try:
            return bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError("address is not valid hex") from exc
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_LENGTH:
            raise ValueError(f"address must be {ADDRESS_LENGTH} bytes")
        return bytes(value)
    raise ValueError("address must be a hex string or bytes")


class _Instruction(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    session_id: str


class JoinInstruction(_Instruction):
    """join_user: a player picks a side."""
    team: int = Field(ge=0, le=U8_MAX)


class BetInstruction(_Instruction):
    """A wager placed against a session."""
    bet_amount: int = Field(ge=0, le=U64_MAX)


class RecordKillInstruction(_Instruction):
    """record_kill: the game server reports one kill."""
    killer: bytes
    victim: bytes
    killer_team: int = Field(ge=0, le=U8_MAX)
    victim_team: int = Field(ge=0, le=U8_MAX)

    @field_validator("killer", "victim", mode="before")
    @classmethod
    def decode_player(cls, v: object) -> bytes:
        return decode_address(v)

    def to_kill_record(self) -> KillRecord:
        return KillRecord(
            killer=Address(self.killer),
            victim=Address(self.victim),
            killer_team=TeamSelector(self.killer_team),
            victim_team=TeamSelector(self.victim_team),
        )


class DistributeInstruction(_Instruction):
    """distribute_winnings: pay out the winning team's remaining accounts."""
    winning_team: int = Field(ge=0, le=U8_MAX)
    remaining_accounts: int = Field(ge=0)
