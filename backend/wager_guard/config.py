"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a WAGER_-prefixed environment variable
    - get_settings() is cached (lru_cache), single instance per process
    - Protocol constants (bet ceiling, earnings divisor) are NOT settings; see core/domain_types

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box in tests
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Wager guard settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="WAGER_", case_sensitive=False,
    )

    # Instruction limits: two teams of five players
    max_remaining_accounts: int = 10

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("max_remaining_accounts")
    @classmethod
    def non_negative_ceiling(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_remaining_accounts must be >= 0")
        return v

    @field_validator("log_format")
    @classmethod
    def known_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
