from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings, read from ``TRANSFER_*`` environment variables."""

    app_name: str = "Account Transfer API"
    database_url: str = "sqlite:///account_transfer.db"
    log_level: str = "INFO"
    # Transfers into this account id fail after the debit. Test hook only.
    fault_injection_account_id: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TRANSFER_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("fault_injection_account_id")
    @classmethod
    def _blank_disables_fault_injection(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            return None
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
