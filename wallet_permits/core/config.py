"""
Library configuration using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wallet_permits.core.crypto.bech32_codec import validate_hrp


class Settings(BaseSettings):
    """
    Process-wide settings loaded from environment variables.

    Values are read once at startup and never mutated, so they are safe to
    share between threads without synchronisation.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # ==========================================================================
    # Core Settings
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ==========================================================================
    # Permit Defaults
    # ==========================================================================
    permit_default_chain_id: str = Field(
        default="secret-4",
        min_length=1,
        description="Chain id placed in the signed envelope when the permit omits one",
    )
    permit_default_message_type: str = Field(
        default="signature_proof",
        min_length=1,
        description="Message type used when the caller supplies no override",
    )

    # ==========================================================================
    # Address Defaults
    # ==========================================================================
    address_default_prefix: str = Field(
        default="secret",
        description="Bech32 human-readable prefix for derived addresses",
    )

    @field_validator("address_default_prefix")
    @classmethod
    def _validate_address_prefix(cls, value: str) -> str:
        return validate_hrp(value)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings.

    Using lru_cache ensures settings are loaded once and reused,
    avoiding repeated environment variable parsing.
    """
    return Settings()
