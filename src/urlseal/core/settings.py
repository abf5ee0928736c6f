"""
Library-wide defaults for urlseal using Pydantic v2 Settings.

Values here only provide defaults; every option can still be passed
explicitly to `HashConfiguration` or `FingerprintOptions`. Environment
variables use the ``URLSEAL_`` prefix with ``__`` as nested delimiter, e.g.
``URLSEAL_SIGNING__SIGNATURE_KEY=sig``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)

DEFAULT_SIGNATURE_KEY = "_signature"
DEFAULT_TIMEOUT_KEY = "_expires"
DEFAULT_ALGORITHM = "sha256"


class CoreSettings(BaseModel):
    """Cross-cutting switches."""

    # Structured internal diagnostics for rejected URLs and crypto failures
    internal_logging_enabled: bool = Field(
        default=False,
        description="Emit DEBUG/WARN diagnostics to stderr",
    )
    diagnostics_rate_limit_per_minute: int = Field(
        default=60,
        ge=0,
        description="Maximum diagnostics per component per minute (0 disables limit)",
    )


class SigningSettings(BaseModel):
    """Defaults for signed URLs."""

    signature_key: str = Field(
        default=DEFAULT_SIGNATURE_KEY,
        min_length=1,
        description="Query key carrying the signature",
    )
    timeout_key: str = Field(
        default=DEFAULT_TIMEOUT_KEY,
        min_length=1,
        description="Query key carrying the expiry timestamp",
    )
    algorithm: str = Field(
        default=DEFAULT_ALGORITHM,
        description="HMAC hash algorithm used for signatures",
    )


class FingerprintSettings(BaseModel):
    """Defaults for URL fingerprints."""

    hash_algo: str = Field(
        default=DEFAULT_ALGORITHM,
        description="HMAC hash algorithm used for fingerprint digests",
    )

    @field_validator("hash_algo")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class Settings(BaseSettings):
    """Top-level settings model."""

    core: CoreSettings = Field(default_factory=CoreSettings)
    signing: SigningSettings = Field(default_factory=SigningSettings)
    fingerprint: FingerprintSettings = Field(default_factory=FingerprintSettings)

    model_config = SettingsConfigDict(
        env_prefix="URLSEAL_",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return process-wide settings, read from the environment once."""
    return Settings()


def reset_settings_cache() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
