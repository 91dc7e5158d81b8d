"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (KAR_CERTIFICATE, KAR_PASSPHRASE, ...)
  - Fall back to a .env file at the project root
  - Validate the certificate path at startup
  - Keep the certificate passphrase out of logs and reprs (SecretStr)

`mode` is deliberately free text: an unknown value is not a configuration
error, the client falls back to the development host.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kar_client.domain.models import KAR_DEVELOPMENT

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"


class KarSettings(BaseSettings):
    """
    Settings for the KAR client.

    Load order (highest priority first):
      1. Environment variables (KAR_ prefix)
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="KAR_",
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    certificate: Path = Field(description="Path to the PKCS#12 (.p12) client certificate")
    passphrase: SecretStr = Field(
        default=SecretStr(""), description="Passphrase for the client certificate"
    )
    mode: str = Field(
        default=KAR_DEVELOPMENT, description="Service mode: development or production"
    )
    log_level: str = Field(default="INFO")

    @field_validator("certificate")
    @classmethod
    def certificate_must_exist(cls, value: Path) -> Path:
        """Fail at startup rather than on the first lookup."""
        if not value.is_file():
            raise ValueError(f"Certificate file not found: {value}")
        return value
