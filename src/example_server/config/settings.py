# Este archivo carga la configuración del servidor desde variables de entorno (una sola vez al arrancar).

"""
Configuration management using Pydantic Settings.

Loads configuration from unprefixed environment variables
(BOOT_DELAY_SEC, S3_TEST_FILE, EFS_TEST_FILE, SERVER_TEXT, LOG_*).
"""
from pathlib import Path
from typing import Any

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigurationError  # Excepción personalizada para errores de config


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore"
    )

    # Boot sequence
    boot_delay_sec: int = 0

    # Content sources
    s3_test_file: str | None = None
    efs_test_file: Path | None = None
    server_text: str | None = None

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_dir: Path | None = None

    @field_validator("boot_delay_sec", mode="before")
    @classmethod
    def coerce_boot_delay(cls, v: Any) -> int:
        """Fall back to no delay when the value is missing, malformed or negative."""
        if v is None:
            return 0
        try:
            delay = int(str(v).strip())
        except ValueError:
            return 0
        return max(delay, 0)

    @field_validator("s3_test_file", "efs_test_file", "server_text", mode="before")
    @classmethod
    def empty_as_unset(cls, v: Any) -> Any:
        """Treat empty strings the same as an unset variable."""
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of {valid_levels}")
        return v_upper

    @property
    def s3_source_configured(self) -> bool:
        """True when the object store branch applies."""
        return bool(self.s3_test_file and self.server_text)

    @property
    def efs_source_configured(self) -> bool:
        """True when the shared filesystem branch applies."""
        return bool(self.efs_test_file and self.server_text)


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get or create settings singleton instance.

    Raises:
        ConfigurationError: If a logging setting is invalid
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                context={"errors": e.errors(include_url=False)}
            ) from e
    return _settings
