"""Application settings and configuration management.

This module provides Pydantic-based settings that load from environment
variables (prefixed with ``CLOUDGATE_``) and an optional ``.env`` file.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cloudgate.constants import DEFAULT_REGIONS, DEFAULT_SOURCE_ACTION

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with a ``CLOUDGATE_``-prefixed variable.
    List-valued fields accept JSON, e.g.
    ``CLOUDGATE_REGIONS='["us-east-1", "eu-west-1"]'``.

    Example:
        >>> settings = Settings()
        >>> settings.regions[0]
        'us-east-1'
        >>> settings.page_size
        10
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # AWS Configuration
    # =========================================================================

    aws_profile: str | None = Field(
        default=None,
        description="Profile pre-selected for the non-interactive commands",
    )

    aws_region: str | None = Field(
        default=None,
        description="Region pre-selected for the non-interactive commands",
    )

    regions: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REGIONS),
        description="Regions offered in the region selection list",
    )

    default_source_action: str = Field(
        default=DEFAULT_SOURCE_ACTION,
        description="Source action name used for commit ID revision overrides",
    )

    # =========================================================================
    # Interface Configuration
    # =========================================================================

    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Rows skipped by page up / page down",
    )

    # =========================================================================
    # Logging Configuration
    # =========================================================================

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Application log level",
    )

    enable_audit_logging: bool = Field(
        default=True,
        description="Record approval decisions and pipeline starts in the log",
    )

    log_file: Path = Field(
        default=Path("~/.cloudgate/cloudgate.log"),
        description="Log file path; the terminal is reserved for the interface",
    )

    @field_validator("regions", mode="after")
    @classmethod
    def validate_regions(cls, v: list[str]) -> list[str]:
        """Strip blanks and duplicates from the region list.

        Args:
            v: The configured region list.

        Returns:
            The cleaned region list in configured order.

        Raises:
            ValueError: If no region remains after cleaning.
        """
        cleaned = list(dict.fromkeys(region.strip() for region in v if region.strip()))
        if not cleaned:
            raise ValueError("CLOUDGATE_REGIONS must contain at least one region")
        return cleaned

    @field_validator("log_file", mode="after")
    @classmethod
    def expand_log_file(cls, v: Path) -> Path:
        """Expand ``~`` in the log file path."""
        return v.expanduser()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are cached to avoid repeated environment variable reads
    and validation.

    Returns:
        Validated Settings instance.
    """
    return Settings()
