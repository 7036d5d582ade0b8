"""Environment-driven settings for the command line and audit sink.

The engine core reads no configuration: its tables are constants in
:mod:`lifeos.governance.constitution`.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings


class OutputFormat(str, Enum):
    """Serialization format for printed results."""

    JSON = "json"
    YAML = "yaml"


class LifeOSSettings(BaseSettings):
    """Settings read from ``LIFEOS_*`` environment variables (or ``.env``)."""

    log_level: str = "INFO"
    output_format: OutputFormat = OutputFormat.JSON
    audit_enabled: bool = False
    audit_logger: str = "lifeos.audit"
    default_user_id: str = "cli"

    model_config = {"env_prefix": "LIFEOS_", "env_file": ".env", "extra": "ignore"}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def get_settings() -> LifeOSSettings:
    """Load settings from the current environment."""
    return LifeOSSettings()


def configure_logging(settings: LifeOSSettings) -> None:
    """Install a root handler at the configured level."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
