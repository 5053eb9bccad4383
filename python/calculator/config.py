"""
Settings for serving the calculator.

Values come from an optional YAML file, then ``CALCULATOR_*`` environment
variables, then explicit overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from calculator.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "CALCULATOR_"
ENV_FIELDS = ("host", "port", "log_level")
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Server settings."""

    host: str = Field("127.0.0.1", description="Interface to bind")
    port: int = Field(8000, ge=1, le=65535, description="TCP port to bind")
    log_level: str = Field("INFO", description="Level for the calculator logger")
    template_dirs: dict[str, Path] = Field(
        default_factory=dict,
        description="Extra view namespaces mapped to template directories",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def read_config_file(path: str | Path) -> dict[str, Any]:
    """
    Read a YAML settings file.

    :raises ConfigError: If the file is missing, unparsable or not a mapping
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    return data


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> Settings:
    """
    Build Settings from file, environment and keyword overrides.

    Overrides whose value is None are ignored.

    :raises ConfigError: If any value is invalid
    """
    data: dict[str, Any] = {}
    if path is not None:
        data.update(read_config_file(path))
        logger.debug("Loaded settings from %s", path)

    env = os.environ if environ is None else environ
    for name in ENV_FIELDS:
        value = env.get(ENV_PREFIX + name.upper())
        if value is not None:
            data[name] = value

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
