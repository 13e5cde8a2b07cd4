"""
Shell configuration: pydantic models plus a YAML/environment loader.

Values are merged in the order defaults <- YAML file <- environment. A
``.env`` file in the working directory is loaded into the environment
before it is read.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator

from termshell.core.common.exceptions import ConfigurationError
from termshell.core.constants import (
    DEFAULT_COLUMNS,
    DEFAULT_PASSWORD_MASK,
    DEFAULT_PROMPT,
)
from termshell.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

ENV_PREFIX = "TERMSHELL_"


def _to_int(value: str, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.WARNING
    log_file: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class HistoryConfig(DomainModel):
    """Command history configuration."""

    file: str | None = None
    max_entries: int = Field(default=1000, ge=1)


class ShellConfig(DomainModel):
    """Top-level shell configuration."""

    prompt: str = DEFAULT_PROMPT
    password_mask: str = DEFAULT_PASSWORD_MASK
    welcome_message: bool = True
    default_columns: int = Field(default=DEFAULT_COLUMNS, ge=1)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)

    @field_validator("password_mask")
    @classmethod
    def validate_password_mask(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError("password_mask must be a single character")
        return v

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
        """
        Collect the configuration values set in the environment.

        Only variables that are present are returned, as a nested dict ready
        to merge over file values.
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}

        def _take(
            name: str,
            path: tuple[str, ...],
            transform: Callable[[str], Any] | None = None,
        ) -> None:
            raw = env.get(f"{ENV_PREFIX}{name}")
            if raw is None or raw == "":
                return
            target = overrides
            for key in path[:-1]:
                target = target.setdefault(key, {})
            target[path[-1]] = transform(raw) if transform else raw

        _take("PROMPT", ("prompt",))
        _take("LOG_LEVEL", ("logging", "level"))
        _take("LOG_FILE", ("logging", "log_file"))
        _take("HISTORY_FILE", ("history", "file"))
        _take(
            "HISTORY_MAX",
            ("history", "max_entries"),
            lambda value: _to_int(value, 1000),
        )
        return overrides


def _merge_dicts(base: dict[str, Any], override: Mapping[str, Any]) -> None:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge_dicts(base[key], value)
        else:
            base[key] = value


def _read_yaml(path: Path) -> dict[str, Any]:
    if path.suffix.lower() not in [".yaml", ".yml"]:
        raise ConfigurationError(
            f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml).",
            details={"path": str(path)},
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in configuration file {path}: {e}",
            details={"path": str(path)},
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping at the top level",
            details={"path": str(path)},
        )
    return data


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> ShellConfig:
    """
    Load configuration from file and environment.

    Args:
        config_path: Optional path to a YAML configuration file.
        environ: Environment to read instead of ``os.environ``. When given,
            no ``.env`` file is loaded.

    Returns:
        ShellConfig instance

    Raises:
        ConfigurationError: If the file is not YAML or fails validation.
    """
    if environ is None:
        load_dotenv()

    config_data: dict[str, Any] = ShellConfig().model_dump()

    if config_path:
        path = Path(config_path)
        if not path.exists():
            logger.warning("Configuration file not found: %s", config_path)
        else:
            _merge_dicts(config_data, _read_yaml(path))
            logger.debug("Loaded configuration file %s", path)

    _merge_dicts(config_data, ShellConfig.from_env(environ=environ))

    try:
        return ShellConfig.model_validate(config_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
        ) from e
