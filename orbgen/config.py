"""Configuration loader for the payload wizard."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml


class ConfigurationError(RuntimeError):
    """Raised when configuration is invalid."""


DEFAULT_CONFIG_PATH = Path.home() / ".orbgen.yaml"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class WizardConfig:
    """Settings that shape validation and logging of a wizard run."""

    allow_random_values: bool = True
    recipient_prefix: str | None = None
    log_level: str = "WARNING"

    @property
    def log_level_number(self) -> int:
        return getattr(logging, self.log_level)


def _load_config_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise ConfigurationError(f"Config file not found: {path}")
        return {}

    try:
        loaded = yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as exc:  # pragma: no cover - delegated to PyYAML
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected {path} to contain a YAML object with a 'wizard' section")
    return loaded


def _coerce_bool(value: Any, *, source: str) -> bool | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "y", "on"}:
            return True
        if normalized in {"0", "false", "no", "n", "off"}:
            return False
    raise ConfigurationError(f"Invalid boolean in {source}: {value}")


def _coerce_log_level(value: Any, *, source: str) -> str | None:
    if value is None or value == "":
        return None
    normalized = str(value).strip().upper()
    if normalized not in _LOG_LEVELS:
        raise ConfigurationError(f"Invalid log level in {source}: {value}")
    return normalized


def _coerce_prefix(value: Any, *, source: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"Invalid address prefix in {source}: {value}")
    return value.strip() or None


def _first_value(*values: Any, default: Any = None) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


def load_wizard_config(
    *,
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> WizardConfig:
    """Load wizard settings from overrides, environment and optional YAML."""

    env_map = os.environ if env is None else env
    if config_path is None and env_map.get("ORBGEN_CONFIG"):
        config_path = env_map["ORBGEN_CONFIG"]
    explicit_path = config_path is not None
    path = Path(config_path).expanduser() if explicit_path else DEFAULT_CONFIG_PATH

    file_config = _load_config_file(path, required=explicit_path)
    section = file_config.get("wizard", {}) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Expected 'wizard' to be a mapping in {path}")

    override_map = dict(overrides or {})

    allow_random = _first_value(
        _coerce_bool(override_map.get("allow_random_values"), source="overrides"),
        _coerce_bool(env_map.get("ORBGEN_ALLOW_RANDOM"), source="environment"),
        _coerce_bool(section.get("allow_random_values"), source=f"{path} wizard.allow_random_values"),
        default=True,
    )
    recipient_prefix = _first_value(
        _coerce_prefix(override_map.get("recipient_prefix"), source="overrides"),
        _coerce_prefix(env_map.get("ORBGEN_RECIPIENT_PREFIX"), source="environment"),
        _coerce_prefix(section.get("recipient_prefix"), source=f"{path} wizard.recipient_prefix"),
    )
    log_level = _first_value(
        _coerce_log_level(override_map.get("log_level"), source="overrides"),
        _coerce_log_level(env_map.get("ORBGEN_LOG_LEVEL"), source="environment"),
        _coerce_log_level(section.get("log_level"), source=f"{path} wizard.log_level"),
        default="WARNING",
    )

    return WizardConfig(
        allow_random_values=bool(allow_random),
        recipient_prefix=recipient_prefix,
        log_level=log_level,
    )
