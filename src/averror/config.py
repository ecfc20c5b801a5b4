"""Runtime configuration loader for the averror command line tool."""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .codes import AV_ERROR_MAX_STRING_SIZE

LOGGER = logging.getLogger(__name__)

CONFIG_FILENAME = "averror.config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def config_file_path(config_path: Path | str | None = None) -> Path:
    """Return the resolved configuration file path."""

    if config_path is None:
        return Path.cwd() / CONFIG_FILENAME
    if isinstance(config_path, Path):
        return config_path
    return Path(config_path)


DEFAULT_SETTINGS: dict[str, Any] = {
    "version": 1,
    "strerror": {
        "buffer_size": AV_ERROR_MAX_STRING_SIZE,
        "show_tag": False,
    },
    "logging": {
        "level": "WARNING",
    },
}


class ConfigurationError(RuntimeError):
    """Raised when the YAML configuration cannot be loaded."""


@dataclass(frozen=True)
class StrerrorSettings:
    buffer_size: int
    show_tag: bool


@dataclass(frozen=True)
class LoggingSettings:
    level: str


@dataclass(frozen=True)
class AppSettings:
    strerror: StrerrorSettings
    logging: LoggingSettings
    raw: dict[str, Any]


def load_settings(config_path: Path | str | None = None) -> AppSettings:
    """Load settings from YAML merged over the defaults.

    A missing file yields the defaults; the file is only written by
    :func:`write_default_config`.
    """

    path = config_file_path(config_path)
    try:
        data = _read_config(path)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {path}\n{exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Failed to read configuration file: {path}\n{exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file must contain a mapping: {path}")
    merged = _merge_with_defaults(copy.deepcopy(DEFAULT_SETTINGS), data)
    return _build_settings(merged)


def write_default_config(destination: Path | str) -> Path:
    """Write the default configuration template to ``destination``.

    Raises :class:`ConfigurationError` when the file cannot be written.
    """

    target = Path(destination)
    if not _write_yaml(target, copy.deepcopy(DEFAULT_SETTINGS)):
        raise ConfigurationError(f"Failed to write configuration file: {target}")
    return target


def _read_config(path: Path) -> Any:
    if not path.exists():
        return copy.deepcopy(DEFAULT_SETTINGS)
    with path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle)
    if loaded is None:
        return {}
    return loaded


def _write_yaml(path: Path, data: dict[str, Any]) -> bool:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=False)
    except OSError as exc:
        LOGGER.warning("Failed to write configuration %s: %s", path, exc)
        return False
    return True


def _merge_with_defaults(defaults: dict[str, Any], user_values: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for key in user_values:
        merged[key] = user_values[key]
    for key, value in defaults.items():
        if key not in user_values or user_values[key] is None:
            merged[key] = copy.deepcopy(value)
            continue
        if isinstance(value, dict) and isinstance(user_values.get(key), dict):
            merged[key] = _merge_with_defaults(value, user_values[key])
        else:
            merged[key] = user_values[key]
    return merged


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration section '{key}' must be a mapping")
    return value


def _build_settings(data: dict[str, Any]) -> AppSettings:
    strerror = _build_strerror_settings(_section(data, "strerror"))
    logging_settings = _build_logging_settings(_section(data, "logging"))
    return AppSettings(strerror=strerror, logging=logging_settings, raw=data)


def _build_strerror_settings(data: dict[str, Any]) -> StrerrorSettings:
    defaults = DEFAULT_SETTINGS["strerror"]
    try:
        buffer_size = int(data.get("buffer_size", defaults["buffer_size"]))
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"strerror.buffer_size must be an integer: {exc}") from exc
    if buffer_size <= 0:
        buffer_size = defaults["buffer_size"]
    show_tag = data.get("show_tag", defaults["show_tag"])
    if not isinstance(show_tag, bool):
        raise ConfigurationError(f"strerror.show_tag must be true or false: {show_tag!r}")
    return StrerrorSettings(buffer_size=buffer_size, show_tag=show_tag)


def _build_logging_settings(data: dict[str, Any]) -> LoggingSettings:
    level = str(data.get("level", DEFAULT_SETTINGS["logging"]["level"])).upper()
    if level not in LOG_LEVELS:
        LOGGER.warning("Unknown log level %r in configuration; using WARNING", level)
        level = DEFAULT_SETTINGS["logging"]["level"]
    return LoggingSettings(level=level)

