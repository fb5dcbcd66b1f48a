"""Settings loading utilities for mozconfig."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import ValidationError

from mozconfig.models import MozconfigSettings

SETTINGS_FILENAME: Final[str] = "settings.yml"
DEFAULT_ENV_PREFIX: Final[str] = "MOZCONFIG_"

EnvMapping = Mapping[str, str]


class SettingsError(RuntimeError):
    """Raised when user settings cannot be loaded or parsed."""


def default_settings_path() -> Path:
    """Return the location of the per-user settings file."""
    return Path.home() / ".config" / "mozconfig" / SETTINGS_FILENAME


def load_settings(
    settings_path: Path | None = None,
    *,
    env: EnvMapping | None = None,
    env_prefix: str = DEFAULT_ENV_PREFIX,
) -> MozconfigSettings:
    """Load settings from YAML, apply environment overrides and validate.

    Args:
        settings_path: Settings file to read. Defaults to the per-user file.
        env: Environment mapping used for overrides. Defaults to os.environ.
        env_prefix: Prefix shared by all recognized environment variables.

    Returns:
        Validated settings. A missing settings file yields defaults.

    Raises:
        SettingsError: If the file is malformed or values fail validation.
    """
    path = settings_path or default_settings_path()
    raw_data = _load_yaml_mapping(path) if path.exists() else {}
    env_mapping = os.environ if env is None else env
    merged = {**raw_data, **_extract_env_overrides(env_mapping, env_prefix)}

    try:
        return MozconfigSettings(**merged)
    except ValidationError as exc:
        msg = f"Invalid settings: {exc}"
        raise SettingsError(msg) from exc


def _load_yaml_mapping(settings_path: Path) -> dict[str, Any]:
    """Load YAML data from disk ensuring a mapping result."""
    try:
        raw = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        msg = f"Unable to parse {settings_path}: {exc}"
        raise SettingsError(msg) from exc
    except OSError as exc:
        msg = f"Unable to read {settings_path}: {exc}"
        raise SettingsError(msg) from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        msg = f"{settings_path.name} must contain a YAML mapping"
        raise SettingsError(msg)
    return raw


def _extract_env_overrides(env: EnvMapping, prefix: str) -> dict[str, Any]:
    """Return settings overrides sourced from environment variables."""
    normalized_prefix = prefix.strip().upper()
    upper_env = {key.upper(): value for key, value in env.items()}

    mapping: dict[str, str] = {
        f"{normalized_prefix}ROOT": "root",
        f"{normalized_prefix}VERBOSE": "verbose",
    }

    overrides: dict[str, Any] = {}
    for env_key, field_name in mapping.items():
        if env_key in upper_env:
            overrides[field_name] = upper_env[env_key].strip()
    return overrides
