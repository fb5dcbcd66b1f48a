"""Public exports for the mozconfig package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from pathlib import Path

from .config import SETTINGS_FILENAME, SettingsError, default_settings_path, load_settings
from .models import MozconfigSettings
from .store import (
    MOZCONFIG_PREFIX,
    ConfigAlreadyExistsError,
    ConfigDoesNotExistError,
    InvalidConfigNameError,
    Mozconfig,
    MozconfigError,
    StoreIOError,
    config_from_path,
    render_config,
    validate_config_name,
)


def _load_local_version() -> str:
    """Return the package version declared in pyproject.toml when metadata is unavailable."""
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    try:
        data = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return "0.0.0"

    version_value = data.get("project", {}).get("version")
    if isinstance(version_value, str) and version_value.strip():
        return version_value.strip()
    return "0.0.0"


try:
    __version__ = pkg_version("mozconfig")
except PackageNotFoundError:
    __version__ = _load_local_version()

__all__ = [
    "MOZCONFIG_PREFIX",
    "SETTINGS_FILENAME",
    "ConfigAlreadyExistsError",
    "ConfigDoesNotExistError",
    "InvalidConfigNameError",
    "Mozconfig",
    "MozconfigError",
    "MozconfigSettings",
    "SettingsError",
    "StoreIOError",
    "__version__",
    "config_from_path",
    "default_settings_path",
    "load_settings",
    "render_config",
    "validate_config_name",
]
