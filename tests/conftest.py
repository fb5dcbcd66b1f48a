"""Shared pytest fixtures for mozconfig."""

from __future__ import annotations

from pathlib import Path

import pytest

from mozconfig.store import Mozconfig


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at an empty directory and clear MOZCONFIG_* overrides."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for key in ("MOZCONFIG_ROOT", "MOZCONFIG_VERBOSE"):
        monkeypatch.delenv(key, raising=False)
    return home


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    """Provide an empty directory to host configurations."""
    root = tmp_path / "root"
    root.mkdir()
    return root


@pytest.fixture
def mozconfig(config_root: Path) -> Mozconfig:
    """Provide a store bound to an empty root."""
    return Mozconfig.from_path(config_root)


@pytest.fixture
def populated_root(config_root: Path) -> Path:
    """Create a root with three configurations and `debug` active."""
    for name in ("debug", "release", "test"):
        (config_root / f".mozconfig-{name}").write_text(f"mk_add_options MOZ_OBJDIR=obj-{name}")
    (config_root / ".mozconfig").symlink_to(".mozconfig-debug")
    return config_root
