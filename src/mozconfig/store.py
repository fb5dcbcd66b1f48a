"""Named build configuration store backed by `.mozconfig-<name>` files."""

from __future__ import annotations

import errno
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from rich.console import Console

MOZCONFIG_PREFIX: Final[str] = ".mozconfig"
OBJDIR_TEMPLATE: Final[str] = "mk_add_options MOZ_OBJDIR=obj-{name}"

_CONFIG_FILE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.mozconfig-(\S+)")
_CONFIG_NAME_PATTERN: Final[re.Pattern[str]] = re.compile(r"[^\s/\x00]+")


class MozconfigError(RuntimeError):
    """Base class for configuration store failures."""


class ConfigDoesNotExistError(MozconfigError):
    """Raised when a configuration is requested that has no backing file."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Configuration "{name}" does not exist')
        self.name = name


class ConfigAlreadyExistsError(MozconfigError):
    """Raised when creating a configuration whose file is already present."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Configuration "{name}" already exists')
        self.name = name


class InvalidConfigNameError(MozconfigError, ValueError):
    """Raised when a name cannot be used as a configuration filename suffix."""

    def __init__(self, name: str) -> None:
        super().__init__(f'"{name}" is not a valid configuration name')
        self.name = name


class StoreIOError(MozconfigError):
    """Raised when the filesystem rejects a store operation."""

    def __init__(self, operation: str, path: Path, error: OSError) -> None:
        reason = error.strerror or str(error)
        super().__init__(f"Unable to {operation} {path}: {reason}")
        self.operation = operation
        self.path = path


def config_from_path(path: Path) -> str | None:
    """Return the configuration name encoded in a path's filename.

    Args:
        path: Any path; only its final component is inspected.

    Returns:
        The name following `.mozconfig-`, or None when the filename is not a
        configuration file (including the active pointer itself).
    """
    match = _CONFIG_FILE_PATTERN.fullmatch(path.name)
    if match is None:
        return None
    return match.group(1)


def validate_config_name(name: str) -> str:
    """Ensure the name can be used as a `.mozconfig-<name>` suffix.

    Raises:
        InvalidConfigNameError: If the name is empty or contains whitespace,
            path separators or NUL characters.
    """
    if not _CONFIG_NAME_PATTERN.fullmatch(name):
        raise InvalidConfigNameError(name)
    return name


def render_config(name: str) -> str:
    """Return the file contents written for a new configuration."""
    return OBJDIR_TEMPLATE.format(name=name)


@dataclass(frozen=True, slots=True)
class Mozconfig:
    """Handle over a directory holding named configurations and the active pointer.

    Concurrent activations from separate processes are not coordinated; the
    pointer is removed and recreated without locking.
    """

    root: Path

    def __str__(self) -> str:
        return str(self.root)

    @classmethod
    def from_path(cls, path: Path | str) -> Mozconfig:
        """Bind a store to an explicit root without touching the filesystem."""
        return cls(root=Path(path).expanduser())

    @classmethod
    def from_child_path(cls, start: Path | str) -> Mozconfig | None:
        """Search the start directory and each of its parents for a root.

        Args:
            start: Directory (or file) to begin the upward search from.

        Returns:
            A store bound to the first directory containing `.mozconfig`, or
            None when the filesystem root is reached without a match.
        """
        path = Path(start).expanduser().resolve()
        if path.is_file():
            path = path.parent

        for candidate in (path, *path.parents):
            if _entry_exists(candidate / MOZCONFIG_PREFIX):
                return cls(root=candidate)
        return None

    @property
    def active_symlink_path(self) -> Path:
        """Path to the symlink that marks the active configuration."""
        return self.root / MOZCONFIG_PREFIX

    def path_for_config(self, name: str) -> Path:
        """Return the path to the configuration file with the given name."""
        return self.root / f"{MOZCONFIG_PREFIX}-{name}"

    def list_configs(self) -> list[str]:
        """Return the names of all configurations under the root, sorted.

        Raises:
            StoreIOError: If the root directory cannot be read.
        """
        try:
            entries = list(self.root.iterdir())
        except OSError as exc:
            raise StoreIOError("list configurations in", self.root, exc) from exc

        names = (config_from_path(entry) for entry in entries)
        return sorted(name for name in names if name is not None)

    def config_exists(self, name: str) -> bool:
        """Return True if the configuration file exists.

        Errors raised while probing the filesystem are reported as a missing
        configuration.
        """
        try:
            self.path_for_config(name).stat()
        except (OSError, ValueError):
            return False
        return True

    def current(self) -> str | None:
        """Return the name of the active configuration.

        Returns:
            The active name, or None when no pointer exists or the pointer
            does not lead to a `.mozconfig-<name>` file.

        Raises:
            StoreIOError: If the pointer exists but cannot be resolved.
        """
        link = self.active_symlink_path
        if not _entry_exists(link):
            return None

        try:
            real = link.resolve(strict=True)
        except OSError as exc:
            raise StoreIOError("resolve active configuration", link, exc) from exc
        except RuntimeError as exc:
            # pathlib reports symlink loops as RuntimeError before Python 3.13.
            loop = OSError(errno.ELOOP, os.strerror(errno.ELOOP), str(link))
            raise StoreIOError("resolve active configuration", link, loop) from exc

        return config_from_path(real)

    def create(
        self,
        name: str,
        *,
        overwrite: bool = False,
        console: Console | None = None,
    ) -> Path:
        """Write a new configuration file and confirm it on the console.

        Args:
            name: Name of the configuration to create.
            overwrite: Replace an existing file instead of failing.
            console: Rich console that receives the confirmation line.

        Returns:
            Path to the written configuration file.

        Raises:
            InvalidConfigNameError: If the name is not a valid suffix.
            ConfigAlreadyExistsError: If the configuration exists and
                overwrite is False.
            StoreIOError: If the file cannot be written.
        """
        validate_config_name(name)
        if not overwrite and self.config_exists(name):
            raise ConfigAlreadyExistsError(name)

        path = self.path_for_config(name)
        try:
            path.write_text(render_config(name), encoding="utf-8")
        except OSError as exc:
            raise StoreIOError("write configuration", path, exc) from exc

        console_to_use = console or Console()
        console_to_use.print(f'Configuration "{name}" created.', markup=False)
        return path

    def activate(self, name: str) -> None:
        """Point the active symlink at the named configuration.

        Raises:
            InvalidConfigNameError: If the name is not a valid suffix.
            ConfigDoesNotExistError: If the configuration has no backing file.
            StoreIOError: If the old pointer cannot be removed or the new one
                cannot be created.
        """
        validate_config_name(name)
        if not self.config_exists(name):
            raise ConfigDoesNotExistError(name)

        link = self.active_symlink_path
        if _entry_exists(link):
            try:
                link.unlink()
            except OSError as exc:
                raise StoreIOError("remove active pointer", link, exc) from exc

        # Relative target keeps the pointer valid if the root is moved.
        target = self.path_for_config(name)
        try:
            link.symlink_to(target.name)
        except OSError as exc:
            raise StoreIOError("create active pointer", link, exc) from exc


def _entry_exists(path: Path) -> bool:
    """Return True if a directory entry exists, without following symlinks."""
    try:
        path.lstat()
    except OSError:
        return False
    return True
