"""Activate command implementation."""

from __future__ import annotations

from rich.markup import escape

from mozconfig import Mozconfig
from mozconfig._internal.state import CLIState, log_verbose


def execute_activate_command(state: CLIState, mozconfig: Mozconfig, name: str) -> None:
    """Make the named configuration active and confirm it.

    Raises:
        ConfigDoesNotExistError: If the configuration is missing.
        StoreIOError: If the active pointer cannot be replaced.
    """
    log_verbose(state, f"Pointing {mozconfig.active_symlink_path} at {mozconfig.path_for_config(name).name}")
    mozconfig.activate(name)
    state.console.print(f'[success]Configuration "{escape(name)}" is now active.[/success]')
