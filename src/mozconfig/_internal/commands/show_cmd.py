"""Show command implementation."""

from __future__ import annotations

from mozconfig import Mozconfig
from mozconfig._internal.state import CLIState


def execute_show_command(state: CLIState, mozconfig: Mozconfig) -> str | None:
    """Print the active configuration name if there is one.

    Args:
        state: CLI state.
        mozconfig: Store bound to the discovered root.

    Returns:
        The active configuration name, or None when nothing is active.

    Raises:
        StoreIOError: If the active pointer exists but cannot be resolved.
    """
    active = mozconfig.current()
    if active is None:
        state.error_console.print(f"[warning]No configuration is active in {mozconfig}.[/warning]")
        return None

    state.console.print(active, markup=False)
    return active
