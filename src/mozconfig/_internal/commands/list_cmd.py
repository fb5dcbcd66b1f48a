"""List command implementation."""

from __future__ import annotations

from mozconfig import Mozconfig
from mozconfig._internal.state import CLIState, log_verbose


def execute_list_command(state: CLIState, mozconfig: Mozconfig) -> list[str]:
    """Print every configuration name under the root, one per line.

    Args:
        state: CLI state.
        mozconfig: Store bound to the discovered root.

    Returns:
        The names that were printed.

    Raises:
        StoreIOError: If the root cannot be read.
    """
    names = mozconfig.list_configs()
    log_verbose(state, f"Found {len(names)} configuration(s) in {mozconfig}")
    for name in names:
        state.console.print(name, markup=False)
    return names
