"""Create command implementation."""

from __future__ import annotations

import contextlib
from pathlib import Path

from mozconfig import Mozconfig, MozconfigError
from mozconfig._internal.state import CLIState, log_verbose


def execute_create_command(
    state: CLIState,
    mozconfig: Mozconfig | None,
    name: str,
    start_path: Path,
) -> Mozconfig:
    """Create a configuration in the discovered root or initialize a new one.

    When no root was discovered the configuration is created in the start
    directory and activated, so later invocations discover that directory.
    If activation fails the new file is removed again.

    Args:
        state: CLI state.
        mozconfig: Store bound to the discovered root, if any.
        name: Name of the configuration to create.
        start_path: Directory used when no root exists yet.

    Returns:
        The store the configuration was written to.

    Raises:
        ConfigAlreadyExistsError: If the configuration already exists.
        InvalidConfigNameError: If the name is not a valid suffix.
        StoreIOError: If the configuration or pointer cannot be written.
    """
    if mozconfig is not None:
        mozconfig.create(name, console=state.console)
        return mozconfig

    target = Mozconfig.from_path(start_path)
    log_verbose(state, f"Initializing configuration root in {target}")
    path = target.create(name, console=state.console)
    try:
        target.activate(name)
    except MozconfigError:
        with contextlib.suppress(OSError):
            path.unlink()
        log_verbose(state, f"Removed {path} after activation failed")
        raise
    return target
