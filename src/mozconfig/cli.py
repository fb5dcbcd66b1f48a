"""Typer CLI application for mozconfig."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.markup import escape

from mozconfig import (
    ConfigAlreadyExistsError,
    Mozconfig,
    MozconfigError,
    MozconfigSettings,
    SettingsError,
    __version__,
    load_settings,
)
from mozconfig._internal.commands.activate_cmd import execute_activate_command
from mozconfig._internal.commands.create_cmd import execute_create_command
from mozconfig._internal.commands.list_cmd import execute_list_command
from mozconfig._internal.commands.show_cmd import execute_show_command
from mozconfig._internal.state import CLIState, build_console, log_verbose

_MISSING_ROOT_MESSAGE = '".mozconfig" file not found. Run "mozconfig --create <name>" to create one.'

app = typer.Typer(
    add_completion=False,
    pretty_exceptions_enable=False,
    help="Switch between named .mozconfig build configurations.",
)


def _version_callback(value: bool) -> None:
    if value:
        build_console(verbose=False).print(f"[success]mozconfig {__version__}[/success]")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    list_configs: bool = typer.Option(False, "--list", "-l", help="List all available configurations."),
    create: str | None = typer.Option(
        None,
        "--create",
        "-c",
        metavar="NAME",
        help="Create a new .mozconfig configuration with the given name.",
    ),
    activate: str | None = typer.Option(
        None,
        "--activate",
        "-a",
        metavar="NAME",
        help="Make the configuration with the given name active.",
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        "-r",
        help="Manually set the directory where .mozconfig files are searched for.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose console output."),
    version: bool = typer.Option(
        False,
        "--version",
        is_eager=True,
        callback=_version_callback,
        help="Show the installed mozconfig version and exit.",
    ),
) -> None:
    """Show the active configuration, or list, create or activate one.

    Args:
        ctx: Typer context for the current invocation.
        list_configs: Whether to list every configuration.
        create: Name of a configuration to create.
        activate: Name of a configuration to activate.
        root: Directory to start the upward search from.
        verbose: Whether to enable verbose console logging.
        version: Handled eagerly by the version callback.

    Raises:
        typer.BadParameter: When more than one action is requested.
    """
    requested = (
        ("--list", list_configs),
        ("--create", create is not None),
        ("--activate", activate is not None),
    )
    actions = [flag for flag, chosen in requested if chosen]
    if len(actions) > 1:
        raise typer.BadParameter(f"{' and '.join(actions)} cannot be combined")

    state = _build_state(ctx, verbose=verbose)
    start_path = _resolve_start_path(state, root)
    mozconfig = Mozconfig.from_child_path(start_path)
    if mozconfig is None:
        log_verbose(state, f"No configuration root found above {start_path}")
    else:
        log_verbose(state, f"Using configuration root {mozconfig}")

    if create is not None:
        _run_create(state, mozconfig, create, start_path)
        return

    if mozconfig is None:
        _abort(state, _MISSING_ROOT_MESSAGE)

    if list_configs:
        try:
            execute_list_command(state, mozconfig)
        except MozconfigError as exc:
            _abort(state, f"Could not list configurations ({escape(str(exc))})")
        return

    if activate is not None:
        try:
            execute_activate_command(state, mozconfig, activate)
        except MozconfigError as exc:
            _abort(state, f"Could not activate configuration ({escape(str(exc))})")
        return

    try:
        active = execute_show_command(state, mozconfig)
    except MozconfigError as exc:
        _abort(state, f"Could not read the active configuration ({escape(str(exc))})")
    if active is None:
        raise typer.Exit(code=1)


def _run_create(state: CLIState, mozconfig: Mozconfig | None, name: str, start_path: Path) -> None:
    """Create a configuration and map store failures to CLI errors."""
    try:
        execute_create_command(state, mozconfig, name, start_path)
    except ConfigAlreadyExistsError:
        _abort(state, f'Configuration "{escape(name)}" already exists.')
    except MozconfigError as exc:
        location = mozconfig or start_path
        _abort(state, f"Could not create new configuration in {escape(str(location))} ({escape(str(exc))})")


def _build_state(ctx: typer.Context, *, verbose: bool) -> CLIState:
    """Load settings and store the CLI state on the Typer context.

    Args:
        ctx: Typer context.
        verbose: Whether verbose logging was requested on the command line.

    Returns:
        CLIState instance.
    """
    try:
        settings = load_settings()
    except SettingsError as exc:
        fallback = CLIState(
            console=build_console(verbose),
            error_console=build_console(verbose, stderr=True),
            settings=MozconfigSettings(),
            verbose=verbose,
        )
        _abort(fallback, escape(str(exc)))

    resolved_verbose = verbose or settings.verbose
    ctx.obj = state = CLIState(
        console=build_console(resolved_verbose),
        error_console=build_console(resolved_verbose, stderr=True),
        settings=settings,
        verbose=resolved_verbose,
    )
    return state


def _resolve_start_path(state: CLIState, root: Path | None) -> Path:
    """Return the directory discovery starts from.

    The command-line option wins over settings, which win over the current
    working directory.
    """
    if root is not None:
        start_path = root.expanduser()
    elif state.settings.root is not None:
        start_path = state.settings.root
    else:
        try:
            start_path = Path.cwd()
        except OSError as exc:
            _abort(state, f"Could not detect current directory ({escape(str(exc))})")

    log_verbose(state, f"Searching for .mozconfig starting at {start_path}")
    return start_path


def _abort(state: CLIState, message: str, *, exit_code: int = 1) -> NoReturn:
    """Print a styled error message and exit the CLI.

    Args:
        state: CLI state.
        message: Error message to display.
        exit_code: Exit code to use.
    """
    state.error_console.print(f"[error]Error:[/error] {message}")
    raise typer.Exit(code=exit_code)
