"""CLI state management."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

from mozconfig.models import MozconfigSettings

CLI_THEME: Final[Theme] = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "green",
        "text": "white",
    }
)


@dataclass(slots=True)
class CLIState:
    """State shared by the helpers of a single CLI invocation.

    Results go to `console` (stdout); errors, warnings and diagnostics go to
    `error_console` (stderr) so command output stays parseable.
    """

    console: Console
    error_console: Console
    settings: MozconfigSettings
    verbose: bool


def build_console(verbose: bool, *, stderr: bool = False) -> Console:
    """Return a Rich console configured with project-specific styling.

    Args:
        verbose: Whether to enable verbose logging with timestamps.
        stderr: Whether to write to standard error instead of standard output.

    Returns:
        Configured Console instance.
    """
    return Console(
        theme=CLI_THEME,
        highlight=False,
        soft_wrap=True,
        stderr=stderr,
        log_path=False,
        log_time=verbose,
    )


def log_verbose(state: CLIState, message: str) -> None:
    """Emit a diagnostic line when verbose output is enabled."""
    if state.verbose:
        state.error_console.log(f"[info]{escape(message)}[/info]")
