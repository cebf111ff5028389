"""Rich console output utilities for js-optimize.

This module provides formatted console output with Rich: colored
success/error/warning messages, per-stage progress lines, and
respect for the NO_COLOR environment variable.
"""

from __future__ import annotations

import os
from typing import Any

from rich.console import Console
from rich.markup import escape

# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None

# Display style per pipeline step
STAGE_STYLES: dict[str, str] = {
    "read": "blue",
    "transpile": "green",
    "minify": "yellow",
    "bundle": "magenta",
    "write": "cyan",
    "error": "red",
}

# Progress wording per transformation stage: (started, completed)
STAGE_MESSAGES: dict[str, tuple[str, str]] = {
    "transpile": ("Transpiling with Babel...", "Transpiling completed."),
    "minify": ("Minifying...", "Minification completed."),
    "bundle": ("Bundling with esbuild...", "Bundling completed."),
}


def create_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.
        stderr: If True, write to the error stream.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        stderr=stderr,
        highlight=False,
        soft_wrap=True,
    )


# Default console instances
console = create_console()
err_console = create_console(stderr=True)


def human_size(num_bytes: int) -> str:
    """Format a byte count for display.

    Example:
        >>> human_size(512)
        '512 B'
        >>> human_size(2048)
        '2.00 KB'
    """
    if num_bytes < 1024:
        return f"{num_bytes} B"
    value = float(num_bytes)
    for suffix in ("KB", "MB", "GB"):
        value /= 1024
        if value < 1024 or suffix == "GB":
            return f"{value:.2f} {suffix}"
    return f"{value:.2f} GB"


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Args:
        message: The message to display.
        **kwargs: Additional arguments passed to console.print().
    """
    console.print(f"[green]✓[/green] {escape(message)}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X on the error stream.

    Args:
        message: The error message to display.
        **kwargs: Additional arguments passed to console.print().

    Example:
        >>> error("Error during optimization: TranspileError: ...")
        ✗ Error during optimization: TranspileError: ...
    """
    err_console.print(f"[red]✗[/red] [{STAGE_STYLES['error']}]{escape(message)}[/]", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle on the error stream.

    Args:
        message: The warning message to display.
        **kwargs: Additional arguments passed to console.print().
    """
    err_console.print(f"[yellow]⚠[/yellow] {escape(message)}", **kwargs)


def info(message: str, *, style: str | None = None, **kwargs: Any) -> None:
    """Print an informational message.

    Args:
        message: The message to display.
        style: Optional Rich style for the whole line.
        **kwargs: Additional arguments passed to console.print().
    """
    console.print(escape(message), style=style, **kwargs)


def stage_started(stage: str) -> None:
    """Print the progress line shown before a stage runs."""
    info(STAGE_MESSAGES[stage][0], style=STAGE_STYLES[stage])


def stage_completed(stage: str, size_in: int, size_out: int) -> None:
    """Print the progress line shown after a stage finished.

    Args:
        stage: Stage name.
        size_in: Code size in bytes before the stage.
        size_out: Code size in bytes after the stage.
    """
    info(
        f"{STAGE_MESSAGES[stage][1]} ({human_size(size_in)} -> {human_size(size_out)})",
        style=STAGE_STYLES[stage],
    )


def set_no_color(no_color: bool) -> None:
    """Update the global consoles to enable/disable colors.

    Args:
        no_color: If True, disable colored output.

    Note:
        This updates the module-level console instances.
    """
    global console, err_console
    console = create_console(no_color=no_color)
    err_console = create_console(no_color=no_color, stderr=True)
