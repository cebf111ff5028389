"""CLI entry point for js-optimize.

Defines the single `js-optimize` command: it parses the invocation
options, runs the layered pipeline, and maps pipeline errors to exit
codes.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click
import rich_click as rclick
from pydantic import ValidationError as PydanticValidationError

from js_optimize import __version__
from js_optimize.config import TOGGLE_TRUE, OptimizeOptions, parse_toggle
from js_optimize.errors import (
    EXIT_USER_ERROR,
    CLIError,
    OptimizeError,
    UsageError,
    format_pydantic_error,
    handle_pipeline_error,
)
from js_optimize.observability import configure_logging, get_logger
from js_optimize.output import set_no_color, warning
from js_optimize.pipeline import run_pipeline

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True

FC = TypeVar("FC", bound=Callable[..., Any])


def stage_toggle(flag: str, help_text: str) -> Callable[[FC], FC]:
    """Build a `--<flag> <true|false>` option.

    The option consumes exactly one following token. Only the literal
    "true" enables the stage; any other value, or no value at all,
    disables it.
    """
    return click.option(
        flag,
        type=str,
        default=TOGGLE_TRUE,
        is_flag=False,
        flag_value="false",
        metavar="true|false",
        show_default=True,
        help=help_text,
    )


@click.command(cls=rclick.RichCommand)
@click.version_option(version=__version__, prog_name="js-optimize")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    default=False,
    help="Emit debug-level structured logs on stderr.",
)
@click.argument("inputs", nargs=-1, metavar="INPUT_FILE")
@click.option(
    "--output",
    "output_path",
    type=str,
    default=None,
    is_flag=False,
    flag_value="",
    metavar="PATH",
    help="Output file [default: <input>.bundle.min.js in the current directory]",
)
@stage_toggle("--babel", "Transpile with Babel.")
@stage_toggle("--terser", "Minify the code (also enables esbuild minification).")
@stage_toggle("--esbuild", "Bundle with esbuild.")
def cli(
    inputs: tuple[str, ...],
    output_path: str | None,
    babel: str,
    terser: str,
    esbuild: str,
    verbose: bool,
) -> None:
    """Optimize a JavaScript file in layers.

    Runs the input through **Babel** (transpile), a **minifier** and
    **esbuild** (bundle), in that order, and writes the result.

    Examples:

        js-optimize app.js

        js-optimize app.js --output dist/app.min.js

        js-optimize app.js --esbuild false
    """
    configure_logging(verbose)

    if not inputs:
        raise CLIError(f"Error: {UsageError().message}", exit_code=EXIT_USER_ERROR)

    input_file, *ignored = inputs
    for extra in ignored:
        warning(f"Ignoring extra argument: {extra}")

    try:
        options = OptimizeOptions(
            input_path=Path(input_file),
            # a bare --output falls back to the derived default
            output_path=Path(output_path) if output_path else None,
            transpile_enabled=parse_toggle(babel),
            minify_enabled=parse_toggle(terser),
            bundle_enabled=parse_toggle(esbuild),
        )
    except PydanticValidationError as e:
        raise CLIError(format_pydantic_error(e), exit_code=EXIT_USER_ERROR) from None

    get_logger().debug(
        "options_parsed",
        input_path=str(options.input_path),
        stages=[stage.value for stage in options.enabled_stages()],
    )

    try:
        run_pipeline(options)
    except OptimizeError as err:
        handle_pipeline_error(err)


if __name__ == "__main__":
    cli()
