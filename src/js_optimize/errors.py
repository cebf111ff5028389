"""Error taxonomy and CLI error handling for js-optimize.

This module defines the exception hierarchy:
- OptimizeError (base)
- UsageError
- FileReadError
- FileWriteError
- StageError
  - TranspileError
  - MinifyError
  - BundleError

It also provides the CLI-facing CLIError and the mapping from pipeline
errors to process exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from js_optimize.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

# Process exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Usage error, transformation failure
EXIT_SYSTEM_ERROR = 2  # Filesystem error (read or write failure)


class OptimizeError(Exception):
    """Base exception for all js-optimize operations.

    Attributes:
        message: Human-readable error description.
        details: Optional additional context about the error.

    Example:
        >>> try:
        ...     pipeline.run()
        ... except OptimizeError as e:
        ...     print(f"Optimization failed: {e}")
    """

    def __init__(self, message: str, *, details: dict[str, str] | None = None) -> None:
        """Initialize OptimizeError.

        Args:
            message: Human-readable error description.
            details: Optional additional context about the error.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation with details if present."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class UsageError(OptimizeError):
    """The command line did not name an input file."""

    def __init__(self, message: str = "Please specify a JavaScript file to optimize.") -> None:
        super().__init__(message)


class FileReadError(OptimizeError):
    """Reading the input file failed.

    Raised when:
    - The input file does not exist
    - The path is a directory or is not readable
    - The file content is not valid UTF-8
    """

    def __init__(
        self,
        path: str,
        *,
        cause: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize FileReadError.

        Args:
            path: The input path that could not be read.
            cause: The underlying cause of the failure.
            message: Optional custom error message.
        """
        details = {"path": path}
        if cause:
            details["cause"] = cause
        super().__init__(message or f"Cannot read input file: {path}", details=details)
        self.path = path
        self.cause = cause


class FileWriteError(OptimizeError):
    """Writing the output file failed."""

    def __init__(
        self,
        path: str,
        *,
        cause: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize FileWriteError.

        Args:
            path: The output path that could not be written.
            cause: The underlying cause of the failure.
            message: Optional custom error message.
        """
        details = {"path": path}
        if cause:
            details["cause"] = cause
        super().__init__(message or f"Cannot write output file: {path}", details=details)
        self.path = path
        self.cause = cause


class StageError(OptimizeError):
    """A transformation collaborator failed.

    Attributes:
        stage: Name of the failing stage (transpile, minify, bundle).
        cause: The collaborator's own error text, if any.
    """

    stage = "stage"

    def __init__(self, message: str | None = None, *, cause: str | None = None) -> None:
        """Initialize StageError.

        Args:
            message: Human-readable error description.
            cause: The underlying cause reported by the collaborator.
        """
        details = {"stage": self.stage}
        if cause:
            details["cause"] = cause
        super().__init__(message or f"{self.stage.capitalize()} stage failed", details=details)
        self.cause = cause


class TranspileError(StageError):
    """The transpiler rejected the source (syntax error, unsupported construct)."""

    stage = "transpile"


class MinifyError(StageError):
    """The minifier failed on the current code."""

    stage = "minify"


class BundleError(StageError):
    """The bundler failed (unresolved import, missing executable, bad exit)."""

    stage = "bundle"


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Used when the exception is shown by plain click. Under
        ``rich_click.RichCommand`` rich-click renders ClickExceptions in
        its own error panel on stderr and this method is not called.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Invalid options:\\n  - input_path: Value error, Input path cannot be empty"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Invalid options:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def exit_code_for(err: OptimizeError) -> int:
    """Return the process exit code for a pipeline error.

    Filesystem failures map to EXIT_SYSTEM_ERROR, everything else
    (usage and transformation failures) to EXIT_USER_ERROR.

    Args:
        err: The error that aborted the run.

    Returns:
        Exit code for the CLI.
    """
    if isinstance(err, (FileReadError, FileWriteError)):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def handle_pipeline_error(err: OptimizeError) -> NoReturn:
    """Convert a pipeline error into a CLIError.

    Args:
        err: The error that aborted the run.

    Raises:
        CLIError: Always raises with the error type and detail.
    """
    raise CLIError(
        f"Error during optimization: {type(err).__name__}: {err}",
        exit_code=exit_code_for(err),
    ) from err
