"""Structured logging for js-optimize.

This module provides:
- Structured logging setup via structlog
- A stage_operation context manager that logs start, completion and
  failure of a pipeline step together with its duration
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Iterator

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "js_optimize"

# Module-level logger
_logger: BoundLogger | None = None


def configure_logging(verbose: bool = False) -> None:
    """Configure structlog for a CLI invocation.

    Logs go to the error stream so that stdout only carries progress
    lines. Without verbose, only critical events are emitted; progress and
    errors reach the user through the rich console.

    Args:
        verbose: If True, emit debug-level events.
    """
    global _logger
    level = logging.DEBUG if verbose else logging.CRITICAL
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _logger = None


def get_logger() -> BoundLogger:
    """Get the module logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        >>> logger = get_logger()
        >>> logger.info("stage_skipped", stage="bundle")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(LOGGER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


@contextmanager
def stage_operation(name: str, **attrs: Any) -> Iterator[dict[str, Any]]:
    """Log a pipeline step with timing.

    The yielded dict may be updated by the caller; its contents are
    added to the completion event. On success it also receives
    ``duration_ms``.

    Args:
        name: Step name (e.g., "read", "transpile", "bundle").
        **attrs: Additional event attributes.

    Yields:
        Mutable dict of extra attributes for the completion event.

    Example:
        >>> with stage_operation("minify", input_bytes=120) as extra:
        ...     extra["output_bytes"] = 80
    """
    logger = get_logger()
    extra: dict[str, Any] = {}
    logger.debug(f"{name}_started", **attrs)
    start = time.perf_counter()
    try:
        yield extra
    except Exception as exc:
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.error(
            f"{name}_failed",
            error=str(exc),
            error_type=type(exc).__name__,
            duration_ms=duration_ms,
            **attrs,
        )
        raise
    extra["duration_ms"] = round((time.perf_counter() - start) * 1000, 2)
    logger.info(f"{name}_completed", **attrs, **extra)
