"""Shared test fixtures for js-optimize tests.

Provides CliRunner fixtures, JavaScript source helpers and fake
collaborators for exercising the pipeline without external tools.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable, Generator
from pathlib import Path

from click.testing import CliRunner
import pytest
import structlog

from js_optimize import output
from js_optimize.config import StageName
from js_optimize.errors import StageError
from js_optimize.stages import Transformer

SAMPLE_JS = "const x = 1; console.log(x);\n"

requires_esbuild = pytest.mark.skipif(
    shutil.which("esbuild") is None,
    reason="esbuild executable not installed",
)


class RecordingTransformer(Transformer):
    """Fake collaborator that tags the code and records its calls."""

    def __init__(
        self,
        stage: StageName,
        calls: list[str] | None = None,
        fail_with: StageError | None = None,
    ) -> None:
        self.stage = stage
        self.calls = calls if calls is not None else []
        self.inputs: list[str] = []
        self.fail_with = fail_with

    def transform(self, code: str) -> str:
        self.calls.append(self.name)
        self.inputs.append(code)
        if self.fail_with is not None:
            raise self.fail_with
        return f"{code}/*{self.name}*/"


@pytest.fixture(autouse=True)
def plain_consoles() -> Generator[None, None, None]:
    """Use color-free consoles so output assertions see plain text."""
    original = (output.console, output.err_console)
    output.set_no_color(True)
    yield
    output.console, output.err_console = original


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo structlog configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    This fixture creates a temporary directory and changes to it
    for the duration of the test.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def write_js(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture writing a JavaScript file into tmp_path.

    Returns:
        Function taking (filename, content) and returning the file path.
    """

    def _write(filename: str = "app.js", content: str = SAMPLE_JS) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_js(write_js: Callable[[str, str], Path]) -> Path:
    """Return the path to a small ES2015 source file."""
    return write_js("app.js", SAMPLE_JS)


@pytest.fixture
def fake_stages() -> dict[str, RecordingTransformer]:
    """Return recording fakes for all three stages sharing one call log."""
    calls: list[str] = []
    return {
        "transpiler": RecordingTransformer(StageName.TRANSPILE, calls),
        "minifier": RecordingTransformer(StageName.MINIFY, calls),
        "bundler": RecordingTransformer(StageName.BUNDLE, calls),
    }
