"""Pydantic configuration models for js-optimize.

This module provides:
- StageName: Enum of pipeline stages in execution order
- OptimizeOptions: Immutable invocation options
- parse_toggle: Boolean flag value parsing
- default_output_path: Output file name derived from the input
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Babel preset used by the transpile stage
TRANSPILE_PRESETS: tuple[str, ...] = ("latest",)

DEFAULT_OUTPUT_SUFFIX = ".bundle.min.js"
SOURCE_SUFFIX = ".js"

TOGGLE_TRUE = "true"


class StageName(str, Enum):
    """Transformation stages, declared in execution order."""

    TRANSPILE = "transpile"
    MINIFY = "minify"
    BUNDLE = "bundle"


def parse_toggle(value: str | None) -> bool:
    """Parse a stage toggle flag value.

    Only the exact, case-sensitive literal ``"true"`` enables a stage.
    Any other value, including a missing one, disables it.

    Example:
        >>> parse_toggle("true")
        True
        >>> parse_toggle("True")
        False
        >>> parse_toggle(None)
        False
    """
    return value == TOGGLE_TRUE


def default_output_path(input_path: Path | str, cwd: Path | None = None) -> Path:
    """Derive the default output path for an input file.

    The output lives in the current working directory and is named after
    the input basename with a trailing ``.js`` removed, followed by
    ``.bundle.min.js``.

    Args:
        input_path: Path of the source file.
        cwd: Directory to place the output in. Defaults to Path.cwd().

    Returns:
        Output file path.

    Example:
        >>> default_output_path("src/app.js", cwd=Path("/work"))
        PosixPath('/work/app.bundle.min.js')
        >>> default_output_path("src/app.mjs", cwd=Path("/work"))
        PosixPath('/work/app.mjs.bundle.min.js')
    """
    name = Path(input_path).name
    if name.endswith(SOURCE_SUFFIX) and name != SOURCE_SUFFIX:
        name = name[: -len(SOURCE_SUFFIX)]
    return (cwd if cwd is not None else Path.cwd()) / f"{name}{DEFAULT_OUTPUT_SUFFIX}"


class OptimizeOptions(BaseModel):
    """Invocation options for one pipeline run.

    Constructed once from the command line and read-only thereafter.

    Attributes:
        input_path: Source file to optimize (required).
        output_path: Destination file. Derived from input_path when None.
        transpile_enabled: Run the transpile stage (default True).
        minify_enabled: Run the minify stage (default True).
        bundle_enabled: Run the bundle stage (default True).

    Example:
        >>> options = OptimizeOptions(input_path=Path("app.js"), bundle_enabled=False)
        >>> options.enabled_stages()
        [<StageName.TRANSPILE: 'transpile'>, <StageName.MINIFY: 'minify'>]
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_path: Path = Field(
        ...,
        description="Source file to optimize",
    )
    output_path: Path | None = Field(
        default=None,
        description="Destination file; defaults to <basename>.bundle.min.js in the cwd",
    )
    transpile_enabled: bool = Field(
        default=True,
        description="Transpile with Babel",
    )
    minify_enabled: bool = Field(
        default=True,
        description="Minify the transpiled code",
    )
    bundle_enabled: bool = Field(
        default=True,
        description="Bundle with esbuild",
    )

    @field_validator("input_path")
    @classmethod
    def validate_input_not_empty(cls, v: Path) -> Path:
        """Validate that the input path names something."""
        if not str(v).strip():
            msg = "Input path cannot be empty"
            raise ValueError(msg)
        return v

    @property
    def resolve_dir(self) -> Path:
        """Directory that bundler imports are resolved against."""
        return self.input_path.parent

    def resolved_output_path(self, cwd: Path | None = None) -> Path:
        """Return the explicit output path, or the derived default."""
        if self.output_path is not None:
            return self.output_path
        return default_output_path(self.input_path, cwd=cwd)

    def is_enabled(self, stage: StageName) -> bool:
        """Return whether the given stage is switched on."""
        return {
            StageName.TRANSPILE: self.transpile_enabled,
            StageName.MINIFY: self.minify_enabled,
            StageName.BUNDLE: self.bundle_enabled,
        }[stage]

    def enabled_stages(self) -> list[StageName]:
        """Return the enabled stages in execution order."""
        return [stage for stage in StageName if self.is_enabled(stage)]
