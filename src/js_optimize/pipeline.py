"""Layered optimization pipeline controller.

Reads a source file, applies the enabled transformation stages in the
fixed order transpile -> minify -> bundle, and writes the result.
The controller owns the single code buffer for the duration of a run.
Every stage runs exactly once; a failure aborts the run before anything
is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from js_optimize import output
from js_optimize.config import OptimizeOptions, StageName
from js_optimize.errors import FileReadError, FileWriteError, OptimizeError
from js_optimize.observability import get_logger, stage_operation
from js_optimize.stages import BabelTranspiler, EsbuildBundler, JsMinifier, Transformer


class PipelineState(str, Enum):
    """Progress of a pipeline run.

    Runs move forward only: IDLE -> READ -> (TRANSPILED) -> (MINIFIED)
    -> (BUNDLED) -> WRITTEN, or to ABORTED from any state.
    """

    IDLE = "idle"
    READ = "read"
    TRANSPILED = "transpiled"
    MINIFIED = "minified"
    BUNDLED = "bundled"
    WRITTEN = "written"
    ABORTED = "aborted"


STAGE_STATES: dict[StageName, PipelineState] = {
    StageName.TRANSPILE: PipelineState.TRANSPILED,
    StageName.MINIFY: PipelineState.MINIFIED,
    StageName.BUNDLE: PipelineState.BUNDLED,
}


@dataclass(frozen=True)
class StageReport:
    """Sizes and timing of one executed stage."""

    stage: str
    input_bytes: int
    output_bytes: int
    duration_ms: float


@dataclass
class PipelineResult:
    """Outcome of a successful run.

    Attributes:
        output_path: File the final code was written to.
        code: Final code.
        states: Ordered state history, starting with IDLE.
        reports: One report per executed stage, in execution order.
    """

    output_path: Path
    code: str
    states: list[PipelineState] = field(default_factory=list)
    reports: list[StageReport] = field(default_factory=list)

    @property
    def state(self) -> PipelineState:
        """Final state of the run."""
        return self.states[-1]

    @property
    def stages_run(self) -> list[str]:
        """Names of the stages that were executed."""
        return [report.stage for report in self.reports]


def _size(code: str) -> int:
    return len(code.encode("utf-8"))


class LayeredPipeline:
    """Run the enabled stages over one input file.

    Collaborators may be injected; any left as None is created from the
    options on first use.

    Attributes:
        options: Invocation options.
        states: State history of the current run.

    Example:
        >>> options = OptimizeOptions(input_path=Path("app.js"), bundle_enabled=False)
        >>> result = LayeredPipeline(options).run()
        >>> result.stages_run
        ['transpile', 'minify']
    """

    def __init__(
        self,
        options: OptimizeOptions,
        *,
        transpiler: Transformer | None = None,
        minifier: Transformer | None = None,
        bundler: Transformer | None = None,
        cwd: Path | None = None,
    ) -> None:
        self.options = options
        self.cwd = cwd
        self.states: list[PipelineState] = [PipelineState.IDLE]
        self._transformers: dict[StageName, Transformer | None] = {
            StageName.TRANSPILE: transpiler,
            StageName.MINIFY: minifier,
            StageName.BUNDLE: bundler,
        }

    @property
    def state(self) -> PipelineState:
        """Current state of the run."""
        return self.states[-1]

    def _advance(self, state: PipelineState) -> None:
        get_logger().debug("pipeline_state", state=state.value)
        self.states.append(state)

    def transformer_for(self, stage: StageName) -> Transformer:
        """Return the collaborator for a stage, creating the default if needed."""
        transformer = self._transformers[stage]
        if transformer is None:
            if stage is StageName.TRANSPILE:
                transformer = BabelTranspiler()
            elif stage is StageName.MINIFY:
                transformer = JsMinifier()
            else:
                transformer = EsbuildBundler(
                    self.options.resolve_dir,
                    minify=self.options.minify_enabled,
                    sourcefile=self.options.input_path.name,
                )
            self._transformers[stage] = transformer
        return transformer

    def read_source(self) -> str:
        """Read the input file as UTF-8 text.

        Raises:
            FileReadError: If the file is missing, unreadable, or not UTF-8.
        """
        path = self.options.input_path
        output.info(f"Reading input file: {path}", style=output.STAGE_STYLES["read"])
        with stage_operation("read", path=str(path)) as extra:
            try:
                code = path.read_text(encoding="utf-8")
            except FileNotFoundError as exc:
                raise FileReadError(str(path), cause="no such file") from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise FileReadError(str(path), cause=str(exc)) from exc
            extra["input_bytes"] = _size(code)
        return code

    def apply(self, stage: StageName, code: str) -> tuple[str, StageReport]:
        """Run one stage over the code.

        Returns:
            The transformed code and the stage report.

        Raises:
            StageError: If the collaborator fails.
        """
        transformer = self.transformer_for(stage)
        size_in = _size(code)
        output.stage_started(stage.value)
        with stage_operation(stage.value, input_bytes=size_in) as extra:
            code = transformer.transform(code)
            extra["output_bytes"] = _size(code)
        self._advance(STAGE_STATES[stage])
        output.stage_completed(stage.value, size_in, extra["output_bytes"])
        report = StageReport(
            stage=stage.value,
            input_bytes=size_in,
            output_bytes=extra["output_bytes"],
            duration_ms=extra["duration_ms"],
        )
        return code, report

    def write_output(self, path: Path, code: str) -> None:
        """Write the final code, overwriting any existing file.

        Raises:
            FileWriteError: If the destination cannot be written.
        """
        with stage_operation("write", path=str(path), output_bytes=_size(code)):
            try:
                path.write_text(code, encoding="utf-8")
            except OSError as exc:
                raise FileWriteError(str(path), cause=str(exc)) from exc

    def run(self) -> PipelineResult:
        """Execute the pipeline.

        Returns:
            PipelineResult describing the written output.

        Raises:
            OptimizeError: If any step fails. Nothing is written in that case.
        """
        output_path = self.options.resolved_output_path(cwd=self.cwd)
        reports: list[StageReport] = []
        try:
            code = self.read_source()
            self._advance(PipelineState.READ)

            for stage in self.options.enabled_stages():
                code, report = self.apply(stage, code)
                reports.append(report)

            self.write_output(output_path, code)
            self._advance(PipelineState.WRITTEN)
        except OptimizeError:
            self._advance(PipelineState.ABORTED)
            raise

        output.success(
            f"File optimized successfully. Output: {output_path}",
            style=output.STAGE_STYLES["write"],
        )
        return PipelineResult(
            output_path=output_path,
            code=code,
            states=list(self.states),
            reports=reports,
        )


def run_pipeline(options: OptimizeOptions, **kwargs: Any) -> PipelineResult:
    """Run a LayeredPipeline for the given options.

    Args:
        options: Invocation options.
        **kwargs: Collaborator overrides and cwd, passed to LayeredPipeline.

    Returns:
        PipelineResult of the run.
    """
    return LayeredPipeline(options, **kwargs).run()
