"""js-optimize - layered JavaScript optimization.

Pipes a JavaScript file through a transpiler (Babel), a minifier and a
bundler (esbuild), in that order, and writes the combined result.
"""

from __future__ import annotations

from js_optimize.config import OptimizeOptions, StageName
from js_optimize.errors import (
    BundleError,
    FileReadError,
    FileWriteError,
    MinifyError,
    OptimizeError,
    StageError,
    TranspileError,
    UsageError,
)
from js_optimize.pipeline import (
    LayeredPipeline,
    PipelineResult,
    PipelineState,
    run_pipeline,
)

__version__ = "0.1.0"

__all__ = [
    "BundleError",
    "FileReadError",
    "FileWriteError",
    "LayeredPipeline",
    "MinifyError",
    "OptimizeError",
    "OptimizeOptions",
    "PipelineResult",
    "PipelineState",
    "StageError",
    "StageName",
    "TranspileError",
    "UsageError",
    "__version__",
    "run_pipeline",
]
