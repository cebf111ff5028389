"""Transformation stage adapters.

Each adapter wraps one external engine behind the Transformer interface:
- BabelTranspiler: Babel (via dukpy)
- JsMinifier: rjsmin
- EsbuildBundler: the esbuild executable
"""

from __future__ import annotations

from js_optimize.stages.base import Transformer
from js_optimize.stages.bundle import EsbuildBundler, locate_esbuild
from js_optimize.stages.minify import JsMinifier
from js_optimize.stages.transpile import BabelTranspiler

__all__ = [
    "BabelTranspiler",
    "EsbuildBundler",
    "JsMinifier",
    "Transformer",
    "locate_esbuild",
]
