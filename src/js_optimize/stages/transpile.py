"""Transpile stage: Babel via dukpy.

Rewrites modern JavaScript to ES5 using the Babel compiler that ships
with dukpy, so no Node.js installation is required for this stage.
"""

from __future__ import annotations

from collections.abc import Sequence

import dukpy
import structlog

from js_optimize.config import TRANSPILE_PRESETS, StageName
from js_optimize.errors import TranspileError
from js_optimize.stages.base import Transformer

logger = structlog.get_logger(__name__)


class BabelTranspiler(Transformer):
    """Transpile code with Babel using a fixed preset list.

    Attributes:
        presets: Babel presets passed to every compilation.

    Example:
        >>> BabelTranspiler().transform("const x = 1;")
        '"use strict";\\n\\nvar x = 1;'
    """

    stage = StageName.TRANSPILE

    def __init__(self, presets: Sequence[str] = TRANSPILE_PRESETS) -> None:
        self.presets = list(presets)

    def transform(self, code: str) -> str:
        logger.debug("babel_compile", presets=self.presets, input_bytes=len(code))
        try:
            result = dukpy.babel_compile(code, presets=self.presets)
        except Exception as exc:
            raise TranspileError("Babel failed to transpile the input", cause=str(exc)) from exc
        return result["code"]
