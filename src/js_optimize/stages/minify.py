"""Minify stage: rjsmin."""

from __future__ import annotations

import rjsmin

from js_optimize.config import StageName
from js_optimize.errors import MinifyError
from js_optimize.stages.base import Transformer


class JsMinifier(Transformer):
    """Strip comments and collapse whitespace with rjsmin.

    Attributes:
        keep_bang_comments: Preserve ``/*! ... */`` license comments.
    """

    stage = StageName.MINIFY

    def __init__(self, keep_bang_comments: bool = False) -> None:
        self.keep_bang_comments = keep_bang_comments

    def transform(self, code: str) -> str:
        try:
            return rjsmin.jsmin(code, keep_bang_comments=self.keep_bang_comments)
        except Exception as exc:
            raise MinifyError("Minifier failed on the input", cause=str(exc)) from exc
