"""Base transformer interface for pipeline stages.

This module defines the Transformer abstract base class that every
collaborator adapter implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from js_optimize.config import StageName


class Transformer(ABC):
    """Abstract base class for transformation collaborators.

    A transformer is an opaque function from source text to transformed
    text. Implementations must raise the StageError subclass matching
    their stage when the underlying engine fails, chaining the original
    exception.

    Example:
        >>> class Upper(Transformer):
        ...     stage = StageName.MINIFY
        ...
        ...     def transform(self, code: str) -> str:
        ...         return code.upper()
    """

    stage: StageName

    @property
    def name(self) -> str:
        """Stage name used for progress output and logging."""
        return self.stage.value

    @abstractmethod
    def transform(self, code: str) -> str:  # pragma: no cover - abstract method
        """Transform code and return the result.

        Args:
            code: Current pipeline code.

        Returns:
            Transformed code.
        """
        ...
