from __future__ import annotations

from .base import DriftPatchError


class InvalidEditBlocksError(DriftPatchError, ValueError):
    """Edit blocks overlap or are not ordered top-to-bottom in the document."""

    def __init__(self, message: str, pairs: list[tuple[int, int]] | None = None):
        super().__init__(message)
        # 1-based block numbers of each offending pair
        self.pairs = list(pairs or [])
