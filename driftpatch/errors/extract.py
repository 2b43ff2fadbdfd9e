from .base import DriftPatchError


class ExtractError(DriftPatchError):
    """Model output could not be parsed into edit blocks."""
