class DriftPatchError(Exception):
    """Base class for every error raised by driftpatch."""
