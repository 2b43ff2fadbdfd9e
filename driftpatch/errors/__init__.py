from .base import DriftPatchError
from .extract import ExtractError
from .patch import InvalidEditBlocksError
from .store import (
    PathViolation,
    StoreError,
    StoreNotFoundError,
    TransportError,
    VersionConflictError,
)

__all__ = [
    "DriftPatchError",
    "ExtractError",
    "InvalidEditBlocksError",
    "StoreError",
    "TransportError",
    "StoreNotFoundError",
    "VersionConflictError",
    "PathViolation",
]
