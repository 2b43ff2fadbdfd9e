from __future__ import annotations

from .base import DriftPatchError


class StoreError(DriftPatchError):
    """A versioned store rejected or failed a request."""


class TransportError(StoreError):
    """Network, timeout or authentication failure talking to the store."""


class StoreNotFoundError(StoreError):
    """The requested path does not exist at the given ref."""

    def __init__(self, path: str, ref: str | None = None):
        where = f"{path}@{ref}" if ref else path
        super().__init__(f"File not found: '{where}'")
        self.path = path
        self.ref = ref


class VersionConflictError(StoreError):
    """The supplied version token no longer matches the store's current token."""

    def __init__(self, path: str, version_token: str | None, current_token: str | None = None):
        super().__init__(
            f"Version conflict on '{path}': token {version_token!r} is stale"
        )
        self.path = path
        self.version_token = version_token
        self.current_token = current_token


class PathViolation(StoreError):
    """A path resolves outside the store's root directory."""
