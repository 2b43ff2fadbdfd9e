# driftpatch/conflict/store.py
from __future__ import annotations

import abc
import asyncio
import contextlib
import hashlib
import os
import tempfile
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..errors.store import (
    PathViolation,
    StoreError,
    StoreNotFoundError,
    VersionConflictError,
)

__all__ = [
    "StoredFile",
    "WriteRecord",
    "VersionedStore",
    "InMemoryStore",
    "LocalFileStore",
    "content_token",
]


def content_token(content: str) -> str:
    """Git blob id of `content`: identical text always gets the same token."""
    data = content.encode("utf-8")
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


@dataclass(frozen=True)
class StoredFile:
    content: str
    version_token: str


@dataclass(frozen=True)
class WriteRecord:
    """One accepted write, kept for inspection."""

    path: str
    ref: str
    base_token: Optional[str]
    new_token: str
    message: str


class VersionedStore(abc.ABC):
    """
    Remote store with compare-and-swap writes.

    Implementations raise VersionConflictError when the supplied token does not
    match the current one (or a token-less write targets an existing path), and
    StoreError/TransportError for everything else.
    """

    @abc.abstractmethod
    async def get_content(self, path: str, ref: str) -> StoredFile:
        ...

    @abc.abstractmethod
    async def write(
        self,
        path: str,
        content: str,
        version_token: Optional[str],
        ref: str,
        message: str,
    ) -> str:
        """Create or update `path`; returns the new version token."""


def _check_token(path: str, current: Optional[str], version_token: Optional[str]) -> None:
    if current is None:
        if version_token is not None:
            raise StoreNotFoundError(path)
        return
    if version_token != current:
        raise VersionConflictError(path, version_token, current)


class InMemoryStore(VersionedStore):
    """Dictionary-backed store keyed by (ref, path)."""

    def __init__(self) -> None:
        self._files: Dict[Tuple[str, str], StoredFile] = {}
        self.history: List[WriteRecord] = []

    def seed(self, path: str, content: str, *, ref: str = "main", token: Optional[str] = None) -> str:
        """Put a file in place without going through the token check."""
        token = token or content_token(content)
        self._files[(ref, path)] = StoredFile(content, token)
        return token

    def peek(self, path: str, ref: str = "main") -> Optional[StoredFile]:
        return self._files.get((ref, path))

    async def get_content(self, path: str, ref: str) -> StoredFile:
        stored = self._files.get((ref, path))
        if stored is None:
            raise StoreNotFoundError(path, ref)
        return stored

    async def write(
        self,
        path: str,
        content: str,
        version_token: Optional[str],
        ref: str,
        message: str,
    ) -> str:
        current = self._files.get((ref, path))
        _check_token(path, current.version_token if current else None, version_token)
        new_token = content_token(content)
        self._files[(ref, path)] = StoredFile(content, new_token)
        self.history.append(WriteRecord(path, ref, version_token, new_token, message))
        return new_token


class LocalFileStore(VersionedStore):
    """
    Directory-backed store: `<root>/<ref>/<path>`, tokens are git blob ids of the
    file text. Writes are staged to a same-directory tempfile and promoted with
    os.replace(), so readers never see a half-written file.
    """

    def __init__(self, root: str) -> None:
        self.root = os.path.realpath(root)
        self._lock = threading.Lock()

    def _resolve(self, path: str, ref: str) -> str:
        base = os.path.abspath(os.path.join(self.root, ref))
        target = os.path.abspath(os.path.join(base, *path.split("/")))
        # Both the ref directory and the file must stay inside their parents.
        if os.path.commonpath([self.root, base]) != self.root or base == self.root:
            raise PathViolation(f"Invalid ref '{ref}'")
        if os.path.commonpath([base, target]) != base or target == base:
            raise PathViolation(f"Path traversal attempt detected for '{path}'")
        return target

    def _read_sync(self, path: str, ref: str) -> StoredFile:
        target = self._resolve(path, ref)
        try:
            with open(target, "r", encoding="utf-8", newline="") as f:
                content = f.read()
        except FileNotFoundError:
            raise StoreNotFoundError(path, ref) from None
        except OSError as e:
            raise StoreError(f"Failed to read '{path}': {e}") from e
        return StoredFile(content, content_token(content))

    def _write_sync(self, path: str, content: str, version_token: Optional[str], ref: str) -> str:
        target = self._resolve(path, ref)
        dirpath = os.path.dirname(target)
        with self._lock:
            current: Optional[str] = None
            if os.path.exists(target):
                current = self._read_sync(path, ref).version_token
            _check_token(path, current, version_token)

            tmp = None
            try:
                os.makedirs(dirpath, exist_ok=True)
                fd, tmp = tempfile.mkstemp(prefix=".dp-", suffix=".tmp", dir=dirpath)
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                    f.write(content)
                os.replace(tmp, target)
            except OSError as e:
                if tmp is not None:
                    with contextlib.suppress(OSError):
                        if os.path.exists(tmp):
                            os.remove(tmp)
                raise StoreError(f"Failed to write '{path}': {e}") from e
        return content_token(content)

    async def get_content(self, path: str, ref: str) -> StoredFile:
        return await asyncio.to_thread(self._read_sync, path, ref)

    async def write(
        self,
        path: str,
        content: str,
        version_token: Optional[str],
        ref: str,
        message: str,
    ) -> str:
        # Commit messages have nowhere to go on a plain directory.
        return await asyncio.to_thread(self._write_sync, path, content, version_token, ref)
