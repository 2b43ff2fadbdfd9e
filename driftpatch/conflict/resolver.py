# driftpatch/conflict/resolver.py
"""
Optimistic-concurrency saves against a VersionedStore.

Flow:
    save()  -> Success | Conflict | Error
    Conflict -> resolve_keep_mine / resolve_keep_theirs / resolve_manual_merge /
                resolve_save_as_copy (or resolve(conflict, strategy, ...))

Only version conflicts are retried, and only inside a resolution call: the loop
refetches the current remote token and tries again, at most
`settings.max_attempts` writes with at least `settings.min_retry_interval`
seconds between attempt starts. The resolver keeps no state between calls.
"""
from __future__ import annotations

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Awaitable, Callable, Optional

from .._logging import resolve_logger
from ..config import ResolverSettings
from ..errors.store import VersionConflictError
from ..models.outcome import (
    Conflict,
    ConflictOutcome,
    ConflictStrategy,
    Error,
    ErrorKind,
    Success,
)
from .diff import conflicted_line_numbers, positional_diff
from .store import VersionedStore

__all__ = ["ConflictResolver", "ResolverState", "copy_path_for"]


class ResolverState(Enum):
    IDLE = "idle"
    SAVING = "saving"
    SUCCEEDED = "succeeded"
    CONFLICT_DETECTED = "conflict_detected"
    RESOLVING = "resolving"
    FAILED = "failed"


@dataclass(frozen=True)
class _Attempt:
    """Loop state carried from one write attempt to the next."""

    number: int
    token: Optional[str]
    previous_start: Optional[float] = None


def copy_path_for(path: str, when: datetime, timestamp_format: str = "%Y-%m-%d-%H%M%S") -> str:
    """
    Derive a sibling path for a conflicted copy.

    'dir/Name.ext' -> 'dir/Name.conflict-<timestamp>.ext'. A name without an
    extension (or a dotfile such as '.env') gets the segment appended.
    """
    head, name = path[: path.rfind("/") + 1], path[path.rfind("/") + 1:]
    stem, ext = os.path.splitext(name)
    return f"{head}{stem}.conflict-{when.strftime(timestamp_format)}{ext}"


class ConflictResolver:
    def __init__(
        self,
        store: VersionedStore,
        *,
        settings: ResolverSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = datetime.now,
        logger=None,
        log: bool = False,
    ):
        self.store = store
        self.settings = settings or ResolverSettings()
        self._sleep = sleep
        self._clock = clock
        self._now = now
        self._log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    def _state(self, path: str, state: ResolverState) -> None:
        self._log.debug(f"{path}: {state.name}")

    # ---------- initial save ----------

    async def save(
        self,
        path: str,
        local_content: str,
        base_version_token: Optional[str],
        ref: str,
        message: str,
    ) -> ConflictOutcome:
        """
        Write `local_content` on top of the version identified by `base_version_token`.

        A version conflict is never overwritten here: the remote is fetched and a
        Conflict carrying a positional diff is returned for the caller to resolve.
        """
        self._state(path, ResolverState.SAVING)
        try:
            new_token = await self.store.write(path, local_content, base_version_token, ref, message)
        except VersionConflictError:
            self._state(path, ResolverState.CONFLICT_DETECTED)
            return await self._describe_conflict(path, local_content, ref)
        except asyncio.CancelledError:
            return self._cancelled(path)
        except Exception as e:
            self._state(path, ResolverState.FAILED)
            return Error(str(e) or type(e).__name__, ErrorKind.TRANSPORT)
        self._state(path, ResolverState.SUCCEEDED)
        return Success(new_token)

    async def _describe_conflict(self, path: str, local_content: str, ref: str) -> ConflictOutcome:
        try:
            remote = await self.store.get_content(path, ref)
        except asyncio.CancelledError:
            return self._cancelled(path)
        except Exception as e:
            self._state(path, ResolverState.FAILED)
            return Error(f"Failed to fetch remote version: {e}", ErrorKind.TRANSPORT)
        diff = positional_diff(local_content, remote.content)
        return Conflict(
            path=path,
            local_content=local_content,
            remote_content=remote.content,
            remote_version_token=remote.version_token,
            diff=diff,
            conflicted_line_numbers=conflicted_line_numbers(diff),
        )

    # ---------- strategies ----------

    async def resolve_keep_mine(
        self,
        conflict: Conflict,
        ref: str,
        message: str | None = None,
    ) -> ConflictOutcome:
        """Overwrite the remote with the local content, based on the remote's current token."""
        return await self._write_with_retry(
            conflict.path,
            conflict.local_content,
            conflict.remote_version_token,
            ref,
            message or self.settings.keep_mine_message,
        )

    async def resolve_keep_theirs(self, conflict: Conflict) -> ConflictOutcome:
        """Adopt the remote version; nothing is written."""
        self._state(conflict.path, ResolverState.SUCCEEDED)
        return Success(
            conflict.remote_version_token,
            message="Local changes discarded. File reverted to remote version.",
        )

    async def resolve_manual_merge(
        self,
        conflict: Conflict,
        merged_content: str,
        ref: str,
        message: str | None = None,
    ) -> ConflictOutcome:
        return await self._write_with_retry(
            conflict.path,
            merged_content,
            conflict.remote_version_token,
            ref,
            message or self.settings.manual_merge_message,
        )

    async def resolve_save_as_copy(
        self,
        conflict: Conflict,
        ref: str,
        message: str | None = None,
    ) -> ConflictOutcome:
        """Write the local content to a new, timestamped sibling path."""
        copy_path = copy_path_for(conflict.path, self._now(), self.settings.copy_timestamp_format)
        self._state(copy_path, ResolverState.RESOLVING)
        try:
            new_token = await self.store.write(
                copy_path,
                conflict.local_content,
                None,
                ref,
                message or self.settings.save_as_copy_message,
            )
        except asyncio.CancelledError:
            return self._cancelled(copy_path)
        except VersionConflictError:
            self._state(copy_path, ResolverState.FAILED)
            return Error(f"Failed to create copy: '{copy_path}' already exists", ErrorKind.TRANSPORT)
        except Exception as e:
            self._state(copy_path, ResolverState.FAILED)
            return Error(f"Failed to create copy: {e}", ErrorKind.TRANSPORT)
        self._state(copy_path, ResolverState.SUCCEEDED)
        return Success(new_token, message=f"Local changes saved as: {copy_path}")

    async def resolve(
        self,
        conflict: Conflict,
        strategy: ConflictStrategy,
        ref: str,
        *,
        merged_content: str | None = None,
        message: str | None = None,
    ) -> ConflictOutcome:
        if strategy is ConflictStrategy.KEEP_MINE:
            return await self.resolve_keep_mine(conflict, ref, message)
        if strategy is ConflictStrategy.KEEP_THEIRS:
            return await self.resolve_keep_theirs(conflict)
        if strategy is ConflictStrategy.MANUAL_MERGE:
            if merged_content is None:
                return Error("No merged content provided", ErrorKind.INVALID_INPUT)
            return await self.resolve_manual_merge(conflict, merged_content, ref, message)
        if strategy is ConflictStrategy.SAVE_AS_COPY:
            return await self.resolve_save_as_copy(conflict, ref, message)
        raise ValueError(f"Unknown conflict strategy: {strategy!r}")

    # ---------- bounded write loop ----------

    async def _wait_for_spacing(self, previous_start: Optional[float]) -> None:
        if previous_start is None:
            return
        remaining = self.settings.min_retry_interval - (self._clock() - previous_start)
        if remaining > 0:
            await self._sleep(remaining)

    async def _write_with_retry(
        self,
        path: str,
        content: str,
        token: Optional[str],
        ref: str,
        message: str,
    ) -> ConflictOutcome:
        self._state(path, ResolverState.RESOLVING)
        attempt = _Attempt(number=1, token=token)
        try:
            while True:
                await self._wait_for_spacing(attempt.previous_start)
                started = self._clock()
                self._log.debug(f"{path}: write attempt {attempt.number}/{self.settings.max_attempts}")
                try:
                    new_token = await self.store.write(path, content, attempt.token, ref, message)
                except VersionConflictError:
                    if attempt.number >= self.settings.max_attempts:
                        self._state(path, ResolverState.FAILED)
                        return Error(
                            f"Version conflict on '{path}' persisted after "
                            f"{attempt.number} attempts; giving up",
                            ErrorKind.RETRY_EXHAUSTED,
                        )
                    remote = await self.store.get_content(path, ref)
                    attempt = _Attempt(attempt.number + 1, remote.version_token, started)
                    continue
                self._state(path, ResolverState.SUCCEEDED)
                return Success(new_token)
        except asyncio.CancelledError:
            return self._cancelled(path)
        except Exception as e:
            self._state(path, ResolverState.FAILED)
            return Error(str(e) or type(e).__name__, ErrorKind.TRANSPORT)

    def _cancelled(self, path: str) -> Error:
        self._state(path, ResolverState.FAILED)
        return Error(f"Save of '{path}' was cancelled", ErrorKind.CANCELLED)
