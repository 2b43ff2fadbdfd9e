from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


# ---------- positional diff lines ----------


@dataclass(frozen=True)
class Unchanged:
    line_number: int
    content: str


@dataclass(frozen=True)
class Added:
    """Line present only in the local version."""

    line_number: int
    content: str


@dataclass(frozen=True)
class Removed:
    """Line present only in the remote version."""

    line_number: int
    content: str


@dataclass(frozen=True)
class Modified:
    line_number: int
    local_content: str
    remote_content: str


DiffLine = Union[Unchanged, Added, Removed, Modified]


# ---------- save / resolution outcomes ----------


class ErrorKind(Enum):
    TRANSPORT = "transport"
    RETRY_EXHAUSTED = "retry_exhausted"
    CANCELLED = "cancelled"
    INVALID_INPUT = "invalid_input"


@dataclass(frozen=True)
class Success:
    new_version_token: str
    message: Optional[str] = None


@dataclass(frozen=True)
class Conflict:
    """The remote moved since the local edit was based on it; caller must pick a strategy."""

    path: str
    local_content: str
    remote_content: str
    remote_version_token: str
    diff: List[DiffLine] = field(default_factory=list)
    conflicted_line_numbers: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Error:
    message: str
    kind: ErrorKind = ErrorKind.TRANSPORT


ConflictOutcome = Union[Success, Conflict, Error]


class ConflictStrategy(Enum):
    KEEP_MINE = "keep_mine"
    KEEP_THEIRS = "keep_theirs"
    MANUAL_MERGE = "manual_merge"
    SAVE_AS_COPY = "save_as_copy"
