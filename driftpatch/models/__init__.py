from .blocks import ApplyResult, EditBlock, EditResponse, MatchStatus
from .outcome import (
    Added,
    Conflict,
    ConflictOutcome,
    ConflictStrategy,
    DiffLine,
    Error,
    ErrorKind,
    Modified,
    Removed,
    Success,
    Unchanged,
)

__all__ = [
    "ApplyResult",
    "EditBlock",
    "EditResponse",
    "MatchStatus",
    "Added",
    "Conflict",
    "ConflictOutcome",
    "ConflictStrategy",
    "DiffLine",
    "Error",
    "ErrorKind",
    "Modified",
    "Removed",
    "Success",
    "Unchanged",
]
