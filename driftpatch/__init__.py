from .commit import apply_edits, find_overlapping_blocks, locate, normalize_whitespace, strip_line_numbers
from .config import ResolverSettings
from .conflict import (
    ConflictResolver,
    InMemoryStore,
    LocalFileStore,
    StoredFile,
    VersionedStore,
    copy_path_for,
    positional_diff,
    render_diff,
)
from .context import build_edit_context, build_system_prompt
from .core import apply_model_output
from .errors import (
    DriftPatchError,
    ExtractError,
    InvalidEditBlocksError,
    PathViolation,
    StoreError,
    StoreNotFoundError,
    TransportError,
    VersionConflictError,
)
from .extract import parse_edit_response
from .models import (
    Added,
    ApplyResult,
    Conflict,
    ConflictOutcome,
    ConflictStrategy,
    DiffLine,
    EditBlock,
    EditResponse,
    Error,
    ErrorKind,
    MatchStatus,
    Modified,
    Removed,
    Success,
    Unchanged,
)
from ._logging import enable_debug_logging
from .utils.text import cleanup_llm_output, number_lines

__all__ = [
    "apply_edits",
    "apply_model_output",
    "find_overlapping_blocks",
    "locate",
    "normalize_whitespace",
    "strip_line_numbers",
    "parse_edit_response",
    "build_edit_context",
    "build_system_prompt",
    "cleanup_llm_output",
    "number_lines",
    "enable_debug_logging",
    "ResolverSettings",
    "ConflictResolver",
    "VersionedStore",
    "StoredFile",
    "InMemoryStore",
    "LocalFileStore",
    "copy_path_for",
    "positional_diff",
    "render_diff",
    "ApplyResult",
    "EditBlock",
    "EditResponse",
    "MatchStatus",
    "Conflict",
    "ConflictOutcome",
    "ConflictStrategy",
    "Success",
    "Error",
    "ErrorKind",
    "DiffLine",
    "Unchanged",
    "Added",
    "Removed",
    "Modified",
    "DriftPatchError",
    "ExtractError",
    "InvalidEditBlocksError",
    "StoreError",
    "StoreNotFoundError",
    "TransportError",
    "VersionConflictError",
    "PathViolation",
]
