from .diff import DiffStats, conflicted_line_numbers, diff_stats, positional_diff, render_diff
from .resolver import ConflictResolver, ResolverState, copy_path_for
from .store import InMemoryStore, LocalFileStore, StoredFile, VersionedStore, content_token

__all__ = [
    "ConflictResolver",
    "ResolverState",
    "copy_path_for",
    "DiffStats",
    "positional_diff",
    "conflicted_line_numbers",
    "diff_stats",
    "render_diff",
    "VersionedStore",
    "StoredFile",
    "InMemoryStore",
    "LocalFileStore",
    "content_token",
]
