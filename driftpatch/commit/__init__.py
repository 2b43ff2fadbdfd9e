from .core import apply_edits, find_overlapping_blocks
from .patch import Match, locate, normalize_whitespace, strip_line_numbers

__all__ = [
    "apply_edits",
    "find_overlapping_blocks",
    "locate",
    "Match",
    "normalize_whitespace",
    "strip_line_numbers",
]
