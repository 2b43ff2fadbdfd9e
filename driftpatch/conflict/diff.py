# driftpatch/conflict/diff.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ..models.outcome import Added, DiffLine, Modified, Removed, Unchanged
from ..utils.text import split_lines

__all__ = ["DiffStats", "positional_diff", "conflicted_line_numbers", "diff_stats", "render_diff"]


@dataclass(frozen=True)
class DiffStats:
    unchanged: int = 0
    added: int = 0
    removed: int = 0
    modified: int = 0


def positional_diff(local: str, remote: str) -> List[DiffLine]:
    """
    Compare two texts line by line at equal indices.

    This is a display aid for conflicts, not a merge diff: an insertion near the
    top of one side shows up as a run of Modified lines below it.
    """
    local_lines = split_lines(local)
    remote_lines = split_lines(remote)
    diff: List[DiffLine] = []
    for i in range(max(len(local_lines), len(remote_lines))):
        mine = local_lines[i] if i < len(local_lines) else None
        theirs = remote_lines[i] if i < len(remote_lines) else None
        if mine == theirs:
            diff.append(Unchanged(i, mine or ""))
        elif theirs is None:
            diff.append(Added(i, mine))
        elif mine is None:
            diff.append(Removed(i, theirs))
        else:
            diff.append(Modified(i, mine, theirs))
    return diff


def conflicted_line_numbers(diff: Sequence[DiffLine]) -> List[int]:
    return [d.line_number for d in diff if isinstance(d, Modified)]


def diff_stats(diff: Sequence[DiffLine]) -> DiffStats:
    counts = {Unchanged: 0, Added: 0, Removed: 0, Modified: 0}
    for d in diff:
        counts[type(d)] += 1
    return DiffStats(
        unchanged=counts[Unchanged],
        added=counts[Added],
        removed=counts[Removed],
        modified=counts[Modified],
    )


def render_diff(diff: Sequence[DiffLine]) -> str:
    """Plain-text conflict view: '  ' same, '+ ' local only, '- ' remote only, '~ ' both differ."""
    width = len(str(len(diff)))
    rows: List[str] = []
    for d in diff:
        num = str(d.line_number + 1).rjust(width)
        if isinstance(d, Unchanged):
            rows.append(f"{num}   {d.content}")
        elif isinstance(d, Added):
            rows.append(f"{num} + {d.content}")
        elif isinstance(d, Removed):
            rows.append(f"{num} - {d.content}")
        else:
            rows.append(f"{num} ~ {d.local_content} | {d.remote_content}")
    return "\n".join(rows)
