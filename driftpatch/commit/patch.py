# driftpatch/commit/patch.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .._logging import resolve_logger
from ..models.blocks import MatchStatus

__all__ = [
    "Match",
    "strip_line_numbers",
    "normalize_whitespace",
    "find_exact",
    "find_normalized",
    "find_fuzzy",
    "find_line_range",
    "locate",
]

# Fuzzy tier accepts [n - FUZZY_SLACK_BELOW, n + FUZZY_SLACK_ABOVE] significant lines.
FUZZY_SLACK_BELOW = 1
FUZZY_SLACK_ABOVE = 3
# Line-range tier needs this many significant lines and spans at most FACTOR * n lines.
LINE_RANGE_MIN_LINES = 3
LINE_RANGE_FACTOR = 2


@dataclass(frozen=True)
class Match:
    """Character span [start, end) of the document selected for replacement."""

    start: int
    end: int
    status: MatchStatus


# ---------- line anchor normalizer ----------

_LINE_NUMBER_RE = re.compile(r"^\d{1,5}\|[ \t]")


def strip_line_numbers(text: str) -> str:
    """
    Remove 'NN| ' prefixes echoed back from a line-numbered prompt.

    Only strips when more than half of the non-empty lines carry the prefix, so a
    fragment that legitimately starts a line with digits and a pipe is left alone.
    """
    if not text.strip():
        return text
    lines = text.split("\n")
    non_empty = [ln for ln in lines if ln.strip()]
    hits = sum(1 for ln in non_empty if _LINE_NUMBER_RE.match(ln))
    if hits * 2 <= len(non_empty):
        return text
    return "\n".join(_LINE_NUMBER_RE.sub("", ln, count=1) for ln in lines)


def normalize_whitespace(text: str) -> str:
    """Trim trailing whitespace from every line; indentation and blank lines survive."""
    return "\n".join(ln.rstrip() for ln in text.split("\n"))


# ---------- line helpers ----------


def _line_starts(lines: list[str]) -> list[int]:
    starts = []
    pos = 0
    for ln in lines:
        starts.append(pos)
        pos += len(ln) + 1
    return starts


def _content_end(lines: list[str], starts: list[int], idx: int) -> int:
    """Offset just past the visible content of line idx (before any '\\r')."""
    ln = lines[idx]
    if ln.endswith("\r"):
        return starts[idx] + len(ln) - 1
    return starts[idx] + len(ln)


def _line_span(document: str, first: int, last: int) -> tuple[int, int]:
    """Whole-line span from the start of `first` to the end of `last`, terminator excluded."""
    lines = document.split("\n")
    starts = _line_starts(lines)
    return starts[first], _content_end(lines, starts, last)


def _significant(text: str) -> list[str]:
    return [ln.strip() for ln in text.split("\n") if ln.strip()]


def _first_index(stripped: list[str], needle: str, start: int = 0) -> int:
    for i in range(start, len(stripped)):
        if stripped[i] == needle:
            return i
    return -1


# ---------- tiers ----------


def find_exact(document: str, search: str) -> tuple[int, int] | None:
    """First literal occurrence of `search`."""
    if not search:
        return None
    idx = document.find(search)
    if idx < 0:
        return None
    return idx, idx + len(search)


def find_normalized(document: str, search: str) -> tuple[int, int] | None:
    """
    Match after trimming trailing whitespace on every line of both texts, then
    map the hit back onto the untouched document.

    Trimming only shortens lines from the right, so a (line, column) position in
    the trimmed text is the same (line, column) in the original. A position sitting
    at the end of a trimmed line is widened to the end of the original line, so the
    trailing whitespace of matched lines is replaced along with them and nothing
    outside the match is touched.
    """
    norm_search = normalize_whitespace(search)
    if not norm_search.strip():
        return None
    norm_doc = normalize_whitespace(document)
    idx = norm_doc.find(norm_search)
    if idx < 0:
        return None

    orig_lines = document.split("\n")
    norm_lines = norm_doc.split("\n")
    starts = _line_starts(orig_lines)
    norm_starts = _line_starts(norm_lines)

    def to_line_col(pos: int) -> tuple[int, int]:
        line = norm_doc.count("\n", 0, pos)
        return line, pos - norm_starts[line]

    start_line, start_col = to_line_col(idx)
    end_line, end_col = to_line_col(idx + len(norm_search))
    if not 0 <= start_line < len(orig_lines) or end_line >= len(orig_lines):
        return None

    if start_col == len(norm_lines[start_line]) and norm_search.startswith("\n"):
        start = _content_end(orig_lines, starts, start_line)
    else:
        start = starts[start_line] + start_col

    if end_col == len(norm_lines[end_line]) and not norm_search.endswith("\n"):
        end = _content_end(orig_lines, starts, end_line)
    else:
        end = starts[end_line] + end_col

    if end < start:
        return None
    return start, end


def find_fuzzy(document: str, search: str) -> tuple[int, int] | None:
    """
    Anchor on the first and last significant lines of `search`, comparing stripped text.

    A single significant line replaces the first document line equal to it. Otherwise
    the region between the anchors must hold between n-1 and n+3 non-blank lines.
    """
    needles = _significant(search)
    if not needles:
        return None
    lines = document.split("\n")
    stripped = [ln.strip() for ln in lines]

    start = _first_index(stripped, needles[0])
    if start < 0:
        return None
    if len(needles) == 1:
        return _line_span(document, start, start)

    end = _first_index(stripped, needles[-1], start + 1)
    if end < 0:
        return None

    n = len(needles)
    significant = sum(1 for i in range(start, end + 1) if stripped[i])
    if significant < n - FUZZY_SLACK_BELOW or significant > n + FUZZY_SLACK_ABOVE:
        return None
    return _line_span(document, start, end)


def find_line_range(document: str, search: str) -> tuple[int, int] | None:
    """
    Locate the first, middle and last significant lines of `search` in order.
    The resulting span may cover at most twice the fragment's significant lines.
    """
    needles = _significant(search)
    n = len(needles)
    if n < LINE_RANGE_MIN_LINES:
        return None
    stripped = [ln.strip() for ln in document.split("\n")]

    anchors = (needles[0], needles[n // 2], needles[-1])
    found: list[int] = []
    search_from = 0
    for key in anchors:
        idx = _first_index(stripped, key, search_from)
        if idx < 0:
            return None
        found.append(idx)
        search_from = idx + 1

    start, end = found[0], found[-1]
    if end - start + 1 > n * LINE_RANGE_FACTOR:
        return None
    return _line_span(document, start, end)


_TIERS = (
    (MatchStatus.EXACT, find_exact),
    (MatchStatus.NORMALIZED, find_normalized),
    (MatchStatus.FUZZY, find_fuzzy),
    (MatchStatus.LINE_RANGE, find_line_range),
)


def locate(
    document: str,
    search: str,
    *,
    logger=None,
    log: bool = False,
) -> Match | None:
    """
    Find the span of `document` that `search` refers to.

    Tiers run from strictest to loosest: exact, normalized, fuzzy, line-range.
    The first tier that succeeds wins. Returns None when every tier fails or
    `search` is blank.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    if not search.strip():
        return None
    for status, finder in _TIERS:
        span = finder(document, search)
        if span is not None:
            log.debug(f"{status.label} match at [{span[0]}, {span[1]})")
            return Match(span[0], span[1], status)
        log.debug(f"{status.label} tier: no match")
    return None
