# driftpatch/commit/core.py
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from .._logging import resolve_logger
from ..errors.patch import InvalidEditBlocksError
from ..models.blocks import ApplyResult, EditBlock, MatchStatus
from .patch import find_exact, locate, strip_line_numbers

__all__ = ["apply_edits", "find_overlapping_blocks"]


def _append(document: str, text: str) -> str:
    if not document.strip():
        return text + "\n"
    return document.rstrip() + "\n\n" + text + "\n"


def _first_claim(claimed: Sequence[Tuple[int, int, int]], start: int, end: int):
    for number, c_start, c_end in claimed:
        if start < c_end and c_start < end:
            return number
    return None


def find_overlapping_blocks(document: str, blocks: Sequence[EditBlock]) -> List[Tuple[int, int]]:
    """
    Return 1-based pairs of blocks whose search text occupies overlapping spans of
    the original document.

    Spans are claimed in block order: each block takes the first literal
    occurrence not already claimed by an earlier block, so blocks with the same
    search text aimed at successive occurrences do not clash. A block whose
    every occurrence intersects a claimed span is paired with the block holding
    its first occurrence.

    Only blocks that match literally are considered; insertions and blocks that
    need a looser tier cannot be placed before application and are skipped.
    """
    claimed: List[Tuple[int, int, int]] = []
    pairs: List[Tuple[int, int]] = []
    for number, block in enumerate(blocks, 1):
        search = strip_line_numbers(block.search)
        if not search.strip():
            continue
        span = find_exact(document, search)
        clash = None
        while span is not None:
            owner = _first_claim(claimed, *span)
            if owner is None:
                claimed.append((number, span[0], span[1]))
                break
            if clash is None:
                clash = owner
            nxt = document.find(search, span[0] + 1)
            span = (nxt, nxt + len(search)) if nxt != -1 else None
        if span is None and clash is not None:
            pairs.append((clash, number))
    return pairs


def apply_edits(
    document: str,
    blocks: Sequence[EditBlock],
    *,
    validate: bool = True,
    logger=None,
    log: bool = False,
) -> ApplyResult:
    """
    Apply edit blocks one after another to a running copy of `document`.

    Each block is stripped of echoed line-number prefixes and located with the
    tiered matcher; later blocks see the effect of earlier ones. A block with a
    blank search is appended to the end of the document. Blocks that cannot be
    located leave the document untouched and are reported by 1-based number.

    Args:
        document: Current text of the file.
        blocks: Edit blocks ordered top-to-bottom, not overlapping.
        validate: If True, raise InvalidEditBlocksError before changing anything
                  when two blocks claim overlapping spans of the original text.

    Returns:
        ApplyResult with the new text, every block stamped with its match tier,
        and the numbers of blocks that were not found.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    if validate:
        pairs = find_overlapping_blocks(document, blocks)
        if pairs:
            listed = ", ".join(f"#{a} and #{b}" for a, b in pairs)
            raise InvalidEditBlocksError(f"Edit blocks overlap: {listed}", pairs)

    result = document
    stamped: List[EditBlock] = []
    failed: List[int] = []

    for number, block in enumerate(blocks, 1):
        search = strip_line_numbers(block.search)
        replace = strip_line_numbers(block.replace)

        if not search.strip():
            result = _append(result, replace)
            stamped.append(block.with_status(MatchStatus.EXACT))
            log.debug(f"Block {number}: appended to end of document")
            continue

        match = locate(result, search, logger=log)
        if match is None:
            failed.append(number)
            stamped.append(block.with_status(MatchStatus.NOT_FOUND))
            log.debug(f"Block {number}: NOT FOUND; search starts {search[:120]!r}")
            continue

        result = result[: match.start] + replace + result[match.end:]
        stamped.append(block.with_status(match.status))
        log.debug(f"Block {number}: {match.status.label} match")

    total_applied = sum(1 for b in stamped if b.match_status is not MatchStatus.NOT_FOUND)
    log.debug(f"Applied {total_applied}/{len(blocks)}, failed: {len(failed)}")

    return ApplyResult(
        new_content=result,
        applied_blocks=stamped,
        failed_block_numbers=failed,
        total_applied=total_applied,
        total_failed=len(failed),
    )
