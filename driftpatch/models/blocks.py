from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class MatchStatus(Enum):
    """How an edit block was located in the document."""

    PENDING = "pending"
    EXACT = "exact"
    NORMALIZED = "normalized"
    FUZZY = "fuzzy"
    LINE_RANGE = "line_range"
    NOT_FOUND = "not_found"

    @property
    def label(self) -> str:
        return self.value.replace("_", "-")


@dataclass(frozen=True)
class EditBlock:
    """One search/replace instruction produced by the edit model."""

    search: str
    replace: str
    match_status: MatchStatus = MatchStatus.PENDING

    @property
    def is_insertion(self) -> bool:
        return not self.search.strip()

    def with_status(self, status: MatchStatus) -> "EditBlock":
        return dataclasses.replace(self, match_status=status)


@dataclass(frozen=True)
class EditResponse:
    """Edit blocks parsed from one model response, in document order."""

    blocks: List[EditBlock] = field(default_factory=list)
    summary: str = ""


@dataclass(frozen=True)
class ApplyResult:
    """Outcome of applying a list of edit blocks to a document."""

    new_content: str
    applied_blocks: List[EditBlock]
    # 1-based, in input order
    failed_block_numbers: List[int]
    total_applied: int
    total_failed: int

    @property
    def is_fully_applied(self) -> bool:
        return self.total_failed == 0

    @property
    def status_message(self) -> str:
        total = self.total_applied + self.total_failed
        if self.total_failed == 0:
            return f"All {self.total_applied} block(s) applied successfully"
        if self.total_applied == 0:
            return "No blocks could be applied"
        missing = ", ".join(f"#{n}" for n in self.failed_block_numbers)
        return f"Applied {self.total_applied} of {total} blocks. Not found: {missing}"

    def block_report(self) -> List[str]:
        """One line per block, e.g. 'block 2 of 5: fuzzy' or 'block 4 of 5: not found'."""
        total = len(self.applied_blocks)
        lines = []
        for i, block in enumerate(self.applied_blocks, 1):
            if block.match_status is MatchStatus.NOT_FOUND:
                lines.append(f"block {i} of {total}: not found")
            else:
                lines.append(f"block {i} of {total}: matched via {block.match_status.label}")
        return lines
