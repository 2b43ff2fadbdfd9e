# driftpatch/config.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResolverSettings:
    """Tunables for ConflictResolver."""

    # Write attempts per save/resolution call, first attempt included.
    max_attempts: int = 3
    # Fixed floor, in seconds, between the starts of consecutive write attempts.
    min_retry_interval: float = 0.5
    copy_timestamp_format: str = "%Y-%m-%d-%H%M%S"
    keep_mine_message: str = "Resolve conflict: keep local changes"
    manual_merge_message: str = "Resolve conflict: manual merge"
    save_as_copy_message: str = "Save conflicted version as copy"

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.min_retry_interval < 0:
            raise ValueError("min_retry_interval must be >= 0")
