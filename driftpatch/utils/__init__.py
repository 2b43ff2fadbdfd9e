# driftpatch/utils/__init__.py
from .text import cleanup_llm_output, number_lines, split_lines

__all__ = [
    "cleanup_llm_output",
    "number_lines",
    "split_lines",
]
