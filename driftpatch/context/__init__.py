from .builder import (
    EDIT_FORMAT_INSTRUCTIONS,
    LINE_NUMBER_INSTRUCTIONS,
    build_edit_context,
    build_system_prompt,
    uses_line_numbers,
)

__all__ = [
    "EDIT_FORMAT_INSTRUCTIONS",
    "LINE_NUMBER_INSTRUCTIONS",
    "build_edit_context",
    "build_system_prompt",
    "uses_line_numbers",
]
