# driftpatch/context/builder.py
from ..utils.text import number_lines

__all__ = [
    "EDIT_FORMAT_INSTRUCTIONS",
    "LINE_NUMBER_INSTRUCTIONS",
    "build_edit_context",
    "build_system_prompt",
    "uses_line_numbers",
]

# Files longer than this are sent with 'N| ' prefixes.
DEFAULT_LINE_NUMBER_THRESHOLD = 300

EDIT_FORMAT_INSTRUCTIONS = (
    "You are a precision code editor. Reply only with search/replace blocks:\n"
    "\n"
    "<edits>\n"
    "<block>\n"
    "<search>\n"
    "exact lines copied from the original file\n"
    "</search>\n"
    "<replace>\n"
    "new replacement lines\n"
    "</replace>\n"
    "</block>\n"
    "</edits>\n"
    "<summary>One-line description of all changes made</summary>\n"
    "\n"
    "Rules:\n"
    "1) <search> is a character-perfect copy of the file, including indentation.\n"
    "2) Each <search> matches exactly one location; add 3-7 lines of context if needed.\n"
    "3) Order blocks top to bottom. Blocks must not overlap.\n"
    "4) To delete code leave <replace> empty. An empty <search> appends <replace> to the end of the file.\n"
    "5) Change only what was asked. Never output the whole file.\n"
    "6) If nothing needs to change reply <edits></edits><summary>No changes needed: reason</summary>\n"
)

LINE_NUMBER_INSTRUCTIONS = (
    "\n"
    "The file is shown with line number prefixes like '42| '. They are for reference only:\n"
    "never include them in <search> or <replace>. You may cite line numbers in <summary>.\n"
)


def build_system_prompt(use_line_numbers: bool) -> str:
    if use_line_numbers:
        return EDIT_FORMAT_INSTRUCTIONS + LINE_NUMBER_INSTRUCTIONS
    return EDIT_FORMAT_INSTRUCTIONS


def uses_line_numbers(content: str, threshold: int = DEFAULT_LINE_NUMBER_THRESHOLD) -> bool:
    return len(content.split("\n")) > threshold


def build_edit_context(
    content: str,
    file_name: str,
    instructions: str,
    *,
    line_number_threshold: int = DEFAULT_LINE_NUMBER_THRESHOLD,
) -> str:
    """Build the user message sent to the edit model for one file."""
    body = number_lines(content) if uses_line_numbers(content, line_number_threshold) else content
    return (
        f"File: `{file_name}`\n"
        "\n"
        f"```\n{body}\n```\n"
        "\n"
        "<user_instructions>\n"
        f"{instructions}\n"
        "</user_instructions>\n"
    )
