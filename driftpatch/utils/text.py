# driftpatch/utils/text.py
import re
from typing import List

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def cleanup_llm_output(content: str) -> str:
    """
    Removes common LLM artifacts around an edit response: <think> blocks and a
    markdown fence wrapping the whole reply (```xml ... ```).
    """
    if not content:
        return ""

    content = re.sub(r"<think>.*?</think>", "", content, flags=re.DOTALL)

    fence_match = re.match(r"^\s*```[a-zA-Z0-9-]*[ \t]*\n(.*?)\n\s*```\s*$", content, flags=re.DOTALL)
    if fence_match:
        content = fence_match.group(1)

    return content.strip()


def split_lines(text: str) -> List[str]:
    """Split on any line break. A trailing break yields a final empty line."""
    return _LINE_BREAK_RE.split(text)


def number_lines(text: str, start: int = 1) -> str:
    """Prefix every line with 'N| ' so the edit model can navigate large files."""
    lines = text.split("\n")
    if len(lines) > 1 and lines[-1] == "":
        lines = lines[:-1]
    return "\n".join(f"{i}| {line}" for i, line in enumerate(lines, start))
