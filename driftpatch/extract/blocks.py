# driftpatch/extract/blocks.py
from __future__ import annotations

import re

from ..errors.extract import ExtractError
from ..models.blocks import EditBlock, EditResponse
from ..utils.text import cleanup_llm_output

_BLOCK_RE = re.compile(
    r"<block>\s*<search>(.*?)</search>\s*<replace>(.*?)</replace>\s*</block>",
    re.DOTALL,
)
_SUMMARY_RE = re.compile(r"<summary>\s*(.*?)\s*</summary>", re.DOTALL)


def _trim_tag_newlines(text: str) -> str:
    """Drop the single newline that follows an opening tag and precedes a closing one."""
    if text.startswith("\r\n"):
        text = text[2:]
    elif text.startswith("\n"):
        text = text[1:]
    if text.endswith("\r\n"):
        text = text[:-2]
    elif text.endswith("\n"):
        text = text[:-1]
    return text


def parse_edit_response(text: str, *, strict: bool = False) -> EditResponse:
    """
    Parse an edit model reply of the form

        <edits>
        <block>
        <search>...</search>
        <replace>...</replace>
        </block>
        </edits>
        <summary>...</summary>

    into ordered EditBlocks. Text outside the tags is ignored. With strict=True an
    opening <block> that never forms a complete block raises ExtractError.
    """
    cleaned = cleanup_llm_output(text)
    blocks = [
        EditBlock(search=_trim_tag_newlines(m.group(1)), replace=_trim_tag_newlines(m.group(2)))
        for m in _BLOCK_RE.finditer(cleaned)
    ]

    if strict:
        opened = cleaned.count("<block>")
        if opened != len(blocks):
            raise ExtractError(
                f"Found {opened} <block> tag(s) but only {len(blocks)} complete search/replace block(s)"
            )

    m = _SUMMARY_RE.search(cleaned)
    if m:
        summary = m.group(1).strip()
    elif not blocks:
        summary = "No edit blocks returned"
    else:
        summary = f"{len(blocks)} edit block(s)"
    return EditResponse(blocks=blocks, summary=summary)
