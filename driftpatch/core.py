# driftpatch/core.py
from typing import Tuple

from .commit import apply_edits
from .extract import parse_edit_response
from .models.blocks import ApplyResult, EditResponse


def apply_model_output(
    document: str,
    model_output: str,
    *,
    validate: bool = True,
    logger=None,
    log: bool = False,
) -> Tuple[EditResponse, ApplyResult]:
    """
    Parse a raw edit-model reply and apply its blocks to `document`.

    Returns the parsed response (blocks + summary) and the per-block apply result.
    A reply with no blocks yields an ApplyResult whose content equals the input.
    """
    response = parse_edit_response(model_output)
    result = apply_edits(document, response.blocks, validate=validate, logger=logger, log=log)
    return response, result
