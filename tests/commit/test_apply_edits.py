import logging
import textwrap

import pytest

from driftpatch.commit.core import apply_edits, find_overlapping_blocks
from driftpatch.errors import InvalidEditBlocksError
from driftpatch.models.blocks import EditBlock, MatchStatus


def test_exact_replaces_first_occurrence_only():
    doc = "x = 1\ny = 2\nx = 1\n"
    result = apply_edits(doc, [EditBlock("x = 1", "x = 3")])
    assert result.new_content == "x = 3\ny = 2\nx = 1\n"
    assert result.applied_blocks[0].match_status is MatchStatus.EXACT
    assert result.is_fully_applied


def test_blank_search_appends_to_end():
    result = apply_edits("a\nb\n", [EditBlock("", "c")])
    assert result.new_content == "a\nb\n\nc\n"
    assert result.new_content.endswith("c\n")
    assert result.applied_blocks[0].match_status is MatchStatus.EXACT


def test_blank_search_on_empty_document():
    result = apply_edits("", [EditBlock("   ", "first line")])
    assert result.new_content == "first line\n"
    assert result.total_failed == 0


def test_noop_block_leaves_document_unchanged():
    doc = "def f():\n    return 1\n"
    result = apply_edits(doc, [EditBlock("    return 1", "    return 1")])
    assert result.new_content == doc
    assert result.applied_blocks[0].match_status is MatchStatus.EXACT


def test_unmatched_block_is_reported_and_document_untouched():
    doc = "a\nb\nc\nd\n"
    result = apply_edits(doc, [EditBlock("x\ny\nz", "q")])
    assert result.new_content == doc
    assert result.applied_blocks[0].match_status is MatchStatus.NOT_FOUND
    assert result.failed_block_numbers == [1]
    assert result.total_applied == 0
    assert result.total_failed == 1
    assert result.status_message == "No blocks could be applied"


def test_partial_application_reports_each_block():
    doc = "one\ntwo\nthree\nfour\n"
    blocks = [
        EditBlock("one", "ONE"),
        EditBlock("missing line", "nope"),
        EditBlock("three", "THREE"),
        EditBlock("also missing", "nope"),
        EditBlock("four", "FOUR"),
    ]
    result = apply_edits(doc, blocks)
    assert result.new_content == "ONE\ntwo\nTHREE\nFOUR\n"
    assert result.failed_block_numbers == [2, 4]
    assert result.total_applied == 3
    assert result.total_failed == 2
    assert not result.is_fully_applied
    assert result.status_message == "Applied 3 of 5 blocks. Not found: #2, #4"
    assert result.block_report() == [
        "block 1 of 5: matched via exact",
        "block 2 of 5: not found",
        "block 3 of 5: matched via exact",
        "block 4 of 5: not found",
        "block 5 of 5: matched via exact",
    ]


def test_later_blocks_see_earlier_changes():
    result = apply_edits("alpha\n", [EditBlock("alpha", "beta"), EditBlock("beta", "gamma")])
    assert result.new_content == "gamma\n"
    assert result.status_message == "All 2 block(s) applied successfully"


def test_line_number_prefixes_are_stripped_from_both_sides():
    doc = "def f():\n    return 1\n"
    block = EditBlock("1| def f():\n2|     return 1", "1| def f():\n2|     return 2")
    result = apply_edits(doc, [block])
    assert result.new_content == "def f():\n    return 2\n"
    assert result.applied_blocks[0].match_status is MatchStatus.EXACT


def test_normalized_tier_keeps_whitespace_outside_match():
    doc = "keep   \ndef f():   \n    return 1  \ntail  \n"
    result = apply_edits(doc, [EditBlock("def f():\n    return 1", "def f():\n    return 2")])
    assert result.applied_blocks[0].match_status is MatchStatus.NORMALIZED
    assert result.new_content == "keep   \ndef f():\n    return 2\ntail  \n"


def test_fuzzy_tier_replaces_drifted_region():
    doc = textwrap.dedent(
        """\
        class A:
            def run(self):
                x = 1

                return x
        """
    )
    block = EditBlock(
        "def run(self):\n    x = 1\n    return x",
        "    def run(self):\n        return 2",
    )
    result = apply_edits(doc, [block])
    assert result.applied_blocks[0].match_status is MatchStatus.FUZZY
    assert result.new_content == "class A:\n    def run(self):\n        return 2\n"


def test_line_range_tier():
    result = apply_edits("A\nC\nE\nZ", [EditBlock("A\nB\nC\nD\nE", "X")])
    assert result.applied_blocks[0].match_status is MatchStatus.LINE_RANGE
    assert result.new_content == "X\nZ"


def test_input_blocks_are_not_mutated():
    block = EditBlock("a", "b")
    result = apply_edits("a", [block])
    assert block.match_status is MatchStatus.PENDING
    assert result.applied_blocks[0] == EditBlock("a", "b", MatchStatus.EXACT)


def test_overlapping_blocks_fail_fast():
    doc = "one\ntwo\nthree\n"
    blocks = [EditBlock("one\ntwo", "1\n2"), EditBlock("two\nthree", "2\n3")]
    assert find_overlapping_blocks(doc, blocks) == [(1, 2)]
    with pytest.raises(InvalidEditBlocksError) as exc:
        apply_edits(doc, blocks)
    assert exc.value.pairs == [(1, 2)]
    assert isinstance(exc.value, ValueError)


def test_overlap_check_can_be_disabled():
    doc = "one\ntwo\nthree\n"
    blocks = [EditBlock("one\ntwo", "1\n2"), EditBlock("two\nthree", "2\n3")]
    result = apply_edits(doc, blocks, validate=False)
    assert result.new_content == "1\n2\nthree\n"
    assert result.failed_block_numbers == [2]


def test_repeated_search_text_targets_successive_occurrences():
    doc = "x = 1\ny = 0\nx = 1\n"
    blocks = [EditBlock("x = 1", "x = 2"), EditBlock("x = 1", "x = 3")]
    assert find_overlapping_blocks(doc, blocks) == []
    result = apply_edits(doc, blocks)
    assert result.new_content == "x = 2\ny = 0\nx = 3\n"
    assert result.is_fully_applied


def test_repeated_search_text_without_a_free_occurrence_overlaps():
    doc = "x = 1\ny = 0\n"
    blocks = [EditBlock("x = 1", "x = 2"), EditBlock("x = 1", "x = 3")]
    assert find_overlapping_blocks(doc, blocks) == [(1, 2)]


def test_overlap_reports_block_holding_first_occurrence():
    doc = "a\nb\nc\n"
    blocks = [EditBlock("a\nb", "A"), EditBlock("c", "C"), EditBlock("b\nc", "BC")]
    assert find_overlapping_blocks(doc, blocks) == [(1, 3)]


def test_disjoint_blocks_pass_validation():
    doc = "one\ntwo\nthree\n"
    assert find_overlapping_blocks(doc, [EditBlock("one", "1"), EditBlock("three", "3")]) == []


def test_apply_logs_per_block_when_enabled(caplog):
    with caplog.at_level(logging.DEBUG):
        apply_edits("a\n", [EditBlock("a", "b"), EditBlock("zzz", "q")], log=True)
    assert "Block 1: exact match" in caplog.text
    assert "Block 2: NOT FOUND" in caplog.text
    assert "Applied 1/2, failed: 1" in caplog.text


def test_apply_is_silent_by_default(caplog):
    with caplog.at_level(logging.DEBUG):
        apply_edits("a\n", [EditBlock("a", "b")])
    assert caplog.records == []
