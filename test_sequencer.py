"""Tests for the block sequencer."""

import pytest

from bookflow.config import LayoutConfig
from bookflow.layout.blocks import BlockKind, Gap, VisualBlock
from bookflow.layout.sequencer import sequence_blocks
from bookflow.models import Chapter, Footnote, Manuscript


def _blocks(manuscript: Manuscript, budget: int = 45) -> list[VisualBlock]:
    return [item for item in sequence_blocks(manuscript, LayoutConfig(), budget) if isinstance(item, VisualBlock)]


def _summary(blocks: list[VisualBlock]) -> list[tuple[BlockKind, str]]:
    return [(block.kind, block.text) for block in blocks]


def test_single_chapter_without_author():
    manuscript = Manuscript(title="T", author="", chapters=[Chapter(title="C1", body="hello world")])

    assert _summary(_blocks(manuscript, budget=5)) == [
        (BlockKind.TITLE, "T"),
        (BlockKind.HEADING, "C1"),
        (BlockKind.TEXT_LINE, "hello"),
        (BlockKind.TEXT_LINE, "world"),
    ]


def test_gaps_follow_front_matter_and_each_chapter():
    manuscript = Manuscript(title="T", chapters=[Chapter(title="C1", body="x")])

    items = list(sequence_blocks(manuscript, LayoutConfig(), 45))

    assert items[1] == Gap(15.0)
    assert items[-1] == Gap(15.0)


def test_author_block_uses_heading_kind_and_author_size():
    blocks = _blocks(Manuscript(title="T", author="Me"))

    author = blocks[1]
    assert (author.kind, author.text, author.size, author.bold) == (BlockKind.HEADING, "Me", 12.0, False)
    assert author.advance == pytest.approx(8.0)
    assert blocks[0].bold is True
    assert blocks[0].size == pytest.approx(24.0)


def test_empty_body_produces_only_heading():
    blocks = _blocks(Manuscript(title="T", chapters=[Chapter(title="Empty", body="")]))

    assert _summary(blocks) == [(BlockKind.TITLE, "T"), (BlockKind.HEADING, "Empty")]


def test_heading_reserves_room_for_following_line():
    heading = _blocks(Manuscript(title="T", chapters=[Chapter(title="C", body="")]))[1]

    assert heading.required_height == pytest.approx(30.0)
    assert heading.advance == pytest.approx(10.0)


def test_blank_source_line_becomes_spacer():
    blocks = _blocks(Manuscript(title="T", chapters=[Chapter(title="C", body="a\n\nb")]))

    assert [block.kind for block in blocks[2:]] == [BlockKind.TEXT_LINE, BlockKind.BLANK_SPACER, BlockKind.TEXT_LINE]
    assert blocks[3].advance == pytest.approx(3.0)


def test_chapter_and_footnote_order_is_preserved():
    manuscript = Manuscript(
        title="Book",
        author="Writer",
        chapters=[
            Chapter(title="A", body="a body", footnotes=[Footnote("1", "one"), Footnote("2", "two")]),
            Chapter(title="B", body="b body"),
        ],
    )

    assert _summary(_blocks(manuscript)) == [
        (BlockKind.TITLE, "Book"),
        (BlockKind.HEADING, "Writer"),
        (BlockKind.HEADING, "A"),
        (BlockKind.TEXT_LINE, "a body"),
        (BlockKind.FOOTNOTE_RULE, "─────────"),
        (BlockKind.FOOTNOTE_LINE, "1 one"),
        (BlockKind.FOOTNOTE_LINE, "2 two"),
        (BlockKind.HEADING, "B"),
        (BlockKind.TEXT_LINE, "b body"),
    ]


def test_footnote_block_layout():
    manuscript = Manuscript(title="T", chapters=[Chapter(title="C", footnotes=[Footnote("*", "note")])])

    items = list(sequence_blocks(manuscript, LayoutConfig(), 45))
    rule_index = next(i for i, item in enumerate(items) if getattr(item, "kind", None) is BlockKind.FOOTNOTE_RULE)

    assert items[rule_index - 1] == Gap(5.0)
    assert items[rule_index].required_height == pytest.approx(20.0)
    footnote = items[rule_index + 1]
    assert footnote.text == "* note"
    assert footnote.size == pytest.approx(9.0)
    assert footnote.advance == pytest.approx(4.8)


def test_footnote_separator_is_configurable():
    layout = LayoutConfig(footnote_separator=". ")
    manuscript = Manuscript(title="T", chapters=[Chapter(title="C", footnotes=[Footnote("1", "x")])])

    texts = [item.text for item in sequence_blocks(manuscript, layout, 45) if isinstance(item, VisualBlock)]

    assert texts[-1] == "1. x"


def test_long_body_lines_are_wrapped_independently():
    body = "aaaa bbbb\ncccc dddd"
    blocks = _blocks(Manuscript(title="T", chapters=[Chapter(title="C", body=body)]), budget=4)

    assert [block.text for block in blocks[2:]] == ["aaaa", "bbbb", "cccc", "dddd"]


def test_body_splits_on_newline_only():
    body = "one\x0ctwo three\x85four"
    blocks = _blocks(Manuscript(title="T", chapters=[Chapter(title="C", body=body)]))

    assert [block.kind for block in blocks[2:]] == [BlockKind.TEXT_LINE]
    assert blocks[2].text == body
