"""Block sequencer: walks a manuscript and emits layout items in reading order."""

from collections.abc import Iterator

from bookflow.config import LayoutConfig
from bookflow.layout.blocks import BlockKind, Gap, LayoutItem, VisualBlock
from bookflow.layout.breaker import iter_visual_lines
from bookflow.models import Chapter, Manuscript


def sequence_blocks(manuscript: Manuscript, layout: LayoutConfig, budget: int) -> Iterator[LayoutItem]:
    """
    Emit the layout items for a whole manuscript.

    Order: title, author (if any), front-matter gap, then for each chapter its
    heading, body lines, optional footnote block and the chapter gap.

    Args:
        manuscript: Manuscript to lay out.
        layout: Layout configuration providing sizes and advances.
        budget: Character budget for body lines.

    Yields:
        VisualBlock and Gap items in output order.
    """
    yield VisualBlock(BlockKind.TITLE, manuscript.title, layout.title_size, layout.title_advance, bold=True)

    if manuscript.author:
        yield VisualBlock(BlockKind.HEADING, manuscript.author, layout.author_size, layout.author_advance)

    yield Gap(layout.front_matter_gap)

    for chapter in manuscript.chapters:
        yield from sequence_chapter(chapter, layout, budget)


def sequence_chapter(chapter: Chapter, layout: LayoutConfig, budget: int) -> Iterator[LayoutItem]:
    """Emit the items for one chapter."""
    yield VisualBlock(
        BlockKind.HEADING,
        chapter.title,
        layout.heading_size,
        layout.heading_advance,
        bold=True,
        reserve=layout.heading_reserve,
    )

    blank_advance = layout.line_height * layout.blank_line_ratio
    for line in chapter.body_lines():
        visual_lines = list(iter_visual_lines(line, budget, layout.break_chars))
        if not visual_lines:
            yield VisualBlock(BlockKind.BLANK_SPACER, "", layout.body_size, blank_advance)
            continue
        for visual_line in visual_lines:
            yield VisualBlock(BlockKind.TEXT_LINE, visual_line, layout.body_size, layout.line_height)

    if chapter.footnotes:
        yield Gap(layout.footnote_gap)
        yield VisualBlock(
            BlockKind.FOOTNOTE_RULE,
            layout.footnote_rule,
            layout.rule_size,
            layout.line_height,
            reserve=layout.footnote_rule_reserve,
        )
        footnote_advance = layout.line_height * layout.footnote_line_ratio
        for footnote in chapter.footnotes:
            text = f"{footnote.marker}{layout.footnote_separator}{footnote.content}"
            # Long footnotes wrap at the body budget; a blank one still occupies a line
            for visual_line in list(iter_visual_lines(text, budget, layout.break_chars)) or [""]:
                yield VisualBlock(BlockKind.FOOTNOTE_LINE, visual_line, layout.footnote_size, footnote_advance)

    yield Gap(layout.chapter_gap)
