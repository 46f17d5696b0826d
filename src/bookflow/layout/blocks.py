"""Typed layout blocks produced by the sequencer and placed by the flow controller."""

from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """Kinds of visual blocks."""

    TITLE = "title"
    HEADING = "heading"
    TEXT_LINE = "text_line"
    BLANK_SPACER = "blank_spacer"
    FOOTNOTE_RULE = "footnote_rule"
    FOOTNOTE_LINE = "footnote_line"


@dataclass(frozen=True)
class VisualBlock:
    """
    One unit of layout content.

    Attributes:
        kind: Block kind.
        text: Text to draw (empty for spacers).
        size: Font size in points.
        bold: Whether to draw with the bold face.
        advance: Distance the cursor moves down after placing the block (mm).
        reserve: Room required below the cursor before placing (mm). Defaults to advance.
    """

    kind: BlockKind
    text: str
    size: float
    advance: float
    bold: bool = False
    reserve: float | None = None

    @property
    def required_height(self) -> float:
        """Room that must remain above the bottom margin to place this block."""
        return self.advance if self.reserve is None else self.reserve

    @property
    def draws(self) -> bool:
        """Spacers only move the cursor."""
        return self.kind is not BlockKind.BLANK_SPACER and bool(self.text)


@dataclass(frozen=True)
class Gap:
    """Fixed vertical gap between blocks (mm). Moves the cursor without drawing."""

    height: float


LayoutItem = VisualBlock | Gap
