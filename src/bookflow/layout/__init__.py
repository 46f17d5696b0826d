"""Line breaking, block sequencing, and page flow."""

from bookflow.layout.blocks import BlockKind, Gap, LayoutItem, VisualBlock
from bookflow.layout.breaker import break_line, iter_visual_lines
from bookflow.layout.flow import FlowState, LayoutState, PageFlowController
from bookflow.layout.sequencer import sequence_blocks, sequence_chapter

__all__ = [
    "BlockKind",
    "FlowState",
    "Gap",
    "LayoutItem",
    "LayoutState",
    "PageFlowController",
    "VisualBlock",
    "break_line",
    "iter_visual_lines",
    "sequence_blocks",
    "sequence_chapter",
]
