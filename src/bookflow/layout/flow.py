"""Page flow controller: vertical cursor state and page-break policy."""

import logging
from dataclasses import dataclass
from enum import Enum

from bookflow.config import LayoutConfig
from bookflow.layout.blocks import VisualBlock
from bookflow.render.base import RenderSink

logger = logging.getLogger(__name__)


class FlowState(Enum):
    """Controller states. PAGE_BREAK_PENDING only lasts while a new page is created."""

    FLOWING = "flowing"
    PAGE_BREAK_PENDING = "page_break_pending"


@dataclass
class LayoutState:
    """
    Mutable cursor state for one export.

    Attributes:
        page_index: Zero-based index of the current page.
        current_y: Baseline for the next block, measured from the page bottom (mm).
        blocks_placed: Number of blocks placed so far.
    """

    page_index: int
    current_y: float
    blocks_placed: int = 0

    @property
    def page_count(self) -> int:
        return self.page_index + 1


class PageFlowController:
    """
    Places visual blocks top-to-bottom, starting new pages when a block does not fit.

    The first page is assumed to be open on the sink already. Blocks are never
    split and already placed blocks are never reflowed: a block that does not
    fit moves to the next page along with everything after it.
    """

    def __init__(self, layout: LayoutConfig, sink: RenderSink) -> None:
        """
        Initialize controller.

        Args:
            layout: Page geometry and advances.
            sink: Render sink receiving draw and new-page commands.
        """
        self.layout = layout
        self.sink = sink
        self.state = LayoutState(page_index=0, current_y=layout.page_top)
        self.flow_state = FlowState.FLOWING

    def ensure_room(self, required_height: float) -> bool:
        """
        Start a new page if ``required_height`` does not fit above the bottom margin.

        Args:
            required_height: Room needed below the cursor (mm).

        Returns:
            True if a new page was started.
        """
        if self.state.current_y - required_height >= self.layout.margin_bottom:
            return False

        self.flow_state = FlowState.PAGE_BREAK_PENDING
        logger.debug(
            f"Page break at y={self.state.current_y:.2f} (needed {required_height:.2f}), "
            f"starting page {self.state.page_count + 1}"
        )
        self.sink.new_page()
        self.state.page_index += 1
        self.state.current_y = self.layout.page_top
        self.flow_state = FlowState.FLOWING
        return True

    def place(self, block: VisualBlock) -> None:
        """
        Place one block at the cursor and advance past it.

        Args:
            block: Block to place.
        """
        self.ensure_room(block.required_height)
        if block.draws:
            self.sink.draw_text(
                block.text,
                x=self.layout.margin_left,
                y=self.state.current_y,
                size=block.size,
                bold=block.bold,
            )
        self.state.current_y -= block.advance
        self.state.blocks_placed += 1

    def skip(self, gap: float) -> None:
        """
        Move the cursor down by a fixed gap without drawing.

        Gaps never start a page themselves; the next placed block decides.

        Args:
            gap: Distance in mm (must be >= 0).
        """
        if gap < 0:
            raise ValueError(f"Gap must be non-negative, got {gap}")
        self.state.current_y -= gap
