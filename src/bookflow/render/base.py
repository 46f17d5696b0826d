"""Render sink abstraction and an in-memory implementation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class RenderSink(ABC):
    """
    Consumer of placement commands.

    Coordinates are millimetres from the bottom-left corner of the page. The
    first page is open as soon as the sink exists; new_page() closes the
    current page and opens the next one.
    """

    @abstractmethod
    def draw_text(self, text: str, x: float, y: float, size: float, bold: bool = False) -> None:
        """
        Draw one visual line with its baseline at (x, y).

        Args:
            text: Text to draw, unescaped.
            x: Left edge in mm.
            y: Baseline in mm from the page bottom.
            size: Font size in points.
            bold: Draw with the bold face.
        """

    @abstractmethod
    def new_page(self) -> None:
        """Finish the current page and start a new one."""

    def close(self) -> None:
        """Finish the document. Sinks with nothing to flush can rely on this no-op."""


@dataclass(frozen=True)
class PlacedText:
    """A recorded draw command."""

    page: int
    text: str
    x: float
    y: float
    size: float
    bold: bool


@dataclass
class MemorySink(RenderSink):
    """Records draw commands per page instead of producing a document."""

    placements: list[PlacedText] = field(default_factory=list)
    page_count: int = 1
    closed: bool = False

    def draw_text(self, text: str, x: float, y: float, size: float, bold: bool = False) -> None:
        self.placements.append(PlacedText(self.page_count - 1, text, x, y, size, bold))

    def new_page(self) -> None:
        self.page_count += 1

    def close(self) -> None:
        self.closed = True

    def page(self, index: int) -> list[PlacedText]:
        """Placements on one zero-based page."""
        return [p for p in self.placements if p.page == index]

    @property
    def texts(self) -> list[str]:
        return [p.text for p in self.placements]
