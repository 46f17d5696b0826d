"""High-level export API: manuscript in, paginated document out."""

import logging
from dataclasses import dataclass
from pathlib import Path

from bookflow.config import ExportConfig, LayoutConfig
from bookflow.errors import ExportAborted
from bookflow.fonts import FontCatalog, FontDescriptor, resolve_font
from bookflow.fonts.metrics import LATIN_PROBE, char_budget
from bookflow.layout.blocks import Gap
from bookflow.layout.flow import LayoutState, PageFlowController
from bookflow.layout.sequencer import sequence_blocks
from bookflow.models import Manuscript
from bookflow.render.base import RenderSink
from bookflow.render.pdf import PDFSink
from bookflow.types import AbortCheck

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a finished export."""

    path: Path
    pages: int
    font: FontDescriptor
    budget: int


def paginate(
    manuscript: Manuscript,
    sink: RenderSink,
    layout: LayoutConfig,
    budget: int,
    should_abort: AbortCheck | None = None,
) -> LayoutState:
    """
    Flow a manuscript onto a render sink.

    The sink is not closed here; the caller owns its lifecycle.

    Args:
        manuscript: Manuscript to lay out.
        sink: Sink receiving draw and new-page commands.
        layout: Layout configuration.
        budget: Character budget for visual lines.
        should_abort: Polled once per block; returning True stops the export.

    Returns:
        Final layout state (page count, cursor).

    Raises:
        ExportAborted: If should_abort returned True.
    """
    controller = PageFlowController(layout, sink)
    for item in sequence_blocks(manuscript, layout, budget):
        if isinstance(item, Gap):
            controller.skip(item.height)
            continue
        if should_abort is not None and should_abort():
            raise ExportAborted(f"Export aborted after {controller.state.blocks_placed} block(s)")
        controller.place(item)

    logger.debug(
        f"Flowed {controller.state.blocks_placed} block(s) onto {controller.state.page_count} page(s)"
    )
    return controller.state


def export_pdf(
    manuscript: Manuscript,
    output_path: Path,
    config: ExportConfig | None = None,
    font_path: Path | None = None,
    font_family: str | None = None,
    should_abort: AbortCheck | None = None,
    catalog: FontCatalog | None = None,
) -> ExportResult:
    """
    Export a manuscript to a PDF file.

    Args:
        manuscript: Manuscript to export.
        output_path: Destination PDF path.
        config: Export configuration. Defaults to ExportConfig().
        font_path: Optional caller-selected font file.
        font_family: Optional caller-selected font family.
        should_abort: Optional abort hook polled once per block.
        catalog: Installed font catalog override.

    Returns:
        ExportResult describing the written file.

    Raises:
        FontReadError: If the resolved font cannot be read.
        FontResolutionError: If no font resolves.
        OutputWriteError: If the PDF cannot be written.
        ExportAborted: If should_abort returned True. Nothing is written.
    """
    config = config or ExportConfig()
    layout = config.layout

    font = resolve_font(config.fonts, font_path=font_path, font_family=font_family, catalog=catalog)
    probe = config.fonts.script_probe if font.supports_script else LATIN_PROBE
    budget = char_budget(layout, font.regular, probe)

    sink = PDFSink(
        output_path,
        layout.page_width,
        layout.page_height,
        font_name=font.regular,
        bold_font_name=font.bold,
        title=manuscript.title,
        author=manuscript.author,
    )
    state = paginate(manuscript, sink, layout, budget, should_abort=should_abort)
    sink.close()

    logger.info(f"Exported '{manuscript.title}' ({state.page_count} page(s)) to {output_path}")
    return ExportResult(path=output_path, pages=state.page_count, font=font, budget=budget)
