"""PDF generation using ReportLab."""

import logging
from pathlib import Path

from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from bookflow.errors import OutputWriteError
from bookflow.render.base import RenderSink

logger = logging.getLogger(__name__)


class PDFSink(RenderSink):
    """Draws placement commands onto a ReportLab canvas and saves it to a file."""

    def __init__(
        self,
        output_path: Path,
        page_width: float,
        page_height: float,
        font_name: str = "Helvetica",
        bold_font_name: str = "Helvetica-Bold",
        title: str = "",
        author: str = "",
    ) -> None:
        """
        Initialize PDF sink.

        Args:
            output_path: Path to output PDF file.
            page_width: Page width in mm.
            page_height: Page height in mm.
            font_name: Registered ReportLab font for regular text.
            bold_font_name: Registered ReportLab font for bold text.
            title: Document title metadata.
            author: Document author metadata.
        """
        self.output_path = output_path
        self.font_name = font_name
        self.bold_font_name = bold_font_name
        self.pages = 1

        self.canvas = canvas.Canvas(str(output_path), pagesize=(page_width * mm, page_height * mm))
        if title:
            self.canvas.setTitle(title)
        if author:
            self.canvas.setAuthor(author)

    def draw_text(self, text: str, x: float, y: float, size: float, bold: bool = False) -> None:
        # ReportLab escapes PDF string delimiters itself, once per drawString call
        self.canvas.setFont(self.bold_font_name if bold else self.font_name, size)
        self.canvas.drawString(x * mm, y * mm, text)

    def new_page(self) -> None:
        self.canvas.showPage()
        self.pages += 1

    def close(self) -> None:
        """
        Save the PDF.

        Raises:
            OutputWriteError: If the destination cannot be written.
        """
        try:
            self.canvas.save()
        except OSError as e:
            raise OutputWriteError(self.output_path, e) from e
        logger.info(f"Saved {self.pages} page(s) to {self.output_path}")
