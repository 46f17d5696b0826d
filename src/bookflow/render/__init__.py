"""Render sinks for PDF output and in-memory previews."""

from bookflow.render.base import MemorySink, PlacedText, RenderSink
from bookflow.render.pdf import PDFSink

__all__ = [
    "MemorySink",
    "PDFSink",
    "PlacedText",
    "RenderSink",
]
