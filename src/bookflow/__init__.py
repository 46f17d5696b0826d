"""Paginated PDF export for manuscripts."""

__version__ = "0.1.0"

from bookflow.config import ExportConfig, FontPolicy, LayoutConfig, load_config
from bookflow.errors import (
    ExportAborted,
    ExportError,
    FontReadError,
    FontResolutionError,
    OutputWriteError,
)
from bookflow.export import ExportResult, export_pdf, paginate
from bookflow.fonts import FontDescriptor, resolve_font
from bookflow.models import Chapter, Footnote, Manuscript, load_manuscript
from bookflow.render import MemorySink, PDFSink, RenderSink

__all__ = [
    "Chapter",
    "ExportAborted",
    "ExportConfig",
    "ExportError",
    "ExportResult",
    "FontDescriptor",
    "FontPolicy",
    "FontReadError",
    "FontResolutionError",
    "Footnote",
    "LayoutConfig",
    "Manuscript",
    "MemorySink",
    "OutputWriteError",
    "PDFSink",
    "RenderSink",
    "export_pdf",
    "load_config",
    "load_manuscript",
    "paginate",
    "resolve_font",
]
