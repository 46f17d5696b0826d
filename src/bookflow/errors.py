"""Exceptions raised by the export pipeline."""

from pathlib import Path


class ExportError(Exception):
    """Base class for every failure that aborts an export."""


class FontResolutionError(ExportError):
    """No usable font was found after exhausting the fallback chain."""


class FontReadError(ExportError):
    """A resolved font file exists but could not be read or parsed."""

    def __init__(self, path: Path | str, reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read font file '{self.path}': {reason}")


class OutputWriteError(ExportError):
    """The output document could not be written to its destination."""

    def __init__(self, path: Path | str, reason: object) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write '{self.path}': {reason}")


class ExportAborted(ExportError):
    """The caller's abort hook asked the export to stop."""
