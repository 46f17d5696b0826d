"""Installed font enumeration."""

import logging
import os
import struct
import sys
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase.ttfonts import TTFError, TTFontFile

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = (".ttf", ".otf")


@dataclass(frozen=True)
class FontInfo:
    """An installed font file and the names it answers to."""

    family: str
    full_name: str
    path: Path


def platform_font_dirs() -> list[Path]:
    """
    Get the conventional font directories for the current platform.

    Returns:
        Candidate directories; some may not exist.
    """
    home = Path.home()
    if sys.platform.startswith("win"):
        windir = Path(os.environ.get("WINDIR", r"C:\Windows"))
        dirs = [windir / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs
    if sys.platform == "darwin":
        return [Path("/System/Library/Fonts"), Path("/Library/Fonts"), home / "Library" / "Fonts"]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        home / ".local" / "share" / "fonts",
    ]


def is_font_file(path: Path) -> bool:
    """True if the path exists and has a recognized font-file extension."""
    return path.suffix.lower() in FONT_EXTENSIONS and path.is_file()


class FontCatalog:
    """
    Family-name index over installed font files.

    Directories are scanned lazily on first lookup. Files ReportLab cannot
    parse are skipped, and only the first file seen for a family is kept.
    """

    def __init__(self, directories: list[Path] | None = None) -> None:
        """
        Initialize catalog.

        Args:
            directories: Directories to scan recursively. Defaults to platform_font_dirs().
        """
        self.directories = platform_font_dirs() if directories is None else list(directories)
        self._fonts: dict[str, FontInfo] | None = None

    def _scan(self) -> dict[str, FontInfo]:
        fonts: dict[str, FontInfo] = {}
        for directory in self.directories:
            if not directory.is_dir():
                continue
            for path in sorted(directory.rglob("*")):
                if not is_font_file(path):
                    continue
                try:
                    face = TTFontFile(str(path), charInfo=0)
                except (TTFError, OSError, ValueError, struct.error) as e:
                    logger.debug(f"Skipping unreadable font {path}: {e}")
                    continue
                family = _decode_name(face.familyName)
                full_name = _decode_name(face.fullName)
                for key in (family, full_name):
                    if key and key.lower() not in fonts:
                        fonts[key.lower()] = FontInfo(family=family, full_name=full_name, path=path)
        logger.debug(f"Font catalog indexed {len(fonts)} name(s) from {len(self.directories)} dir(s)")
        return fonts

    @property
    def fonts(self) -> dict[str, FontInfo]:
        if self._fonts is None:
            self._fonts = self._scan()
        return self._fonts

    def find(self, family: str) -> Path | None:
        """
        Look up a font file by family or full name (case-insensitive).

        Args:
            family: Family name, e.g. "NanumGothic".

        Returns:
            Path to the font file, or None if the family is not installed.
        """
        info = self.fonts.get(family.strip().lower())
        return info.path if info else None

    def families(self) -> list[FontInfo]:
        """
        List installed families, one entry per family, sorted case-insensitively.

        Returns:
            FontInfo entries.
        """
        seen: dict[str, FontInfo] = {}
        for info in self.fonts.values():
            seen.setdefault(info.family, info)
        return sorted(seen.values(), key=lambda info: info.family.lower())


def _decode_name(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
