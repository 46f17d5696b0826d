"""Font resolution and registration."""

import hashlib
import logging
import struct
from dataclasses import dataclass
from pathlib import Path

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont

from bookflow.config import FontPolicy
from bookflow.errors import FontReadError, FontResolutionError
from bookflow.fonts.catalog import FontCatalog, FontInfo, is_font_file, platform_font_dirs
from bookflow.fonts.google import get_google_font

logger = logging.getLogger(__name__)

# Registered ReportLab font names keyed by font file path
_REGISTERED: dict[Path, str] = {}


@dataclass(frozen=True)
class FontDescriptor:
    """
    A font ready for drawing.

    Attributes:
        family: Resolved family name (or the built-in font name).
        path: Font file path. None means a built-in PDF font is used.
        supports_script: Whether the font has glyphs for the policy's script probe.
        regular: Registered ReportLab font name for regular text.
        bold: Registered ReportLab font name for bold text.
    """

    family: str
    path: Path | None
    supports_script: bool
    regular: str
    bold: str

    @property
    def is_builtin(self) -> bool:
        return self.path is None


def _normalize_font_name(name: str) -> str:
    """
    Normalize a font file stem to a TitleCase ReportLab font name.

    Examples:
        "nanumgothic" → "Nanumgothic"
        "noto-sans-kr" → "Noto-Sans-Kr"
    """
    parts = name.replace(" ", "-").split("-")
    return "-".join(part.title() for part in parts)


def register_font(path: Path) -> str:
    """
    Register a TrueType font file with ReportLab.

    The name combines the file stem with a short hash of the resolved path,
    so same-named files in different directories never share a face.
    Registering the same path twice returns the existing name.

    Args:
        path: Path to a .ttf/.otf file.

    Returns:
        Registered font name.

    Raises:
        FontReadError: If the file cannot be read or parsed.
    """
    resolved = path.resolve()
    if resolved in _REGISTERED:
        return _REGISTERED[resolved]

    digest = hashlib.sha1(str(resolved).encode("utf-8")).hexdigest()[:8]
    font_name = f"{_normalize_font_name(path.stem)}-{digest}"
    try:
        font = TTFont(font_name, str(path))
    except (TTFError, OSError, ValueError, struct.error) as e:
        raise FontReadError(path, e) from e

    pdfmetrics.registerFont(font)
    _REGISTERED[resolved] = font_name
    logger.info(f"Registered font: {font_name} from {path.name}")
    return font_name


def supports_script(font_name: str, probe: str) -> bool:
    """
    Check whether a registered font has glyphs for every probe character.

    Built-in PDF fonts only cover Latin-1.

    Args:
        font_name: Registered ReportLab font name.
        probe: Characters to check. Whitespace is ignored.

    Returns:
        True if every probe character is covered.
    """
    chars = [char for char in probe if not char.isspace()]
    font = pdfmetrics.getFont(font_name)
    if not isinstance(font, TTFont):
        return all(ord(char) <= 0x00FF for char in chars)
    return all(ord(char) in font.face.charToGlyph for char in chars)


def _family_name(font_name: str) -> str:
    face = pdfmetrics.getFont(font_name).face
    family = face.familyName
    return family.decode("utf-8", errors="replace") if isinstance(family, bytes) else family


def _candidate_paths(
    policy: FontPolicy,
    font_path: Path | None,
    font_family: str | None,
    catalog: FontCatalog,
):
    """Yield (source, path) pairs in resolution order."""
    if font_path is not None:
        if is_font_file(font_path):
            yield "caller path", font_path
        else:
            logger.warning(f"Ignoring font path {font_path}: not an existing .ttf/.otf file")

    families = ([font_family] if font_family else []) + list(policy.families)
    for family in families:
        path = catalog.find(family)
        if path is not None and is_font_file(path):
            yield f"family '{family}'", path
        else:
            logger.debug(f"Font family '{family}' not installed")

    for path in policy.paths:
        if path.is_file():
            yield "fixed path", path
        else:
            logger.debug(f"Fallback font path {path} does not exist")

    if policy.download:
        for family in policy.google_families:
            path = get_google_font(family, policy.google_weight)
            if path is not None:
                yield f"Google Font '{family}'", path


def resolve_font(
    policy: FontPolicy | None = None,
    font_path: Path | None = None,
    font_family: str | None = None,
    catalog: FontCatalog | None = None,
) -> FontDescriptor:
    """
    Resolve and register the font used for an export.

    Resolution priority:
    1. Caller-supplied path, if it exists and is a .ttf/.otf file
    2. Caller family, then policy families, looked up in the installed catalog
    3. Policy fixed paths
    4. Google Fonts (only when policy.download is enabled)
    5. Built-in PDF fonts (when policy.allow_builtin is enabled)

    The first candidate that exists is loaded; a load failure is not retried
    with the next candidate.

    Args:
        policy: Fallback policy. Defaults to FontPolicy().
        font_path: Optional caller-selected font file.
        font_family: Optional caller-selected family name.
        catalog: Installed font catalog. Defaults to one over policy.font_dirs plus platform dirs.

    Returns:
        FontDescriptor for the resolved font.

    Raises:
        FontReadError: If the resolved file cannot be read.
        FontResolutionError: If nothing resolves and built-ins are disabled.
    """
    if policy is None:
        policy = FontPolicy()
    if catalog is None:
        catalog = FontCatalog(list(policy.font_dirs) + platform_font_dirs())

    for source, path in _candidate_paths(policy, font_path, font_family, catalog):
        font_name = register_font(path)
        supported = supports_script(font_name, policy.script_probe)
        if not supported:
            logger.warning(f"Font {path.name} lacks glyphs for '{policy.script_probe}'")
        logger.info(f"Resolved font from {source}: {path}")
        # External fonts double as their own bold face
        return FontDescriptor(
            family=_family_name(font_name),
            path=path,
            supports_script=supported,
            regular=font_name,
            bold=font_name,
        )

    if not policy.allow_builtin:
        raise FontResolutionError(
            "No usable font found: caller path, "
            f"{len(policy.families)} family name(s) and {len(policy.paths)} fixed path(s) exhausted"
        )

    supported = supports_script(policy.builtin_regular, policy.script_probe)
    logger.warning(
        f"No font file resolved, using built-in {policy.builtin_regular}"
        + ("" if supported else " (target script will not render)")
    )
    return FontDescriptor(
        family=policy.builtin_regular,
        path=None,
        supports_script=supported,
        regular=policy.builtin_regular,
        bold=policy.builtin_bold,
    )


__all__ = [
    "FontCatalog",
    "FontDescriptor",
    "FontInfo",
    "register_font",
    "resolve_font",
    "supports_script",
]
