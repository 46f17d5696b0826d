"""Google Fonts downloads for the optional last step of font resolution."""

import logging
import re
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

CACHE_DIR = Path.home() / ".cache" / "bookflow" / "fonts"

# CSS API v1 answers with TrueType URLs for the legacy family:weight syntax
CSS_URL = "https://fonts.googleapis.com/css"

# sfnt versions ReportLab can embed; CFF-flavoured "OTTO" files are rejected
TRUETYPE_MAGIC = (b"\x00\x01\x00\x00", b"true")


def is_truetype(data: bytes) -> bool:
    """True if data starts with a TrueType sfnt header."""
    return len(data) > 12 and data[:4] in TRUETYPE_MAGIC


def cache_path_for(family: str, weight: int, cache_dir: Path | None = None) -> Path:
    """Cache location for one family/weight pair, e.g. ``NotoSansKR-400.ttf``."""
    return (cache_dir or CACHE_DIR) / f"{family.replace(' ', '')}-{weight}.ttf"


def get_google_font(family: str, weight: int = 400, cache_dir: Path | None = None) -> Optional[Path]:
    """
    Return a cached TrueType file for a Google Fonts family, downloading it if needed.

    A cached file that is not TrueType is replaced. Failures are logged and
    reported as None so resolution falls through to the built-in fonts.

    Args:
        family: Font family name (e.g., "Noto Sans KR").
        weight: Font weight (100-900).
        cache_dir: Cache directory. Defaults to CACHE_DIR.

    Returns:
        Path to the cached TTF file, or None if no usable file could be fetched.
    """
    cache_path = cache_path_for(family, weight, cache_dir)

    if cache_path.exists():
        if is_truetype(cache_path.read_bytes()):
            logger.info(f"Using cached Google Font: {cache_path.name}")
            return cache_path
        logger.warning(f"Discarding invalid cached font {cache_path}")

    try:
        data = _download(family, weight)
    except requests.RequestException as e:
        logger.error(f"Failed to download Google Font {family} (weight {weight}): {e}")
        return None

    if data is None:
        return None
    if not is_truetype(data):
        logger.error(f"Downloaded data for {family} (weight {weight}) is not a TrueType font")
        return None

    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)
        cache_path.write_bytes(data)
    except OSError as e:
        logger.error(f"Failed to cache Google Font {family}: {e}")
        return None

    logger.info(f"Downloaded and cached Google Font: {cache_path.name}")
    return cache_path


def _download(family: str, weight: int) -> Optional[bytes]:
    """Fetch the stylesheet, then the font file it points to."""
    logger.info(f"Downloading Google Font: {family} (weight {weight})")
    css_response = requests.get(
        CSS_URL, params={"family": f"{family}:{weight}", "display": "swap"}, timeout=10
    )
    css_response.raise_for_status()

    font_file_url = _extract_font_url_from_css(css_response.text)
    if not font_file_url:
        logger.error(f"No TrueType URL in stylesheet for {family} (weight {weight})")
        return None

    font_response = requests.get(font_file_url, timeout=30)
    font_response.raise_for_status()
    return font_response.content


def _extract_font_url_from_css(css_content: str) -> Optional[str]:
    """
    Extract the first TrueType URL from a Google Fonts stylesheet.

    Args:
        css_content: Stylesheet text.

    Returns:
        URL to the font file, or None if not found.
    """
    match = re.search(r"src:\s*url\((https://[^)]+\.ttf)\)", css_content) or re.search(
        r"(https://[^\s'\"]+\.ttf)", css_content
    )
    return match.group(1) if match else None
