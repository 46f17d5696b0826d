"""Configuration loading and validation."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from bookflow.types import PageSizeName

# Named page sizes as (width, height) in millimetres
PAGE_SIZES: dict[str, tuple[float, float]] = {
    "a4": (210.0, 297.0),
    "a5": (148.0, 210.0),
    "b5": (176.0, 250.0),
    "letter": (215.9, 279.4),
}

DEFAULT_BREAK_CHARS = " ,.\u3002\uff0c"
"""Space, comma, period, ideographic full stop, full-width comma."""

EXTENDED_BREAK_CHARS = DEFAULT_BREAK_CHARS + "!?\u3001\uff01\uff1f"
"""Default set plus exclamation/question marks and the ideographic comma."""


class LayoutConfig(BaseModel):
    """
    Page geometry and typographic scale for the pagination engine.

    Lengths are millimetres, sizes are points. The vertical cursor is measured
    from the page bottom, so the first baseline on a page sits at
    ``page_height - margin_top``.

    Override only what you need using Pydantic's model_copy():

        base = LayoutConfig()
        narrow = base.model_copy(update={"char_budget": 30})
    """

    # ========================================================================
    # Page geometry
    # ========================================================================
    page_width: float = Field(210.0, gt=0)
    page_height: float = Field(297.0, gt=0)
    margin_top: float = Field(27.0, ge=0)
    margin_bottom: float = Field(25.0, ge=0)
    margin_left: float = Field(25.0, ge=0)
    margin_right: float = Field(25.0, ge=0)

    # ========================================================================
    # Typographic scale
    # ========================================================================
    title_size: float = 24.0
    author_size: float = 12.0
    heading_size: float = 16.0
    body_size: float = 11.0
    rule_size: float = 10.0
    footnote_size: float = 9.0

    line_height: float = Field(6.0, gt=0)
    """Advance for one body line."""

    blank_line_ratio: float = Field(0.5, ge=0)
    """Fraction of a line height a blank source line advances the cursor."""

    footnote_line_ratio: float = Field(0.8, gt=0)
    """Fraction of a line height each footnote line advances the cursor."""

    # ========================================================================
    # Fixed advances and gaps
    # ========================================================================
    title_advance: float = Field(12.0, ge=0)
    author_advance: float = Field(8.0, ge=0)
    front_matter_gap: float = Field(15.0, ge=0)
    """Gap between the title/author block and the first chapter."""

    heading_advance: float = Field(10.0, ge=0)
    heading_reserve: float = Field(30.0, ge=0)
    """Room a chapter heading needs below the cursor so it is never left alone at a page bottom."""

    footnote_gap: float = Field(5.0, ge=0)
    """Gap between the last body line and the footnote rule."""

    footnote_rule_reserve: float = Field(20.0, ge=0)
    chapter_gap: float = Field(15.0, ge=0)

    # ========================================================================
    # Line breaking
    # ========================================================================
    char_budget: int = Field(45, ge=1)
    """Maximum characters per visual line. 45 suits wide (CJK) scripts at 11pt on A4."""

    measure_budget: bool = False
    """Derive the budget from measured glyph advances instead of char_budget."""

    break_chars: str = DEFAULT_BREAK_CHARS
    footnote_separator: str = " "
    footnote_rule: str = "\u2500" * 9

    @property
    def page_top(self) -> float:
        """Cursor value for the first baseline on a fresh page."""
        return self.page_height - self.margin_top

    @property
    def text_width(self) -> float:
        """Width of the text area between the left and right margins."""
        return self.page_width - self.margin_left - self.margin_right

    def with_page_size(self, name: PageSizeName) -> "LayoutConfig":
        """
        Return a copy of this layout using a named page size.

        Args:
            name: Page size name (e.g., "a4", "a5", "letter").

        Returns:
            New LayoutConfig with page_width/page_height replaced.

        Raises:
            ValueError: If the name is not a known page size.
        """
        try:
            width, height = PAGE_SIZES[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown page size '{name}'. Known sizes: {', '.join(PAGE_SIZES)}") from None
        return self.model_copy(update={"page_width": width, "page_height": height})


class FontPolicy(BaseModel):
    """Ordered fallback chain used when resolving the export font."""

    families: list[str] = [
        "Malgun Gothic",
        "\ub9d1\uc740 \uace0\ub515",
        "NanumGothic",
        "\ub098\ub214\uace0\ub515",
        "Noto Sans KR",
        "Noto Sans CJK KR",
        "Pretendard",
    ]
    """Family names queried against the installed font catalog, in order."""

    paths: list[Path] = [
        Path(r"C:\Windows\Fonts\malgun.ttf"),
        Path(r"C:\Windows\Fonts\NanumGothic.ttf"),
        Path("/Library/Fonts/NanumGothic.ttf"),
        Path("/usr/share/fonts/truetype/nanum/NanumGothic.ttf"),
    ]
    """Fixed filesystem paths tried after the catalog."""

    font_dirs: list[Path] = []
    """Extra directories scanned in addition to the platform font directories."""

    script_probe: str = "\uac00\ub098\ub2e4"
    """Characters that must have glyphs for the font to count as supporting the target script."""

    google_families: list[str] = ["Noto Sans KR"]
    """Google Fonts families tried when download is enabled."""

    google_weight: int = Field(400, ge=100, le=900)
    """Weight requested for google_families."""

    download: bool = False
    """Allow downloading google_families into the local cache."""

    allow_builtin: bool = True
    """Fall back to the built-in PDF fonts when nothing else resolves."""

    builtin_regular: str = "Helvetica"
    builtin_bold: str = "Helvetica-Bold"


class ExportConfig(BaseModel):
    """Root configuration."""

    layout: LayoutConfig = LayoutConfig()
    fonts: FontPolicy = FontPolicy()


def load_config(config_path: Path | None = None) -> ExportConfig:
    """
    Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses ./bookflow.toml when present
                     and built-in defaults otherwise.

    Returns:
        Validated ExportConfig object.

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist.
        ValueError: If config is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / "bookflow.toml"
        if not config_path.exists():
            return ExportConfig()

    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.toml.example to bookflow.toml and adjust it."
        )

    with open(config_path, "rb") as f:
        try:
            config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML in {config_path}: {e}") from e

    return ExportConfig(**config_dict)


def sanitize_filename(name: str) -> str:
    """
    Sanitize string for use in filename.

    Args:
        name: String to sanitize.

    Returns:
        Sanitized string safe for filenames.
    """
    # Replace invalid filename characters
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        name = name.replace(char, "_")

    # Remove leading/trailing whitespace and dots
    name = name.strip(". ")

    return name
