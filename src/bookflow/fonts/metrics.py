"""Character budget for the line breaker."""

import logging
import math

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from bookflow.config import LayoutConfig

logger = logging.getLogger(__name__)

# Probe used for measured budgets when the font cannot draw the script probe
LATIN_PROBE = "MW"


def char_budget(layout: LayoutConfig, font_name: str | None = None, probe: str = "") -> int:
    """
    Maximum characters per visual line at the body size.

    Without measurement this is layout.char_budget, a constant tuned per
    script width. With layout.measure_budget and a font, the text-area width
    is divided by the advance of the widest probe glyph, so the budget never
    overfills a line of probe-width characters.

    Args:
        layout: Layout configuration.
        font_name: Registered ReportLab font used for body text.
        probe: Characters representative of the target script.

    Returns:
        Budget of at least 1.
    """
    if not layout.measure_budget or font_name is None:
        return layout.char_budget

    chars = [char for char in probe if not char.isspace()] or list(LATIN_PROBE)
    widest = max(pdfmetrics.stringWidth(char, font_name, layout.body_size) for char in chars)
    if widest <= 0:
        return layout.char_budget

    budget = max(1, math.floor(layout.text_width * mm / widest))
    logger.debug(f"Measured budget {budget} chars ({font_name} {layout.body_size}pt, widest {widest:.2f}pt)")
    return budget
