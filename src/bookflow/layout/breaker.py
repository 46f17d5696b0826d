"""Character-budget line breaking."""

from collections.abc import Iterator

from bookflow.config import DEFAULT_BREAK_CHARS


def _is_break_char(char: str, break_chars: str) -> bool:
    return char in break_chars or char.isspace()


def iter_visual_lines(text: str, budget: int, break_chars: str = DEFAULT_BREAK_CHARS) -> Iterator[str]:
    """
    Split one logical line into visual lines of at most ``budget`` characters.

    While the remainder is longer than the budget, scan backward from the
    budget position for the nearest break character and split right after it.
    When none is found the line is cut hard at the budget. Every visual line is
    trimmed, and a blank input yields nothing.

    Indexing is by code point, so wide characters are never split.

    Args:
        text: A single line with no newlines.
        budget: Maximum characters per visual line (>= 1).
        break_chars: Characters after which a break is preferred. Whitespace always qualifies.

    Yields:
        Visual lines in order.

    Raises:
        ValueError: If budget is less than 1.
    """
    if budget < 1:
        raise ValueError(f"Character budget must be at least 1, got {budget}")

    remaining = text.strip()
    while remaining:
        if len(remaining) <= budget:
            yield remaining
            return

        split_at = budget
        for i in range(min(budget, len(remaining)) - 1, -1, -1):
            if _is_break_char(remaining[i], break_chars):
                split_at = i + 1
                break

        yield remaining[:split_at].strip()
        remaining = remaining[split_at:].strip()


def break_line(text: str, budget: int, break_chars: str = DEFAULT_BREAK_CHARS) -> list[str]:
    """
    Break a logical line into a list of visual lines.

    See iter_visual_lines(). An empty list means the input was blank.
    """
    return list(iter_visual_lines(text, budget, break_chars))
