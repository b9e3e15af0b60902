"""Text layout helpers for small character-cell displays."""

from __future__ import annotations

from bvg_departures.data.models import Departure


def format_truncated(departure: Departure, max_chars: int) -> str:
    """Fit a departure into max_chars, shortening only the destination."""
    formatted = departure.format()
    if len(formatted) <= max_chars:
        return formatted

    line_text = f"{departure.line} "
    minutes_text = f" {departure.minutes} min"
    overhead = len(line_text) + len(minutes_text)
    if overhead >= max_chars:
        return formatted[:max_chars]

    destination = departure.destination[: max_chars - overhead]
    return f"{line_text}{destination}{minutes_text}"


def wrap(text: str, max_width: int, max_lines: int) -> list[str]:
    """Greedy word wrap into exactly max_lines lines.

    Words longer than max_width are cut to max_width and put on their own
    line. Words that do not fit once max_lines lines are filled are dropped,
    and missing lines are padded with empty strings.
    """
    lines: list[str] = []
    current = ""
    for word in text.split():
        needed = len(word) if not current else len(current) + 1 + len(word)
        if needed <= max_width:
            current = f"{current} {word}" if current else word
            continue

        if current and len(lines) < max_lines:
            lines.append(current)
        current = ""
        if len(lines) >= max_lines:
            break
        current = word[:max_width]

    if current and len(lines) < max_lines:
        lines.append(current)
    lines.extend([""] * (max_lines - len(lines)))
    return lines


__all__ = ["format_truncated", "wrap"]
