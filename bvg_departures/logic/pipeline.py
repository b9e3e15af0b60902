"""Normalization of raw provider entries into ranked departures."""

from __future__ import annotations

from datetime import datetime, timezone
import math
from typing import Iterable

from bvg_departures.data.models import Departure, RawEntry

EXCLUDED_LINE_PREFIXES = ("RE", "RB", "IC", "EC", "EN", "FEX", "ICE")
RING_LINES = frozenset({"S41", "S42"})

DESTINATION_PREFIXES = ("S ", "U ")
# Longest first so that " ⟲" wins over a bare "⟲" ending at the same position.
DESTINATION_SUFFIXES = (" (Berlin)", " Bhf", " ⟲", " ⟳", "⟲", "⟳")


def parse_time(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def minutes_until(when: str, now: datetime) -> int | None:
    """Whole minutes from now until when, floored; None if unparseable."""
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    departure_time = parse_time(when)
    if departure_time is None:
        return None
    return math.floor((departure_time - now).total_seconds() / 60)


def is_excluded_line(line_code: str) -> bool:
    """Regional/long-distance rail, the ring line and buses are not shown."""
    if line_code.startswith(EXCLUDED_LINE_PREFIXES):
        return True
    if line_code in RING_LINES:
        return True
    # Bus lines are plain numbers.
    return all(ch.isdigit() for ch in line_code)


def clean_destination(direction: str) -> str:
    """Strip the S/U marker and cut the text at the first noise suffix."""
    text = direction
    if text.startswith(DESTINATION_PREFIXES):
        text = text[2:]

    for end in range(1, len(text) + 1):
        for suffix in DESTINATION_SUFFIXES:
            if text.endswith(suffix, 0, end):
                return text[: end - len(suffix)]
    return text


def normalize(
    raw_entries: Iterable[RawEntry],
    home_station: str,
    horizon_minutes: int,
    now: datetime,
) -> list[Departure]:
    """Filter, clean and rank raw entries.

    Entries that cannot be used are dropped silently. The result is sorted by
    minutes with provider order kept for ties, and is not length-limited.
    """
    departures: list[Departure] = []
    for entry in raw_entries:
        if not entry.direction or not entry.when:
            continue
        if home_station and home_station in entry.direction:
            continue
        if is_excluded_line(entry.line_code):
            continue

        minutes = minutes_until(entry.when, now)
        if minutes is None or not 1 <= minutes <= horizon_minutes:
            continue

        departures.append(
            Departure(
                line=entry.line_code,
                destination=clean_destination(entry.direction),
                minutes=minutes,
            )
        )

    departures.sort(key=lambda d: d.minutes)
    return departures


__all__ = [
    "EXCLUDED_LINE_PREFIXES",
    "RING_LINES",
    "clean_destination",
    "is_excluded_line",
    "minutes_until",
    "normalize",
    "parse_time",
]
