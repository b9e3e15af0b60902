"""Offline departure source for running the board without network access."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

from bvg_departures.data.models import RawEntry

# (line, direction, minutes from now)
DEMO_DEPARTURES = [
    ("U3", "U Krumme Lanke (Berlin)", 5),
    ("S7", "S Potsdam Hauptbahnhof Bhf", 8),
    ("S5", "S Strausberg Nord", 2),
    ("M10", "Turmstr.", 11),
    ("S41", "Ringbahn S41 ⟳", 3),
    ("RE1", "Frankfurt (Oder)", 4),
    ("347", "Tunnelstr.", 6),
    ("U1", "U Warschauer Str.", 7),
]


class DemoClient:
    """Serve a fixed departure set timed relative to the current clock."""

    def __init__(self, now_fn: Callable[[], datetime] | None = None) -> None:
        self._now_fn = now_fn or (lambda: datetime.now(timezone.utc))

    def get_departures(self, station_id: str, duration_minutes: int) -> list[RawEntry]:
        # Half a minute of slack keeps the floored minute count stable.
        base = self._now_fn() + timedelta(seconds=30)
        return [
            RawEntry(
                line_code=line,
                direction=direction,
                when=(base + timedelta(minutes=minutes)).isoformat(),
            )
            for line, direction, minutes in DEMO_DEPARTURES
            if minutes <= duration_minutes
        ]


__all__ = ["DEMO_DEPARTURES", "DemoClient"]
