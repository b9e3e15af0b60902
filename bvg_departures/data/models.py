"""Data structures for provider entries and cleaned departures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawEntry:
    """Single departure candidate as delivered by the provider."""

    line_code: str
    direction: str | None
    when: str | None
    delay: int | None = None  # reserved, not used downstream


@dataclass(frozen=True)
class Departure:
    """Cleaned departure ready for display."""

    line: str
    destination: str
    minutes: int

    def format(self) -> str:
        return f"{self.line} {self.destination} {self.minutes} min"


__all__ = ["RawEntry", "Departure"]
