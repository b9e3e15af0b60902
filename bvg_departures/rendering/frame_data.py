"""Data structures for rendering frames."""

from __future__ import annotations

from dataclasses import dataclass, field

from bvg_departures.data.models import Departure


@dataclass(frozen=True)
class FrameData:
    """Frame data for the renderer."""

    departure: Departure | None  # None draws the idle frame
    lines: list[str] = field(default_factory=list)  # pre-wrapped "line destination" text


__all__ = ["FrameData"]
