"""Rendering utilities for the LED matrix display."""

from bvg_departures.rendering.composer import compose_frame
from bvg_departures.rendering.emulator import save_frame
from bvg_departures.rendering.frame_data import FrameData
from bvg_departures.rendering.text import format_truncated, wrap

__all__ = ["FrameData", "compose_frame", "format_truncated", "save_frame", "wrap"]
