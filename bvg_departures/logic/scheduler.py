"""Refresh/rotate/render loop over a single shared rotation state.

Two timers fire independently: the refresh timer replaces the held departure
list from the provider, and the rotate timer advances the displayed index.
Either one marks the state as needing a render, which happens at most once
per tick.

The index is deliberately not reset when a refresh changes the list length;
it is always taken modulo the current length where it is used.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Callable

from bvg_departures.config import DisplayConfig, SchedulerConfig
from bvg_departures.data.models import Departure
from bvg_departures.data.poller import DeparturePoller, PollResult
from bvg_departures.display.renderers import Renderer
from bvg_departures.rendering.frame_data import FrameData
from bvg_departures.rendering.text import wrap

logger = logging.getLogger(__name__)


@dataclass
class RotationState:
    """Mutable loop state owned by one scheduler."""

    departures: list[Departure] = field(default_factory=list)
    current_index: int = 0
    last_fetch: float | None = None
    last_rotate: float = 0.0
    needs_render: bool = False


def refresh_due(state: RotationState, now: float, fetch_period: float) -> bool:
    return state.last_fetch is None or now - state.last_fetch >= fetch_period


def apply_refresh(state: RotationState, result: PollResult, now: float, top_k: int) -> None:
    """Replace the held departures on success; keep stale data on failure."""
    state.last_fetch = now
    if result.error is not None:
        logger.warning("refresh_failed error=%s kept=%d", result.error, len(state.departures))
        return

    state.departures = list(result.departures[:top_k])
    state.needs_render = True
    if state.departures:
        logger.info(
            "departures_fetched %s",
            " | ".join(dep.format() for dep in state.departures),
        )
    else:
        logger.info("no_departures")


def rotate(state: RotationState, now: float, rotate_period: float) -> bool:
    """Advance to the next departure once the rotate period has elapsed."""
    if now - state.last_rotate < rotate_period or len(state.departures) <= 1:
        return False
    state.current_index = (state.current_index + 1) % len(state.departures)
    state.needs_render = True
    state.last_rotate = now
    return True


def build_frame(state: RotationState, wrap_width: int, wrap_lines: int) -> FrameData:
    """Frame for the current departure, or the idle frame if there is none."""
    if not state.departures:
        return FrameData(departure=None, lines=[])
    departure = state.departures[state.current_index % len(state.departures)]
    text = f"{departure.line} {departure.destination}"
    return FrameData(departure=departure, lines=wrap(text, wrap_width, wrap_lines))


def render(state: RotationState, renderer: Renderer, wrap_width: int, wrap_lines: int) -> bool:
    """Hand the current frame to the renderer if anything changed.

    An empty departure list still produces a frame: the renderer gets an idle
    frame instead of the call being skipped, so a vanished departure does not
    stay on the panel.
    """
    if not state.needs_render:
        return False
    frame = build_frame(state, wrap_width, wrap_lines)
    renderer.show(frame)
    state.needs_render = False
    if frame.departure is not None:
        logger.debug("showing %s", frame.departure.format())
    return True


class RotationScheduler:
    """Drive refresh, rotation and rendering from one single-threaded loop."""

    def __init__(
        self,
        poller: DeparturePoller,
        renderer: Renderer,
        settings: SchedulerConfig,
        display: DisplayConfig,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._poller = poller
        self._renderer = renderer
        self._settings = settings
        self._display = display
        self._clock = clock
        self._sleep = sleep
        self.state = RotationState(last_rotate=clock())

    def tick(self, now: float) -> None:
        """Run one loop iteration: refresh, rotate, then render."""
        if refresh_due(self.state, now, self._settings.fetch_period_seconds):
            # Blocks for up to the client timeout; rotation waits meanwhile.
            result = self._poller.fetch_once()
            apply_refresh(self.state, result, now, self._settings.top_k)

        rotate(self.state, now, self._settings.rotate_period_seconds)
        render(
            self.state,
            self._renderer,
            self._display.wrap_width,
            self._display.wrap_lines,
        )

    def run(self, iterations: int | None = None) -> None:
        """Loop forever, or for a fixed number of iterations."""
        count = 0
        while iterations is None or count < iterations:
            self.tick(self._clock())
            count += 1
            self._sleep(self._settings.tick_seconds)


__all__ = [
    "RotationScheduler",
    "RotationState",
    "apply_refresh",
    "build_frame",
    "refresh_due",
    "render",
    "rotate",
]
