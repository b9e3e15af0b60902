"""Single-shot poller that fetches and normalizes departures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
import time
from typing import Callable, Protocol

from bvg_departures.data.models import Departure, RawEntry
from bvg_departures.data.vbb_client import VBBClientError
from bvg_departures.logic.pipeline import normalize

logger = logging.getLogger(__name__)


class DepartureSource(Protocol):
    def get_departures(self, station_id: str, duration_minutes: int) -> list[RawEntry]: ...


@dataclass(frozen=True)
class PollResult:
    """Outcome of one provider poll attempt."""

    departures: list[Departure] = field(default_factory=list)
    fetched_at: float = 0.0
    error: str | None = None


class DeparturePoller:
    """Fetch raw entries for one station and run them through the pipeline."""

    def __init__(
        self,
        client: DepartureSource,
        station_id: str,
        home_station: str,
        horizon_minutes: int,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self._client = client
        self._station_id = station_id
        self._home_station = home_station
        self._horizon_minutes = horizon_minutes
        self._now_fn = now_fn or (lambda: datetime.now(timezone.utc))

    def fetch_once(self) -> PollResult:
        try:
            raw_entries = self._client.get_departures(self._station_id, self._horizon_minutes)
        except VBBClientError as exc:
            return PollResult(departures=[], fetched_at=time.time(), error=str(exc))

        departures = normalize(
            raw_entries,
            home_station=self._home_station,
            horizon_minutes=self._horizon_minutes,
            now=self._now_fn(),
        )
        logger.debug(
            "departures_normalized raw=%d kept=%d", len(raw_entries), len(departures)
        )
        return PollResult(departures=departures, fetched_at=time.time(), error=None)


__all__ = ["DepartureSource", "PollResult", "DeparturePoller"]
