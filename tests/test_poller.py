from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from bvg_departures.data.demo import DemoClient
from bvg_departures.data.models import Departure, RawEntry
from bvg_departures.data.poller import DeparturePoller
from bvg_departures.data.vbb_client import TransportError

NOW = datetime(2024, 5, 17, 12, 0, 0, tzinfo=timezone.utc)


def _poller(client) -> DeparturePoller:
    return DeparturePoller(
        client=client,
        station_id="900120003",
        home_station="Warschauer",
        horizon_minutes=15,
        now_fn=lambda: NOW,
    )


def test_fetch_once_success() -> None:
    client = MagicMock()
    client.get_departures.return_value = [
        RawEntry("S3", "S Erkner Bhf", (NOW + timedelta(minutes=9)).isoformat()),
        RawEntry("S41", "Ringbahn S41 ⟳", (NOW + timedelta(minutes=2)).isoformat()),
        RawEntry("U1", "U Uhlandstr.", (NOW + timedelta(minutes=4)).isoformat()),
    ]

    result = _poller(client).fetch_once()

    assert result.error is None
    assert result.departures == [Departure("U1", "Uhlandstr.", 4), Departure("S3", "Erkner", 9)]
    assert isinstance(result.fetched_at, float)
    assert result.fetched_at > 0
    client.get_departures.assert_called_once_with("900120003", 15)


def test_fetch_once_client_error() -> None:
    client = MagicMock()
    client.get_departures.side_effect = TransportError("timeout")

    result = _poller(client).fetch_once()

    assert result.departures == []
    assert result.error == "timeout"


def test_fetch_once_empty_result_is_not_an_error() -> None:
    client = MagicMock()
    client.get_departures.return_value = []

    result = _poller(client).fetch_once()

    assert result.error is None
    assert result.departures == []


def test_demo_client_feeds_pipeline() -> None:
    result = _poller(DemoClient(now_fn=lambda: NOW)).fetch_once()

    assert result.error is None
    assert [d.format() for d in result.departures] == [
        "S5 Strausberg Nord 2 min",
        "U3 Krumme Lanke 5 min",
        "S7 Potsdam Hauptbahnhof 8 min",
        "M10 Turmstr. 11 min",
    ]
