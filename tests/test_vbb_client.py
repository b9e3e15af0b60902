from __future__ import annotations

from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from bvg_departures.data.models import RawEntry
from bvg_departures.data.vbb_client import (
    ResponseParseError,
    TransportError,
    VBBClient,
    VBBClientError,
    parse_entry,
)


@pytest.fixture()
def vbb_client() -> VBBClient:
    return VBBClient("https://example.test/", timeout_seconds=10)


def _mock_response(status_code: int, json_data: Any = None, text: str = "") -> Mock:
    response = Mock()
    response.status_code = status_code
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("Invalid JSON")
    return response


def test_get_departures_parses_entries(vbb_client: VBBClient) -> None:
    payload = {
        "departures": [
            {
                "line": {"name": "S5"},
                "direction": "S Strausberg Nord",
                "when": "2024-05-17T14:05:00+02:00",
                "delay": 60,
            },
            {"line": {"name": "U1"}, "direction": None, "when": None},
        ]
    }
    response = _mock_response(200, payload)
    with patch("requests.get", return_value=response) as mock_get:
        entries = vbb_client.get_departures("900120003", 15)

    assert entries == [
        RawEntry("S5", "S Strausberg Nord", "2024-05-17T14:05:00+02:00", 60),
        RawEntry("U1", None, None, None),
    ]
    mock_get.assert_called_once_with(
        "https://example.test/stops/900120003/departures",
        params={"duration": 15},
        timeout=10,
    )


def test_malformed_entries_are_skipped(vbb_client: VBBClient) -> None:
    payload = {
        "departures": [
            "nonsense",
            {"line": None, "direction": "Erkner", "when": "2024-05-17T12:05:00Z"},
            {"line": {"name": "S3"}, "direction": "Erkner", "when": "2024-05-17T12:05:00Z"},
        ]
    }
    with patch("requests.get", return_value=_mock_response(200, payload)):
        entries = vbb_client.get_departures("900120003", 15)

    assert [entry.line_code for entry in entries] == ["S3"]


def test_parse_entry_ignores_wrong_types() -> None:
    entry = parse_entry({"line": {"name": "M10"}, "direction": 5, "when": ["x"], "delay": "late"})

    assert entry == RawEntry("M10", None, None, None)


def test_non_200_raises_transport_error(vbb_client: VBBClient) -> None:
    response = _mock_response(503, {"error": "down"}, text="Service Unavailable")
    with patch("requests.get", return_value=response):
        with pytest.raises(TransportError) as exc_info:
            vbb_client.get_departures("900120003", 15)

    assert "503" in str(exc_info.value)


def test_network_error_raises_transport_error(vbb_client: VBBClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.ConnectionError("boom")):
        with pytest.raises(TransportError):
            vbb_client.get_departures("900120003", 15)


def test_timeout_raises_transport_error(vbb_client: VBBClient) -> None:
    with patch("requests.get", side_effect=requests.exceptions.Timeout("slow")):
        with pytest.raises(VBBClientError):
            vbb_client.get_departures("900120003", 15)


def test_invalid_json_raises_parse_error(vbb_client: VBBClient) -> None:
    with patch("requests.get", return_value=_mock_response(200, None)):
        with pytest.raises(ResponseParseError):
            vbb_client.get_departures("900120003", 15)


def test_missing_departures_array_raises_parse_error(vbb_client: VBBClient) -> None:
    with patch("requests.get", return_value=_mock_response(200, {"error": True})):
        with pytest.raises(ResponseParseError):
            vbb_client.get_departures("900120003", 15)
