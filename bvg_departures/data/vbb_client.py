"""VBB/BVG transport.rest API client."""

from __future__ import annotations

import logging
from typing import Any

import requests

from bvg_departures.data.models import RawEntry

VBB_API_BASE = "https://v6.vbb.transport.rest"

logger = logging.getLogger(__name__)


class VBBClientError(Exception):
    """Raised when a departures request cannot be turned into raw entries."""


class TransportError(VBBClientError):
    """Network failure, timeout or non-200 response."""


class ResponseParseError(VBBClientError):
    """Response body was not valid JSON or lacked a departures array."""


class VBBClient:
    """Thin wrapper around the transport.rest departures endpoint using requests."""

    def __init__(self, base_url: str = VBB_API_BASE, timeout_seconds: float = 10) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_departures(self, station_id: str, duration_minutes: int) -> list[RawEntry]:
        """Fetch departures for a station within the next duration_minutes."""
        response_json = self._get(
            f"/stops/{station_id}/departures",
            params={"duration": duration_minutes},
        )
        if not isinstance(response_json, dict):
            raise ResponseParseError("VBB API response was not a JSON object")
        items = response_json.get("departures")
        if not isinstance(items, list):
            raise ResponseParseError("VBB API response has no 'departures' array")

        entries = []
        for item in items:
            entry = parse_entry(item)
            if entry is None:
                logger.debug("entry_skipped item=%r", item)
                continue
            entries.append(entry)
        return entries

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self._base_url}{path}"
        try:
            response = requests.get(url, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise TransportError(f"VBB API request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise TransportError(f"VBB API request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise ResponseParseError("VBB API response was not valid JSON") from exc


def parse_entry(item: Any) -> RawEntry | None:
    """Build a RawEntry from one departures element, or None if malformed."""
    if not isinstance(item, dict):
        return None
    line = item.get("line")
    line_code = line.get("name") if isinstance(line, dict) else None
    if not isinstance(line_code, str):
        return None

    direction = item.get("direction")
    when = item.get("when")
    delay = item.get("delay")
    return RawEntry(
        line_code=line_code,
        direction=direction if isinstance(direction, str) else None,
        when=when if isinstance(when, str) else None,
        delay=delay if isinstance(delay, int) else None,
    )


__all__ = [
    "VBB_API_BASE",
    "VBBClient",
    "VBBClientError",
    "TransportError",
    "ResponseParseError",
    "parse_entry",
]
