"""Configuration loader for the BVG departure board."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv
import yaml


@dataclass(frozen=True)
class ProviderConfig:
    """Departure provider configuration."""

    base_url: str
    station_id: str
    home_station: str
    horizon_minutes: int
    timeout_seconds: float


@dataclass(frozen=True)
class SchedulerConfig:
    """Refresh and rotation timing."""

    top_k: int
    fetch_period_seconds: float
    rotate_period_seconds: float
    tick_seconds: float


@dataclass(frozen=True)
class DisplayConfig:
    """Display configuration for rendering and hardware."""

    width: int
    height: int
    hardware_mapping: str
    brightness: int
    color: tuple[int, int, int]
    wrap_width: int
    wrap_lines: int
    max_chars: int
    font_path: str | None = None
    frame_path: str = "emulator_output/frame.png"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str
    log_dir: str


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    provider: ProviderConfig
    scheduler: SchedulerConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _require_section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = _require_key(data, key, key)
    if not isinstance(section, dict):
        raise ValueError(f"'{key}' config must be a mapping")
    return section


def _parse_color(value: Any) -> tuple[int, int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError("'display.color' must be a list of three integers")
    if not all(isinstance(c, int) and 0 <= c <= 255 for c in value):
        raise ValueError("'display.color' components must be integers in 0-255")
    return (value[0], value[1], value[2])


def load_config(path: str = "config/config.yaml") -> AppConfig:
    """Load application configuration from a YAML file."""
    load_dotenv()
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ValueError(f"Config file not found: {path}") from exc

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the top level")

    provider_section = _require_section(data, "provider")
    scheduler_section = _require_section(data, "scheduler")
    display_section = _require_section(data, "display")
    logging_section = _require_section(data, "logging")

    station_id = os.environ.get("BVG_STATION_ID") or _require_key(
        provider_section, "station_id", "provider"
    )
    provider = ProviderConfig(
        base_url=_require_key(provider_section, "base_url", "provider"),
        station_id=str(station_id),
        home_station=_require_key(provider_section, "home_station", "provider"),
        horizon_minutes=_require_key(provider_section, "horizon_minutes", "provider"),
        timeout_seconds=_require_key(provider_section, "timeout_seconds", "provider"),
    )

    scheduler = SchedulerConfig(
        top_k=_require_key(scheduler_section, "top_k", "scheduler"),
        fetch_period_seconds=_require_key(scheduler_section, "fetch_period_seconds", "scheduler"),
        rotate_period_seconds=_require_key(scheduler_section, "rotate_period_seconds", "scheduler"),
        tick_seconds=_require_key(scheduler_section, "tick_seconds", "scheduler"),
    )

    display = DisplayConfig(
        width=_require_key(display_section, "width", "display"),
        height=_require_key(display_section, "height", "display"),
        hardware_mapping=_require_key(display_section, "hardware_mapping", "display"),
        brightness=_require_key(display_section, "brightness", "display"),
        color=_parse_color(_require_key(display_section, "color", "display")),
        wrap_width=_require_key(display_section, "wrap_width", "display"),
        wrap_lines=_require_key(display_section, "wrap_lines", "display"),
        max_chars=_require_key(display_section, "max_chars", "display"),
        font_path=display_section.get("font_path"),
        frame_path=display_section.get("frame_path", "emulator_output/frame.png"),
    )

    logging = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(provider=provider, scheduler=scheduler, display=display, log=logging)


__all__ = [
    "AppConfig",
    "DisplayConfig",
    "LoggingConfig",
    "ProviderConfig",
    "SchedulerConfig",
    "load_config",
]
