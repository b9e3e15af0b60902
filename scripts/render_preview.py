"""Render one preview frame per current departure to PNG files."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from PIL import Image

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from bvg_departures.config import load_config
from bvg_departures.data.demo import DemoClient
from bvg_departures.data.poller import DeparturePoller
from bvg_departures.data.vbb_client import VBBClient
from bvg_departures.display.renderers import OUTPUT_EMULATOR, fit_display
from bvg_departures.rendering import FrameData, compose_frame, save_frame, wrap


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--demo", action="store_true")
    parser.add_argument("--output-dir", default="emulator_output/preview")
    parser.add_argument("--scale", type=int, default=8)
    args = parser.parse_args()

    config = load_config(args.config)
    if args.demo:
        client = DemoClient()
    else:
        client = VBBClient(config.provider.base_url, config.provider.timeout_seconds)
    poller = DeparturePoller(
        client=client,
        station_id=config.provider.station_id,
        home_station=config.provider.home_station,
        horizon_minutes=config.provider.horizon_minutes,
    )

    result = poller.fetch_once()
    if result.error:
        print("preview_error", result.error, flush=True)
        return 1

    display = fit_display(OUTPUT_EMULATOR, config.display)
    for idx, departure in enumerate(result.departures[: config.scheduler.top_k]):
        lines = wrap(f"{departure.line} {departure.destination}", display.wrap_width, display.wrap_lines)
        image = compose_frame(
            FrameData(departure=departure, lines=lines),
            width=display.width,
            height=display.height,
            color=display.color,
            font_path=display.font_path,
        )
        if args.scale > 1:
            image = image.resize(
                (display.width * args.scale, display.height * args.scale),
                Image.Resampling.NEAREST,
            )
        path = Path(args.output_dir) / f"frame_{idx}.png"
        save_frame(image, str(path))
        print("preview_frame", {"path": str(path), "departure": departure.format()}, flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
