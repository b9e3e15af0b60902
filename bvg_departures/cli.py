"""Command-line entry points for the departure board."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from bvg_departures.config import AppConfig, LoggingConfig, load_config
from bvg_departures.data.demo import DemoClient
from bvg_departures.data.poller import DeparturePoller
from bvg_departures.data.vbb_client import VBBClient
from bvg_departures.display.renderers import (
    OUTPUT_CONSOLE,
    OUTPUT_HARDWARE,
    OUTPUTS,
    build_renderer,
    fit_display,
)
from bvg_departures.logic.scheduler import RotationScheduler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "bvg_departures.log"

EXIT_DISPLAY_INIT_FAILED = 1
EXIT_UNHANDLED_FAULT = 1
EXIT_CONFIG_ERROR = 2

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig) -> None:
    """Log to stderr and to a file under the configured log directory."""
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_dir / LOG_FILE_NAME, encoding="utf-8"),
        ],
        force=True,
    )


def build_scheduler(config: AppConfig, output: str, demo: bool = False) -> RotationScheduler:
    renderer = build_renderer(output, config.display)
    display = fit_display(output, config.display)
    if demo:
        client = DemoClient()
    else:
        client = VBBClient(
            base_url=config.provider.base_url,
            timeout_seconds=config.provider.timeout_seconds,
        )
    poller = DeparturePoller(
        client=client,
        station_id=config.provider.station_id,
        home_station=config.provider.home_station,
        horizon_minutes=config.provider.horizon_minutes,
    )
    return RotationScheduler(
        poller=poller,
        renderer=renderer,
        settings=config.scheduler,
        display=display,
    )


def _parse_args(argv: list[str] | None, default_output: str, allow_output: bool) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BVG departure board")
    parser.add_argument("--config", default="config/config.yaml", help="Path to the YAML config")
    if allow_output:
        parser.add_argument(
            "--output",
            choices=OUTPUTS,
            default=default_output,
            help="Frame output target",
        )
    parser.add_argument("--demo", action="store_true", help="Use built-in demo departures")
    parser.add_argument("--iterations", type=int, default=None, help=argparse.SUPPRESS)
    args = parser.parse_args(argv)
    if not allow_output:
        args.output = default_output
    return args


def run(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(f"config_error: {exc}", file=sys.stderr, flush=True)
        return EXIT_CONFIG_ERROR

    configure_logging(config.log)
    logger.info(
        "board_starting station=%s output=%s demo=%s",
        config.provider.station_id,
        args.output,
        args.demo,
    )

    try:
        scheduler = build_scheduler(config, args.output, demo=args.demo)
    except (RuntimeError, ValueError, OSError) as exc:
        logger.error("display_init_failed: %s", exc)
        return EXIT_DISPLAY_INIT_FAILED

    try:
        scheduler.run(iterations=args.iterations)
    except KeyboardInterrupt:
        logger.info("board_stopped")
        return 0
    except Exception:
        logger.exception("unhandled_fault")
        return EXIT_UNHANDLED_FAULT
    return 0


def main(argv: list[str] | None = None) -> int:
    return run(_parse_args(argv, default_output=OUTPUT_HARDWARE, allow_output=True))


def headless_main(argv: list[str] | None = None) -> int:
    """Console-only entry point; never touches the matrix driver."""
    return run(_parse_args(argv, default_output=OUTPUT_CONSOLE, allow_output=False))


if __name__ == "__main__":
    raise SystemExit(main())
