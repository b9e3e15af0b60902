"""Interchangeable frame outputs selected once at startup."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Protocol

from bvg_departures.config import DisplayConfig
from bvg_departures.rendering import FrameData, compose_frame, format_truncated, save_frame
from bvg_departures.rendering.composer import fit_wrap_width

OUTPUT_HARDWARE = "hardware"
OUTPUT_EMULATOR = "emulator"
OUTPUT_CONSOLE = "console"
OUTPUTS = (OUTPUT_HARDWARE, OUTPUT_EMULATOR, OUTPUT_CONSOLE)


class Renderer(Protocol):
    def show(self, frame: FrameData) -> None: ...


class MatrixRenderer:
    """Compose frames and push them to the LED matrix."""

    def __init__(self, config: DisplayConfig) -> None:
        # Imported here so headless runs never load the hardware driver.
        from bvg_departures.display.hardware import MatrixDisplay, MatrixGeometry

        self._config = config
        self._matrix = MatrixDisplay(
            MatrixGeometry(
                width=config.width,
                height=config.height,
                hardware_mapping=config.hardware_mapping,
            ),
            brightness=config.brightness,
        )

    def show(self, frame: FrameData) -> None:
        image = compose_frame(
            frame,
            width=self._config.width,
            height=self._config.height,
            color=self._config.color,
            font_path=self._config.font_path,
        )
        self._matrix.render(image)


class EmulatorRenderer:
    """Compose frames and write them to a PNG file."""

    def __init__(self, config: DisplayConfig) -> None:
        self._config = config

    def show(self, frame: FrameData) -> None:
        image = compose_frame(
            frame,
            width=self._config.width,
            height=self._config.height,
            color=self._config.color,
            font_path=self._config.font_path,
        )
        save_frame(image, self._config.frame_path)


class ConsoleRenderer:
    """Print one line per frame."""

    def __init__(self, max_chars: int, write: Callable[[str], None] | None = None) -> None:
        self._max_chars = max_chars
        self._write = write or (lambda text: print(text, flush=True))

    def show(self, frame: FrameData) -> None:
        if frame.departure is None:
            self._write("--")
            return
        self._write(format_truncated(frame.departure, self._max_chars))


def fit_display(output: str, config: DisplayConfig) -> DisplayConfig:
    """Pixel outputs wrap at what the font actually fits on the frame."""
    if output == OUTPUT_CONSOLE:
        return config
    return replace(
        config,
        wrap_width=fit_wrap_width(config.wrap_width, config.width, config.font_path),
    )


def build_renderer(output: str, config: DisplayConfig) -> Renderer:
    """Create the renderer for an output name; hardware failures propagate."""
    if output == OUTPUT_HARDWARE:
        return MatrixRenderer(config)
    if output == OUTPUT_EMULATOR:
        return EmulatorRenderer(config)
    if output == OUTPUT_CONSOLE:
        return ConsoleRenderer(config.max_chars)
    raise ValueError(f"Unknown output {output!r}; expected one of {', '.join(OUTPUTS)}")


__all__ = [
    "OUTPUTS",
    "OUTPUT_CONSOLE",
    "OUTPUT_EMULATOR",
    "OUTPUT_HARDWARE",
    "ConsoleRenderer",
    "EmulatorRenderer",
    "MatrixRenderer",
    "Renderer",
    "build_renderer",
    "fit_display",
]
