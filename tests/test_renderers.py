from __future__ import annotations

from dataclasses import fields
import sys

from PIL import Image
import pytest

from bvg_departures.config import DisplayConfig
from bvg_departures.data.models import Departure
from bvg_departures.display.hardware import MatrixDisplay, MatrixGeometry, _address_lines
from bvg_departures.display.renderers import (
    ConsoleRenderer,
    EmulatorRenderer,
    build_renderer,
    fit_display,
)
from bvg_departures.rendering.frame_data import FrameData


def _display_config(tmp_path) -> DisplayConfig:
    return DisplayConfig(
        width=64,
        height=32,
        hardware_mapping="AdafruitMatrixBonnet",
        brightness=80,
        color=(255, 200, 0),
        wrap_width=16,
        wrap_lines=2,
        max_chars=15,
        frame_path=str(tmp_path / "frame.png"),
    )


def test_console_renderer_writes_truncated_line() -> None:
    written: list[str] = []
    renderer = ConsoleRenderer(max_chars=15, write=written.append)

    renderer.show(FrameData(departure=Departure("S5", "Strausberg Nord", 8), lines=[]))
    renderer.show(FrameData(departure=None))

    assert written == ["S5 Straus 8 min", "--"]


def test_emulator_renderer_saves_png(tmp_path) -> None:
    config = _display_config(tmp_path)
    renderer = EmulatorRenderer(config)

    renderer.show(FrameData(departure=Departure("U3", "Krumme Lanke", 5), lines=["U3 Krumme Lanke", ""]))

    with Image.open(config.frame_path) as saved:
        assert saved.size == (64, 32)


def test_build_renderer_selects_by_name(tmp_path) -> None:
    config = _display_config(tmp_path)

    assert isinstance(build_renderer("console", config), ConsoleRenderer)
    assert isinstance(build_renderer("emulator", config), EmulatorRenderer)
    with pytest.raises(ValueError):
        build_renderer("projector", config)


def test_hardware_renderer_fails_without_driver(tmp_path, monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "adafruit_blinka_raspberry_pi5_piomatter", None)

    with pytest.raises(RuntimeError):
        build_renderer("hardware", _display_config(tmp_path))


def test_matrix_display_requires_driver(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "adafruit_blinka_raspberry_pi5_piomatter", None)

    with pytest.raises(RuntimeError):
        MatrixDisplay(MatrixGeometry(width=64, height=32))


def test_fit_display_narrows_pixel_outputs_only(tmp_path) -> None:
    config = _display_config(tmp_path)

    assert fit_display("console", config) is config
    fitted = fit_display("emulator", config)
    assert 1 <= fitted.wrap_width <= config.wrap_width
    assert fitted.max_chars == config.max_chars


def test_matrix_geometry_is_sized_by_the_frame() -> None:
    names = {field.name for field in fields(MatrixGeometry)}

    assert names == {"width", "height", "hardware_mapping", "n_addr_lines"}
    assert _address_lines(32) == 4
    with pytest.raises(ValueError):
        _address_lines(24)
