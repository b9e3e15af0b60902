"""Display output adapters."""

from bvg_departures.display.renderers import (
    ConsoleRenderer,
    EmulatorRenderer,
    MatrixRenderer,
    Renderer,
    build_renderer,
)

__all__ = ["ConsoleRenderer", "EmulatorRenderer", "MatrixRenderer", "Renderer", "build_renderer"]
