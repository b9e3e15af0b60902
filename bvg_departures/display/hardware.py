"""Hardware output driver for HUB75 panels via Piomatter."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image


@dataclass(frozen=True)
class MatrixGeometry:
    """Matrix size, pinout name and optional address-line override."""

    width: int
    height: int
    hardware_mapping: str = "AdafruitMatrixBonnet"
    n_addr_lines: int | None = None


def _address_lines(height: int) -> int:
    if height == 16:
        return 3
    if height == 32:
        return 4
    if height == 64:
        return 5
    raise ValueError(
        "Unsupported height for automatic address-line detection. "
        "Use 16, 32, or 64, or set n_addr_lines explicitly."
    )


class MatrixDisplay:
    """Render PIL RGB frames to a chained HUB75 panel setup."""

    def __init__(self, geometry: MatrixGeometry, brightness: int = 80) -> None:
        try:
            import numpy as np
            import adafruit_blinka_raspberry_pi5_piomatter as piomatter
        except ImportError as exc:
            raise RuntimeError(
                "Hardware display requires 'numpy' and "
                "'adafruit_blinka_raspberry_pi5_piomatter' on Raspberry Pi."
            ) from exc

        pinout = getattr(piomatter.Pinout, geometry.hardware_mapping, None)
        if pinout is None:
            raise ValueError(f"Unknown hardware mapping: {geometry.hardware_mapping!r}")

        n_addr_lines = geometry.n_addr_lines
        if n_addr_lines is None:
            n_addr_lines = _address_lines(geometry.height)

        self._np = np
        self._geometry = geometry

        piomatter_geometry = piomatter.Geometry(
            width=geometry.width,
            height=geometry.height,
            n_addr_lines=n_addr_lines,
            rotation=piomatter.Orientation.Normal,
        )
        self._framebuffer = np.zeros((geometry.height, geometry.width, 3), dtype=np.uint8)
        matrix_kwargs = {
            "colorspace": piomatter.Colorspace.RGB888Packed,
            "pinout": pinout,
            "framebuffer": self._framebuffer,
            "geometry": piomatter_geometry,
        }
        try:
            # Newer builds support queue_depth; older builds do not.
            self._matrix = piomatter.PioMatter(**matrix_kwargs, queue_depth=2)
        except TypeError:
            self._matrix = piomatter.PioMatter(**matrix_kwargs)

        # Brightness support may vary by library version.
        if hasattr(self._matrix, "brightness"):
            self._matrix.brightness = max(0.0, min(1.0, brightness / 100.0))

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self._geometry.width, self._geometry.height)

    def render(self, image: Image.Image) -> None:
        """Blit an RGB image to the matrix and flush."""
        if image.size != self.dimensions:
            raise ValueError(
                f"Frame size mismatch. Expected {self.dimensions}, got {image.size}."
            )

        rgb = image.convert("RGB")
        self._framebuffer[:] = self._np.asarray(rgb, dtype=self._np.uint8)
        self._matrix.show()


__all__ = ["MatrixDisplay", "MatrixGeometry"]
