"""Frame output helpers for the LED matrix emulator."""

from __future__ import annotations

from pathlib import Path

from PIL import Image


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> None:
    """Save a frame to disk as a PNG image, replacing the previous one."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    image.save(tmp_path, format="PNG")
    tmp_path.replace(output_path)


__all__ = ["save_frame"]
