"""Frame composer for the LED matrix display."""

from __future__ import annotations

from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from bvg_departures.rendering.frame_data import FrameData

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32

COLOR_BACKGROUND = (0, 0, 0)
COLOR_TEXT = (255, 200, 0)  # BVG amber

TEXT_LEFT_X = 2
TEXT_TOP_Y = 1
LINE_HEIGHT = 10

FONT_SIZE = 8
# Widest advance over these sets the character cells per line.
MEASURED_GLYPHS = "".join(chr(code) for code in range(32, 127)) + "ÄÖÜäöüß"

IDLE_TEXT = "--"


@lru_cache(maxsize=4)
def load_font(font_path: str | None = None, size: int = FONT_SIZE) -> ImageFont.FreeTypeFont:
    """Load a TrueType font, or Pillow's built-in font when no path is set."""
    if font_path is None:
        return ImageFont.load_default(size)
    try:
        return ImageFont.truetype(font_path, size)
    except OSError as exc:
        raise FileNotFoundError(f"Font file not found or unreadable: {font_path}") from exc


def fit_wrap_width(
    wrap_width: int,
    width: int = DISPLAY_WIDTH,
    font_path: str | None = None,
) -> int:
    """Cap wrap_width so that a full line of the widest glyph fits the frame."""
    font = load_font(font_path)
    advance = max(font.getlength(ch) for ch in MEASURED_GLYPHS)
    # One pixel of slack for rounding between per-glyph and whole-line lengths.
    columns = int((width - TEXT_LEFT_X - 1) // advance) if advance > 0 else wrap_width
    return max(1, min(wrap_width, columns))


def compose_frame(
    data: FrameData,
    width: int = DISPLAY_WIDTH,
    height: int = DISPLAY_HEIGHT,
    color: tuple[int, int, int] = COLOR_TEXT,
    font_path: str | None = None,
) -> Image.Image:
    """Compose an RGB frame showing one departure on a cleared background."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Frame size must be positive, got {(width, height)}.")

    image = Image.new("RGB", (width, height), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)
    # Hard-edged glyphs: every lit pixel is exactly the foreground colour.
    draw.fontmode = "1"
    font = load_font(font_path)

    if data.departure is None:
        draw.text((TEXT_LEFT_X, TEXT_TOP_Y), IDLE_TEXT, font=font, fill=color)
        return image

    last_line_index = 0
    for idx, line in enumerate(data.lines):
        if not line:
            continue
        draw.text((TEXT_LEFT_X, TEXT_TOP_Y + idx * LINE_HEIGHT), line, font=font, fill=color)
        last_line_index = idx

    time_text = f"{data.departure.minutes} min"
    time_y = TEXT_TOP_Y + (last_line_index + 1) * LINE_HEIGHT
    draw.text((TEXT_LEFT_X, time_y), time_text, font=font, fill=color)
    return image


__all__ = ["compose_frame", "fit_wrap_width", "load_font"]
