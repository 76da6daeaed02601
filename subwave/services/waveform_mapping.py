"""Pixel ↔ time conversion for a rendered waveform strip (pure Python)."""

from __future__ import annotations

import math
from dataclasses import dataclass

from subwave.models.waveform import TimeWindow


@dataclass(frozen=True, slots=True)
class PointerEvent:
    """A pointer gesture on a waveform image, already reduced to pixels.

    x_px is where the gesture ended (release point); press_x_px is where it
    started, equal to x_px for a plain click.
    """

    x_px: float
    image_width_px: int
    window: TimeWindow
    press_x_px: float | None = None

    @property
    def start_x_px(self) -> float:
        return self.x_px if self.press_x_px is None else self.press_x_px


def pixel_to_ms(x_px: float, image_width_px: int, window: TimeWindow) -> int:
    """Timestamp under pixel *x_px* of an image showing *window*.

    x=0 maps to window.start_ms and x=image_width_px to window.stop_ms. The
    mapping is not clamped: coordinates left of the image give times before
    the window (possibly negative) and coordinates past the right edge give
    times after it.
    """
    if image_width_px <= 0:
        raise ValueError(f"image_width_px must be positive, got {image_width_px}")
    # start is an integer, so flooring the offset equals flooring the sum
    return window.start_ms + math.floor(x_px * window.duration_ms / image_width_px)


def drag_delta_to_ms(x_px_start: float, x_px_end: float, pixels_per_second: float) -> int:
    """Milliseconds covered by a horizontal drag; positive when dragging left.

    Equivalent to floor((start - end) / (pps / 1000)), computed as
    (start - end) * 1000 / pps so integer inputs divide exactly.
    """
    if pixels_per_second <= 0:
        raise ValueError(f"pixels_per_second must be positive, got {pixels_per_second}")
    return math.floor((x_px_start - x_px_end) * 1000 / pixels_per_second)


def event_to_ms(event: PointerEvent) -> int:
    return pixel_to_ms(event.x_px, event.image_width_px, event.window)
