"""Style fragment appended to ffmpeg's showwavespic filter.

The fragment starts right after ``showwavespic=s=WxH`` so it can both set
showwavespic options (``:colors=...``) and chain further filters after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from subwave.utils.config import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_GRID_COLOR,
    DEFAULT_WAVEFORM_COLOR,
    GRID_COLUMNS,
    GRID_ROWS,
)


@dataclass(frozen=True, slots=True)
class LiteralStyle:
    """Fixed style text, used as-is for every size."""

    text: str


@dataclass(frozen=True, slots=True)
class ComputedStyle:
    """Style text produced from the image size."""

    fn: Callable[[int, int], str]


FilterStyle = Union[LiteralStyle, ComputedStyle]


def default_filter_style(
    width_px: int,
    height_px: int,
    color: str = DEFAULT_WAVEFORM_COLOR,
    background: str = DEFAULT_BACKGROUND_COLOR,
    grid_color: str = DEFAULT_GRID_COLOR,
) -> str:
    """Waveform over a solid background with a light grid on top.

    showwavespic draws on a transparent canvas, so the wave is overlaid on a
    color source of the same size before the grid is drawn.
    """
    return (
        f":colors={color}[wave];"
        f"color=c={background}:s={width_px}x{height_px},format=rgba[bg];"
        f"[bg][wave]overlay=shortest=1:format=auto,"
        f"drawgrid=w=iw/{GRID_COLUMNS}:h=ih/{GRID_ROWS}:t=1:c={grid_color}"
    )


DEFAULT_STYLE: FilterStyle = ComputedStyle(default_filter_style)


def coerce_style(value: FilterStyle | str | Callable[[int, int], str] | None) -> FilterStyle:
    """Wrap a plain string or callable from settings/host code in a FilterStyle."""
    if value is None:
        return DEFAULT_STYLE
    if isinstance(value, (LiteralStyle, ComputedStyle)):
        return value
    if isinstance(value, str):
        return LiteralStyle(value)
    if callable(value):
        return ComputedStyle(value)
    raise TypeError(f"Unsupported filter style: {value!r}")


def build_filter_style(style: FilterStyle, width_px: int, height_px: int) -> str:
    """Resolve *style* to the text for an image of the given size."""
    if isinstance(style, LiteralStyle):
        return style.text
    return style.fn(width_px, height_px)
