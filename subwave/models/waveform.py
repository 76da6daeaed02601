"""Waveform data models (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """Half-open span [start_ms, stop_ms) rendered as one waveform image."""

    start_ms: int
    stop_ms: int

    def __post_init__(self) -> None:
        if self.start_ms < 0:
            raise ValueError(f"start_ms must be >= 0, got {self.start_ms}")
        if self.stop_ms <= self.start_ms:
            raise ValueError(
                f"stop_ms must be greater than start_ms, got [{self.start_ms}, {self.stop_ms})"
            )

    @classmethod
    def try_create(cls, start_ms: int | None, stop_ms: int | None) -> TimeWindow | None:
        """Return a window, or None when the bounds do not form a valid span."""
        if start_ms is None or stop_ms is None:
            return None
        if start_ms < 0 or stop_ms <= start_ms:
            return None
        return cls(int(start_ms), int(stop_ms))

    @property
    def duration_ms(self) -> int:
        return self.stop_ms - self.start_ms


@dataclass(frozen=True, slots=True)
class RenderRequest:
    """Everything ffmpeg needs to draw one waveform strip."""

    source_file: Path
    window: TimeWindow
    width_px: int
    height_px: int
    filter_params: str

    def is_renderable(self) -> bool:
        return self.width_px > 0 and self.height_px > 0


@dataclass(frozen=True, slots=True)
class WaveformImage:
    """PNG bytes tagged with the window they depict."""

    data: bytes
    window: TimeWindow
    width_px: int
    height_px: int

    def matches(self, window: TimeWindow | None) -> bool:
        return window is not None and self.window == window


@dataclass(slots=True)
class PlaybackSession:
    """State to restore once a preview sample finishes."""

    resume_at_ms: int
    saved_loop_mode: bool
    saved_sync_mode: bool
    timer: Any = None  # QTimer; typed loosely to keep this module Qt-free
