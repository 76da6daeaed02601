"""Settings manager for waveform preferences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from PySide6.QtCore import QSettings

from subwave.services.waveform_filter import DEFAULT_STYLE, FilterStyle, LiteralStyle
from subwave.utils.config import (
    DEFAULT_CLICK_STEP_MS,
    DEFAULT_MAX_WINDOW_MS,
    DEFAULT_PIXELS_PER_SECOND,
    DEFAULT_REFRESH_DELAY_MS,
    DEFAULT_SAMPLE_MS,
    DEFAULT_SUBTITLE_SPACING_MS,
    DEFAULT_WAVEFORM_HEIGHT,
)


@dataclass
class WaveformSettings:
    """Snapshot of every option the waveform view reads."""

    ffmpeg_path: str | None = None
    style: FilterStyle = field(default=DEFAULT_STYLE)
    height_px: int = DEFAULT_WAVEFORM_HEIGHT
    pixels_per_second: int = DEFAULT_PIXELS_PER_SECOND
    max_window_ms: int | None = DEFAULT_MAX_WINDOW_MS
    sample_ms: int = DEFAULT_SAMPLE_MS
    click_step_ms: int = DEFAULT_CLICK_STEP_MS
    spacing_ms: int = DEFAULT_SUBTITLE_SPACING_MS
    refresh_delay_ms: int = DEFAULT_REFRESH_DELAY_MS


class SettingsManager:
    """Wrapper around QSettings for type-safe preference management."""

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings if settings is not None else QSettings()

    # ---------------------------------------------------- Waveform Settings

    def get_waveform_height(self) -> int:
        """Get the waveform image height in pixels (default: 60)."""
        return self._settings.value("waveform/height", DEFAULT_WAVEFORM_HEIGHT, int)

    def set_waveform_height(self, pixels: int) -> None:
        self._settings.setValue("waveform/height", pixels)

    def get_pixels_per_second(self) -> int:
        """Get the horizontal density in pixels per second (default: 75)."""
        return self._settings.value("waveform/pixels_per_second", DEFAULT_PIXELS_PER_SECOND, int)

    def set_pixels_per_second(self, density: int) -> None:
        self._settings.setValue("waveform/pixels_per_second", density)

    def get_max_window_ms(self) -> Optional[int]:
        """Get the longest span that may be rendered (None for unlimited)."""
        value = self._settings.value("waveform/max_window_ms", DEFAULT_MAX_WINDOW_MS or 0, int)
        return value if value > 0 else None

    def set_max_window_ms(self, ms: Optional[int]) -> None:
        self._settings.setValue("waveform/max_window_ms", ms or 0)

    def get_filter_style(self) -> Optional[str]:
        """Get the literal ffmpeg style text (None for the built-in style)."""
        text = self._settings.value("waveform/filter_style", "", str)
        return text if text else None

    def set_filter_style(self, text: Optional[str]) -> None:
        self._settings.setValue("waveform/filter_style", text or "")

    def get_refresh_delay_ms(self) -> int:
        """Get the debounce delay before re-rendering after cursor motion."""
        return self._settings.value("waveform/refresh_delay_ms", DEFAULT_REFRESH_DELAY_MS, int)

    def set_refresh_delay_ms(self, ms: int) -> None:
        self._settings.setValue("waveform/refresh_delay_ms", ms)

    # ---------------------------------------------------- Editing Settings

    def get_sample_ms(self) -> int:
        """Get the preview sample length in ms (0 disables the preview)."""
        return self._settings.value("editing/sample_ms", DEFAULT_SAMPLE_MS, int)

    def set_sample_ms(self, ms: int) -> None:
        self._settings.setValue("editing/sample_ms", ms)

    def get_click_step_ms(self) -> int:
        """Get the adjustment applied by a modifier click without drag."""
        return self._settings.value("editing/click_step_ms", DEFAULT_CLICK_STEP_MS, int)

    def set_click_step_ms(self, ms: int) -> None:
        self._settings.setValue("editing/click_step_ms", ms)

    def get_subtitle_spacing_ms(self) -> int:
        """Get the gap kept between adjacent subtitles (default: 100)."""
        return self._settings.value("editing/spacing_ms", DEFAULT_SUBTITLE_SPACING_MS, int)

    def set_subtitle_spacing_ms(self, ms: int) -> None:
        self._settings.setValue("editing/spacing_ms", ms)

    # ---------------------------------------------------- Advanced Settings

    def get_ffmpeg_path(self) -> Optional[str]:
        """Get the custom FFmpeg path (None for auto-detect)."""
        path = self._settings.value("advanced/ffmpeg_path", "", str)
        return path if path else None

    def set_ffmpeg_path(self, path: Optional[str]) -> None:
        """Set the custom FFmpeg path (None for auto-detect)."""
        self._settings.setValue("advanced/ffmpeg_path", path or "")

    # ---------------------------------------------------- General Methods

    def load_waveform_settings(self) -> WaveformSettings:
        style_text = self.get_filter_style()
        return WaveformSettings(
            ffmpeg_path=self.get_ffmpeg_path(),
            style=LiteralStyle(style_text) if style_text else DEFAULT_STYLE,
            height_px=self.get_waveform_height(),
            pixels_per_second=self.get_pixels_per_second(),
            max_window_ms=self.get_max_window_ms(),
            sample_ms=self.get_sample_ms(),
            click_step_ms=self.get_click_step_ms(),
            spacing_ms=self.get_subtitle_spacing_ms(),
            refresh_delay_ms=self.get_refresh_delay_ms(),
        )

    def reset_to_defaults(self) -> None:
        """Reset all settings to default values."""
        self._settings.clear()

    def sync(self) -> None:
        """Force synchronization of settings to disk."""
        self._settings.sync()

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.value(key, default)

    def set(self, key: str, value: Any) -> None:
        self._settings.setValue(key, value)
