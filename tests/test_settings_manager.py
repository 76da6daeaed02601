"""SettingsManager 테스트: INI 파일 기반 QSettings로 기본값/저장값 확인."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QSettings

from subwave.services.settings_manager import SettingsManager
from subwave.services.waveform_filter import DEFAULT_STYLE, LiteralStyle
from subwave.utils.config import (
    DEFAULT_CLICK_STEP_MS,
    DEFAULT_PIXELS_PER_SECOND,
    DEFAULT_SAMPLE_MS,
    DEFAULT_SUBTITLE_SPACING_MS,
    DEFAULT_WAVEFORM_HEIGHT,
)


@pytest.fixture
def ini_path(tmp_path):
    return tmp_path / "settings.ini"


@pytest.fixture
def mgr(qapp, ini_path) -> SettingsManager:
    return SettingsManager(QSettings(str(ini_path), QSettings.Format.IniFormat))


class TestDefaults:
    def test_waveform_defaults(self, mgr):
        assert mgr.get_waveform_height() == DEFAULT_WAVEFORM_HEIGHT
        assert mgr.get_pixels_per_second() == DEFAULT_PIXELS_PER_SECOND
        assert mgr.get_max_window_ms() is None
        assert mgr.get_filter_style() is None

    def test_editing_defaults(self, mgr):
        assert mgr.get_sample_ms() == DEFAULT_SAMPLE_MS
        assert mgr.get_click_step_ms() == DEFAULT_CLICK_STEP_MS
        assert mgr.get_subtitle_spacing_ms() == DEFAULT_SUBTITLE_SPACING_MS

    def test_ffmpeg_auto_detect(self, mgr):
        assert mgr.get_ffmpeg_path() is None

    def test_snapshot_uses_default_style(self, mgr):
        assert mgr.load_waveform_settings().style is DEFAULT_STYLE


class TestStoredValues:
    def test_values_survive_reopen(self, mgr, ini_path):
        mgr.set_waveform_height(80)
        mgr.set_pixels_per_second(150)
        mgr.set_max_window_ms(60_000)
        mgr.set_sample_ms(0)
        mgr.set_ffmpeg_path("/opt/ffmpeg/bin/ffmpeg")
        mgr.sync()

        reopened = SettingsManager(QSettings(str(ini_path), QSettings.Format.IniFormat))
        assert reopened.get_waveform_height() == 80
        assert reopened.get_pixels_per_second() == 150
        assert reopened.get_max_window_ms() == 60_000
        assert reopened.get_sample_ms() == 0
        assert reopened.get_ffmpeg_path() == "/opt/ffmpeg/bin/ffmpeg"

    def test_clearing_max_window(self, mgr):
        mgr.set_max_window_ms(10_000)
        mgr.set_max_window_ms(None)
        assert mgr.get_max_window_ms() is None

    def test_literal_style_in_snapshot(self, mgr):
        mgr.set_filter_style(":colors=white")
        settings = mgr.load_waveform_settings()
        assert settings.style == LiteralStyle(":colors=white")

    def test_snapshot_collects_everything(self, mgr):
        mgr.set_click_step_ms(250)
        mgr.set_subtitle_spacing_ms(40)
        mgr.set_refresh_delay_ms(0)
        settings = mgr.load_waveform_settings()
        assert settings.click_step_ms == 250
        assert settings.spacing_ms == 40
        assert settings.refresh_delay_ms == 0

    def test_reset_to_defaults(self, mgr):
        mgr.set_waveform_height(120)
        mgr.reset_to_defaults()
        assert mgr.get_waveform_height() == DEFAULT_WAVEFORM_HEIGHT
