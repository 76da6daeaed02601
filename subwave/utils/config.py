"""Application configuration constants."""

from __future__ import annotations

import sys

APP_NAME = "SubWave"
ORG_NAME = "SubWave"

# FFmpeg
if sys.platform == "darwin":
    FFMPEG_PATH = "/opt/homebrew/bin/ffmpeg"
elif sys.platform == "win32":
    FFMPEG_PATH = r"C:\ffmpeg\bin\ffmpeg.exe"
else:
    FFMPEG_PATH = "ffmpeg"

# Waveform rendering
DEFAULT_WAVEFORM_HEIGHT = 60
DEFAULT_PIXELS_PER_SECOND = 75
DEFAULT_MAX_WINDOW_MS: int | None = None  # None = unlimited
DEFAULT_WAVEFORM_COLOR = "#9cf42f"
DEFAULT_BACKGROUND_COLOR = "#1e1e1e"
DEFAULT_GRID_COLOR = "#9cf42f@0.3"
GRID_COLUMNS = 10
GRID_ROWS = 4
RENDER_TIMEOUT_SEC = 10

# Interaction
DEFAULT_SAMPLE_MS = 2000  # 0 = jump only
DEFAULT_CLICK_STEP_MS = 100
DEFAULT_SUBTITLE_SPACING_MS = 100
DEFAULT_REFRESH_DELAY_MS = 100
DRAG_THRESHOLD_PX = 3

# Supported media formats
MEDIA_EXTENSIONS = [".mp4", ".mkv", ".avi", ".mov", ".webm", ".mp3", ".wav", ".m4a", ".flac", ".ogg"]
