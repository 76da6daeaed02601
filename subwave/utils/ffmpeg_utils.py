"""FFmpeg utilities for finding the ffmpeg executable."""

from __future__ import annotations

import shutil
from pathlib import Path


def get_bundled_ffmpeg() -> str:
    """
    Get the ffmpeg executable shipped with imageio-ffmpeg.

    Raises:
        ImportError: If imageio-ffmpeg is not installed
        RuntimeError: If the binary cannot be obtained
    """
    try:
        import imageio_ffmpeg
    except ImportError as e:
        raise ImportError(
            "imageio-ffmpeg is not installed.\n"
            "Install with: pip install imageio-ffmpeg"
        ) from e
    try:
        return imageio_ffmpeg.get_ffmpeg_exe()
    except Exception as e:
        raise RuntimeError(f"Failed to get bundled FFmpeg: {e}") from e


def find_ffmpeg(configured_path: str | None = None) -> str | None:
    """
    Find ffmpeg executable.

    Search order:
    1. Explicit path (settings), then config.FFMPEG_PATH
    2. System PATH (ffmpeg command)
    3. Bundled FFmpeg (imageio-ffmpeg)

    Returns:
        Path to ffmpeg or None if not found
    """
    # 1. Try user-configured path
    from .config import FFMPEG_PATH
    for candidate in (configured_path, FFMPEG_PATH):
        if candidate and Path(candidate).is_file():
            return candidate

    # 2. Try system PATH
    # configured_path may also be a bare command name ("ffmpeg6")
    for name in (configured_path, "ffmpeg"):
        system_ffmpeg = shutil.which(name) if name else None
        if system_ffmpeg:
            return system_ffmpeg

    # 3. Try bundled FFmpeg
    try:
        return get_bundled_ffmpeg()
    except (ImportError, RuntimeError):
        return None
