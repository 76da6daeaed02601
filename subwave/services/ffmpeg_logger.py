"""Utility for logging FFmpeg output to a file."""

import logging
from pathlib import Path


def get_ffmpeg_log_path() -> Path:
    """Return the path to the FFmpeg log file."""
    log_dir = Path.home() / ".subwave" / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir / "ffmpeg.log"


# Setup a specific logger for FFmpeg
_logger = logging.getLogger("ffmpeg_output")
_logger.setLevel(logging.DEBUG)
_logger.propagate = False


def _ensure_handler() -> None:
    """Attach the file handler on first use rather than at import time."""
    if _logger.handlers:
        return
    try:
        _fh = logging.FileHandler(get_ffmpeg_log_path(), encoding="utf-8")
    except OSError:
        _logger.addHandler(logging.NullHandler())
        return
    _formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
    _fh.setFormatter(_formatter)
    _logger.addHandler(_fh)


def log_ffmpeg_command(args: list[str]) -> None:
    """Log the FFmpeg command being executed."""
    _ensure_handler()
    _logger.info(f"Executing: {' '.join(args)}")


def log_ffmpeg_output(data: bytes | str) -> None:
    """Log FFmpeg stderr output, one record per line."""
    _ensure_handler()
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    for line in data.splitlines():
        if line.strip():
            _logger.debug(line.rstrip())
