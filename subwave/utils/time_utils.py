"""Time conversion utilities. All times are integer milliseconds."""

from functools import lru_cache


def _split_ms(ms: int) -> tuple[int, int, int, int]:
    """(hours, minutes, seconds, millis) of a non-negative ms value."""
    seconds, millis = divmod(max(0, int(ms)), 1000)
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return hours, minutes, seconds, millis


@lru_cache(maxsize=4096)
def ms_to_display(ms: int) -> str:
    """'MM:SS.mmm' for tooltips and labels; minutes keep counting past an hour."""
    hours, minutes, seconds, millis = _split_ms(ms)
    return f"{hours * 60 + minutes:02d}:{seconds:02d}.{millis:03d}"


def ms_to_seconds_arg(ms: int) -> str:
    """Format milliseconds as an ffmpeg seconds literal ('2.500')."""
    sign = "-" if ms < 0 else ""
    whole, frac = divmod(abs(int(ms)), 1000)
    return f"{sign}{whole}.{frac:03d}"


@lru_cache(maxsize=4096)
def ms_to_srt_time(ms: int) -> str:
    """'HH:MM:SS,mmm'; negative values clamp to zero."""
    hours, minutes, seconds, millis = _split_ms(ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def srt_time_to_ms(text: str) -> int:
    """Parse 'HH:MM:SS,mmm' (or with '.') to milliseconds."""
    clock, _, frac = text.strip().replace(",", ".").partition(".")
    hours, minutes, seconds = (int(part) for part in clock.split(":"))
    millis = int(frac.ljust(3, "0")[:3]) if frac else 0
    return ((hours * 60 + minutes) * 60 + seconds) * 1000 + millis
