"""Infrastructure layer: external dependencies (FFmpeg).

이 계층은 외부 도구를 추상화하여 Application 계층이
subprocess에 직접 의존하지 않도록 합니다.
"""

from subwave.infrastructure.ffmpeg_runner import FFmpegRunner

__all__ = [
    "FFmpegRunner",
]
