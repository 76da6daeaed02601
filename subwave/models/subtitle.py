"""Subtitle data models (pure Python, no Qt dependency)."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field


@dataclass(slots=True)
class SubtitleSegment:
    """A single subtitle segment with start/end times in milliseconds."""

    start_ms: int
    end_ms: int
    text: str = ""

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.start_ms


@dataclass(slots=True)
class SubtitleTrack:
    """An ordered collection of subtitle segments."""

    segments: list[SubtitleSegment] = field(default_factory=list)
    media_path: str = ""  # Media file the segment times refer to

    def add_segment(self, segment: SubtitleSegment) -> None:
        """Add a segment and keep the list sorted by start time.

        bisect.insort로 O(n) 삽입 (전체 정렬 O(n log n) 대비 개선).
        """
        bisect.insort(self.segments, segment, key=lambda s: s.start_ms)

    def index_of(self, segment: SubtitleSegment) -> int:
        """Return the index of *segment* by identity, or -1."""
        for i, seg in enumerate(self.segments):
            if seg is segment:
                return i
        return -1

    def segment_at(self, position_ms: int) -> SubtitleSegment | None:
        """Segment whose [start, end) span contains *position_ms*, or None."""
        idx = bisect.bisect_right(self.segments, position_ms, key=lambda s: s.start_ms)
        if idx == 0:
            return None
        seg = self.segments[idx - 1]
        return seg if position_ms < seg.end_ms else None

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __getitem__(self, index: int) -> SubtitleSegment:
        return self.segments[index]

    def update_segment_time(self, index: int, start_ms: int, end_ms: int) -> None:
        """Change start/end of the segment at *index* and re-sort.

        기존 위치에서 제거 후 bisect.insort로 올바른 위치에 재삽입: O(n).
        """
        if 0 <= index < len(self.segments):
            seg = self.segments.pop(index)
            seg.start_ms = start_ms
            seg.end_ms = end_ms
            bisect.insort(self.segments, seg, key=lambda s: s.start_ms)
