"""QUndoCommand subclasses for subtitle timing edits."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtGui import QUndoCommand

if TYPE_CHECKING:
    from subwave.models.subtitle import SubtitleSegment, SubtitleTrack


class EditTimeCommand(QUndoCommand):
    """Change the start/end times of a subtitle segment.

    The segment is tracked by identity because a time change re-sorts the
    track and may move it to another index.
    """

    def __init__(self, track: SubtitleTrack, segment: SubtitleSegment,
                 new_start: int, new_end: int):
        index = track.index_of(segment)
        super().__init__(f"Edit time (segment {index + 1})")
        self._track = track
        self._segment = segment
        self._old_start = segment.start_ms
        self._old_end = segment.end_ms
        self._new_start = new_start
        self._new_end = new_end

    def _apply(self, start_ms: int, end_ms: int) -> None:
        index = self._track.index_of(self._segment)
        self._track.update_segment_time(index, start_ms, end_ms)

    def redo(self) -> None:
        self._apply(self._new_start, self._new_end)

    def undo(self) -> None:
        self._apply(self._old_start, self._old_end)
