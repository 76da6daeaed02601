"""Subtitle document: a track plus a cursor on the current entry."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator

from subwave.models.subtitle import SubtitleSegment, SubtitleTrack
from subwave.utils.config import DEFAULT_SUBTITLE_SPACING_MS

if TYPE_CHECKING:
    from PySide6.QtGui import QUndoStack

logger = logging.getLogger(__name__)


class SubtitleDocument:
    """Time-editing view over a SubtitleTrack.

    Edits go through an EditTimeCommand when an undo stack is attached,
    otherwise they are applied to the track directly. Listeners registered
    with add_times_adjusted_listener run on notify_times_adjusted().
    """

    def __init__(
        self,
        track: SubtitleTrack,
        spacing_ms: int = DEFAULT_SUBTITLE_SPACING_MS,
        undo_stack: QUndoStack | None = None,
    ) -> None:
        self.track = track
        self.spacing_ms = spacing_ms
        self._undo_stack = undo_stack
        self._current: SubtitleSegment | None = track[0] if len(track) else None
        self._listeners: list[Callable[[], None]] = []

    # ---------------------------------------------------------- cursor

    @property
    def current_segment(self) -> SubtitleSegment | None:
        return self._current

    @property
    def current_index(self) -> int:
        if self._current is None:
            return -1
        return self.track.index_of(self._current)

    def select(self, index: int) -> bool:
        if 0 <= index < len(self.track):
            self._current = self.track[index]
            return True
        return False

    def select_at_ms(self, ms: int) -> bool:
        """Move the cursor to the entry playing at *ms*.

        Returns True only when the cursor actually changed.
        """
        seg = self.track.segment_at(ms)
        if seg is None or seg is self._current:
            return False
        self._current = seg
        return True

    def go_previous(self) -> bool:
        idx = self.current_index
        if idx <= 0:
            return False
        return self.select(idx - 1)

    def go_next(self) -> bool:
        idx = self.current_index
        if idx < 0:
            return False
        return self.select(idx + 1)

    @contextmanager
    def preserve_cursor(self) -> Iterator[None]:
        saved = self._current
        try:
            yield
        finally:
            self._current = saved

    # ---------------------------------------------------------- times

    def current_entry_start_ms(self) -> int | None:
        return self._current.start_ms if self._current else None

    def current_entry_stop_ms(self) -> int | None:
        return self._current.end_ms if self._current else None

    def set_start_ms(self, ms: int) -> None:
        seg = self._current
        if seg is None:
            return
        self._set_times(seg, max(0, int(ms)), seg.end_ms)

    def set_stop_ms(self, ms: int) -> None:
        seg = self._current
        if seg is None:
            return
        self._set_times(seg, seg.start_ms, max(0, int(ms)))

    def adjust_start_ms(self, delta_ms: int) -> None:
        if self._current is not None:
            self.set_start_ms(self._current.start_ms + delta_ms)

    def adjust_stop_ms(self, delta_ms: int) -> None:
        if self._current is not None:
            self.set_stop_ms(self._current.end_ms + delta_ms)

    def _set_times(self, seg: SubtitleSegment, start_ms: int, end_ms: int) -> None:
        if self._undo_stack is not None:
            from subwave.ui.commands import EditTimeCommand
            self._undo_stack.push(EditTimeCommand(self.track, seg, start_ms, end_ms))
        else:
            self.track.update_segment_time(self.track.index_of(seg), start_ms, end_ms)

    # ---------------------------------------------------------- events

    def add_times_adjusted_listener(self, callback: Callable[[], None]) -> None:
        self._listeners.append(callback)

    def remove_times_adjusted_listener(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify_times_adjusted(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("times-adjusted listener failed")
