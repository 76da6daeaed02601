"""Short preview playback that puts the player back where it was."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from subwave.models.waveform import PlaybackSession

if TYPE_CHECKING:
    from subwave.models.protocols import MediaPlayer

logger = logging.getLogger(__name__)


def clamp_sample_duration(
    duration_ms: int | None,
    start_ms: int,
    stop_limit_ms: int | None = None,
) -> int:
    """Preview length that never runs past *stop_limit_ms*. 0 means no preview."""
    if not duration_ms or duration_ms <= 0:
        return 0
    if stop_limit_ms is not None:
        duration_ms = min(duration_ms, stop_limit_ms - start_ms)
    return max(0, int(duration_ms))


class SamplePlaybackScheduler(QObject):
    """Plays a preview from a timestamp and restores player state afterwards.

    Loop-current-entry and position-sync modes are switched off while the
    sample plays so neither drags the player elsewhere. Only one session is
    pending at a time; a new sample cancels the previous timer and takes over
    the modes it had saved.
    """

    sample_started = Signal(int, int)  # (start_ms, duration_ms)
    sample_finished = Signal(int)  # resume_at_ms

    def __init__(self, player: MediaPlayer, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._player = player
        self._session: PlaybackSession | None = None

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    def play_sample(
        self,
        start_ms: int,
        duration_ms: int | None,
        stop_limit_ms: int | None = None,
    ) -> PlaybackSession | None:
        """Jump to *start_ms* and play for *duration_ms* (clamped).

        Returns the pending session, or None when only a jump happened.
        """
        duration = clamp_sample_duration(duration_ms, start_ms, stop_limit_ms)
        previous = self._session

        if duration <= 0:
            if previous is not None:
                self._restore(previous)
            self._player.jump(start_ms)
            return None

        saved_loop = self._player.is_looping_current_entry()
        saved_sync = self._player.is_syncing_position()
        if previous is not None:
            # 이전 세션이 이미 끈 모드는 플레이어에서 읽히지 않으므로 승계
            self._discard_timer(previous)
            saved_loop = saved_loop or previous.saved_loop_mode
            saved_sync = saved_sync or previous.saved_sync_mode

        if saved_loop:
            self._player.set_looping(False)
        if saved_sync:
            self._player.set_syncing(False)

        self._player.jump(start_ms)
        self._player.unpause()

        timer = QTimer(self)
        timer.setSingleShot(True)
        session = PlaybackSession(
            resume_at_ms=start_ms,
            saved_loop_mode=saved_loop,
            saved_sync_mode=saved_sync,
            timer=timer,
        )
        timer.timeout.connect(lambda s=session: self._on_timeout(s))
        self._session = session
        timer.start(duration)
        logger.debug(f"Preview sample at {start_ms}ms for {duration}ms")
        self.sample_started.emit(start_ms, duration)
        return session

    def cancel(self, restore: bool = True) -> None:
        """Drop the pending session, restoring player state unless told not to."""
        session = self._session
        if session is None:
            return
        if restore:
            self._restore(session)
        else:
            self._discard_timer(session)
            self._session = None

    def _on_timeout(self, session: PlaybackSession) -> None:
        if session is not self._session:
            return
        self._restore(session)

    def _restore(self, session: PlaybackSession) -> None:
        self._discard_timer(session)
        self._session = None
        self._player.pause()
        self._player.jump(session.resume_at_ms)
        if session.saved_loop_mode:
            self._player.set_looping(True)
        if session.saved_sync_mode:
            self._player.set_syncing(True)
        self.sample_finished.emit(session.resume_at_ms)

    @staticmethod
    def _discard_timer(session: PlaybackSession) -> None:
        timer = session.timer
        if timer is not None:
            timer.stop()
            timer.deleteLater()
            session.timer = None
