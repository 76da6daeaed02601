"""QtMediaPlayerAdapter: QMediaPlayer를 파형 엔진의 플레이어 인터페이스로 감쌈."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtMultimedia import QMediaPlayer


class QtMediaPlayerAdapter(QObject):
    """Transport control plus the two playback modes the engine toggles.

    Loop mode sends the player back to the entry start once it reaches the
    entry stop (bounds come from *loop_bounds*). Sync mode re-emits player
    positions as position_synced; connect it to
    WaveformViewContext.follow_position to keep the cursor on the playhead.
    """

    position_synced = Signal(int)

    def __init__(
        self,
        player: QMediaPlayer,
        loop_bounds: Callable[[], tuple[int, int] | None] | None = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._player = player
        self._loop_bounds = loop_bounds
        self._looping = False
        self._syncing = False
        player.positionChanged.connect(self._on_position_changed)

    # ---- 재생 제어 ----

    def jump(self, ms: int) -> None:
        self._player.setPosition(max(0, int(ms)))

    def pause(self) -> None:
        self._player.pause()

    def unpause(self) -> None:
        self._player.play()

    def position(self) -> int:
        return self._player.position()

    def media_path(self) -> str | None:
        source = self._player.source()
        return source.toLocalFile() or None

    # ---- 모드 ----

    def is_looping_current_entry(self) -> bool:
        return self._looping

    def set_looping(self, enabled: bool) -> None:
        self._looping = enabled

    def is_syncing_position(self) -> bool:
        return self._syncing

    def set_syncing(self, enabled: bool) -> None:
        self._syncing = enabled

    def set_loop_bounds(self, loop_bounds: Callable[[], tuple[int, int] | None] | None) -> None:
        self._loop_bounds = loop_bounds

    @Slot(int)
    def _on_position_changed(self, position_ms: int) -> None:
        if self._looping and self._loop_bounds is not None:
            bounds = self._loop_bounds()
            if bounds is not None:
                start_ms, stop_ms = bounds
                if position_ms >= stop_ms:
                    self.jump(start_ms)
                    return
        if self._syncing:
            self.position_synced.emit(position_ms)
