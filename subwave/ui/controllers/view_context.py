"""WaveformViewContext: 문서 뷰 하나가 소유하는 파형 관련 상태 일체.

Overlay, preview scheduler, and gesture controller are created here and
passed around explicitly; nothing is shared between views.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from subwave.infrastructure.ffmpeg_runner import FFmpegRunner
from subwave.models.waveform import TimeWindow
from subwave.services.sample_playback import SamplePlaybackScheduler
from subwave.services.settings_manager import WaveformSettings
from subwave.services.waveform_filter import coerce_style
from subwave.services.waveform_mapping import PointerEvent
from subwave.services.waveform_render_service import WaveformRenderService, width_for_window
from subwave.ui.controllers.gestures import (
    GestureAction,
    Modifier,
    PointerButton,
    WaveformInteractionController,
)
from subwave.ui.controllers.waveform_overlay import WaveformOverlay

if TYPE_CHECKING:
    from subwave.models.protocols import DocumentModel, MediaPlayer

logger = logging.getLogger(__name__)


class WaveformViewContext(QObject):
    """Everything the waveform feature keeps for one open document view."""

    image_changed = Signal(object)  # WaveformImage | None

    def __init__(
        self,
        document: DocumentModel,
        player: MediaPlayer,
        settings: WaveformSettings | None = None,
        renderer: WaveformRenderService | None = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.settings = settings or WaveformSettings()
        self.document = document
        self.player = player
        self.renderer = renderer or WaveformRenderService(FFmpegRunner(self.settings.ffmpeg_path))

        self.overlay = WaveformOverlay(
            self.renderer,
            style=self.settings.style,
            max_window_ms=self.settings.max_window_ms,
            parent=self,
        )
        self.overlay.image_changed.connect(self.image_changed)
        self.scheduler = SamplePlaybackScheduler(player, parent=self)
        self.interaction = WaveformInteractionController(
            document,
            self.scheduler,
            pixels_per_second=self.settings.pixels_per_second,
            click_step_ms=self.settings.click_step_ms,
            sample_ms=self.settings.sample_ms,
        )

        # 커서 이동이 연속될 때 마지막 위치만 렌더 (debounce)
        self._refresh_timer = QTimer(self)
        self._refresh_timer.setSingleShot(True)
        self._refresh_timer.timeout.connect(self._on_refresh_timeout)
        self._force_pending = False
        self._closed = False

        document.add_times_adjusted_listener(self._on_times_adjusted)

    @property
    def is_closed(self) -> bool:
        return self._closed

    # ---------------------------------------------------------- settings

    def apply_settings(self, settings: WaveformSettings) -> None:
        """Take new preferences; the next refresh re-renders with them."""
        self.settings = settings
        self.overlay.style = coerce_style(settings.style)
        self.overlay.max_window_ms = settings.max_window_ms
        self.interaction.pixels_per_second = settings.pixels_per_second
        self.interaction.click_step_ms = settings.click_step_ms
        self.interaction.sample_ms = settings.sample_ms
        self.document.spacing_ms = settings.spacing_ms
        self.schedule_refresh(force=True)

    # ---------------------------------------------------------- refresh

    def current_window(self) -> TimeWindow | None:
        return TimeWindow.try_create(
            self.document.current_entry_start_ms(),
            self.document.current_entry_stop_ms(),
        )

    def on_cursor_moved(self) -> None:
        """Host hook for 'current entry changed'."""
        self.schedule_refresh()

    @Slot(int)
    def follow_position(self, position_ms: int) -> bool:
        """Make the entry under the playhead current while syncing.

        Connect the player's position_synced here. Returns True when the
        cursor moved and a refresh was scheduled.
        """
        if self._closed or not self.document.select_at_ms(position_ms):
            return False
        self.on_cursor_moved()
        return True

    def schedule_refresh(self, force: bool = False) -> None:
        if self._closed:
            return
        self._force_pending = self._force_pending or force
        delay = self.settings.refresh_delay_ms
        if delay <= 0:
            self._on_refresh_timeout()
        else:
            self._refresh_timer.start(delay)

    @Slot()
    def _on_refresh_timeout(self) -> None:
        force = self._force_pending
        self._force_pending = False
        self.refresh_now(force)

    def refresh_now(self, force: bool = False) -> bool:
        """Render the current entry's span if the displayed image is stale."""
        if self._closed:
            return False
        window = self.current_window()
        if window is None:
            return False
        self.overlay.set_source(self.player.media_path())
        self.overlay.anchor_index = getattr(self.document, "current_index", -1)
        width_px = width_for_window(window, self.settings.pixels_per_second)
        return self.overlay.maybe_refresh(window, width_px, self.settings.height_px, force)

    def _on_times_adjusted(self) -> None:
        self.schedule_refresh()

    # ---------------------------------------------------------- pointer

    def handle_pointer(
        self,
        event: PointerEvent,
        button: PointerButton,
        modifiers: Modifier = Modifier.NONE,
        is_drag: bool = False,
    ) -> GestureAction:
        """Dispatch a gesture on the displayed image. No-op once closed."""
        if self._closed:
            logger.debug("Pointer event on a closed waveform view ignored")
            return GestureAction.NONE
        return self.interaction.handle(event, button, modifiers, is_drag)

    # ---------------------------------------------------------- lifecycle

    def remove_overlay(self) -> None:
        """Hide the waveform, e.g. before a destructive document edit."""
        self.overlay.clear()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._refresh_timer.stop()
        self.scheduler.cancel(restore=True)
        self.overlay.close()
        self.document.remove_times_adjusted_listener(self._on_times_adjusted)
