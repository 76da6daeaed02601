"""WaveformOverlay: 뷰 하나에 표시 중인 파형 이미지와 진행 중인 렌더를 소유."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Signal

from subwave.models.waveform import RenderRequest, TimeWindow, WaveformImage
from subwave.services.waveform_filter import (
    DEFAULT_STYLE,
    FilterStyle,
    build_filter_style,
    coerce_style,
)
from subwave.services.waveform_render_service import RenderHandle, WaveformRenderService

logger = logging.getLogger(__name__)


class WaveformOverlay(QObject):
    """Per-view waveform state.

    Holds the displayed image and at most one in-flight render. Starting a
    render kills the previous one, and results from any job other than the
    current one are ignored, so the last request issued always wins.
    """

    image_changed = Signal(object)  # WaveformImage | None
    render_failed = Signal(str)

    def __init__(
        self,
        renderer: WaveformRenderService,
        style: FilterStyle | str | None = DEFAULT_STYLE,
        max_window_ms: int | None = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._renderer = renderer
        self.style = coerce_style(style)
        self.max_window_ms = max_window_ms
        self.source_file: Path | None = None
        self.anchor_index: int = -1
        self._displayed: WaveformImage | None = None
        self._pending_job: RenderHandle | None = None
        self._closed = False

    # ---------------------------------------------------------- state

    @property
    def displayed_image(self) -> WaveformImage | None:
        return self._displayed

    @property
    def pending_job(self) -> RenderHandle | None:
        return self._pending_job

    @property
    def is_closed(self) -> bool:
        return self._closed

    def set_source(self, source_file: str | Path | None) -> None:
        """Switch media file. The displayed image no longer applies."""
        new_source = Path(source_file) if source_file else None
        if new_source == self.source_file:
            return
        self.source_file = new_source
        self._cancel_pending()
        self.clear()

    def exceeds_max_duration(self, window: TimeWindow) -> bool:
        return self.max_window_ms is not None and window.duration_ms > self.max_window_ms

    def needs_render(self, window: TimeWindow | None, force: bool = False) -> bool:
        if window is None or self._closed or self.source_file is None:
            return False
        # 긴 구간은 force와 무관하게 렌더하지 않음
        if self.exceeds_max_duration(window):
            return False
        if not force and self._displayed is not None and self._displayed.matches(window):
            return False
        return True

    # ---------------------------------------------------------- render

    def maybe_refresh(
        self,
        window: TimeWindow | None,
        width_px: int,
        height_px: int,
        force: bool = False,
    ) -> bool:
        """Render *window* unless the current image already shows it.

        Returns True when a render was started.
        """
        if not self.needs_render(window, force):
            return False
        if width_px <= 0 or height_px <= 0:
            return False

        request = RenderRequest(
            source_file=self.source_file,
            window=window,
            width_px=width_px,
            height_px=height_px,
            filter_params=build_filter_style(self.style, width_px, height_px),
        )
        self._cancel_pending()
        self._pending_job = self._renderer.start_async(
            request, self._on_render_result, self._on_render_failed
        )
        return True

    def _is_current(self, request: RenderRequest) -> bool:
        job = self._pending_job
        return job is not None and job.request is request and not job.cancelled

    def _on_render_result(self, request: RenderRequest, data: bytes) -> None:
        if not self._is_current(request):
            logger.debug(f"Dropping superseded waveform for {request.window}")
            return
        self._pending_job = None
        self._displayed = WaveformImage(
            data=data,
            window=request.window,
            width_px=request.width_px,
            height_px=request.height_px,
        )
        self.image_changed.emit(self._displayed)

    def _on_render_failed(self, request: RenderRequest, message: str) -> None:
        if not self._is_current(request):
            return
        self._pending_job = None
        self.render_failed.emit(message)

    def _cancel_pending(self) -> None:
        job = self._pending_job
        self._pending_job = None
        if job is not None:
            job.kill()

    # ---------------------------------------------------------- lifecycle

    def clear(self) -> None:
        """Forget the displayed image. An in-flight render still lands."""
        if self._displayed is None:
            return
        self._displayed = None
        self.image_changed.emit(None)

    def close(self) -> None:
        self._cancel_pending()
        self.clear()
        self._closed = True
