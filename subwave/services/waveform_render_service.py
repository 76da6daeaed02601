"""Waveform image rendering through ffmpeg's showwavespic filter.

Builds the ffmpeg command for a time window and runs it either inline
(`WaveformRenderService.render_sync`) or on a thread pool
(`WaveformRenderService.start_async`) with hard-kill cancellation.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from subwave.infrastructure.ffmpeg_runner import FFmpegRunner, get_ffmpeg_runner
from subwave.models.waveform import RenderRequest, TimeWindow
from subwave.services.ffmpeg_logger import log_ffmpeg_output
from subwave.services.waveform_filter import FilterStyle, build_filter_style
from subwave.utils.config import RENDER_TIMEOUT_SEC
from subwave.utils.time_utils import ms_to_seconds_arg

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------ command

def time_predicate(start_ms: int | None, stop_ms: int | None) -> str | None:
    """aselect expression keeping samples with start <= t < stop.

    Either bound may be None, giving a one-sided predicate; with neither
    bound there is nothing to select and None is returned.
    """
    if start_ms is not None and stop_ms is not None:
        return f"gte(t,{ms_to_seconds_arg(start_ms)})*lt(t,{ms_to_seconds_arg(stop_ms)})"
    if start_ms is not None:
        return f"gte(t,{ms_to_seconds_arg(start_ms)})"
    if stop_ms is not None:
        return f"lt(t,{ms_to_seconds_arg(stop_ms)})"
    return None


def width_for_window(window: TimeWindow, pixels_per_second: float) -> int:
    """Image width so that one second always spans *pixels_per_second* pixels."""
    return int(round(window.duration_ms * pixels_per_second / 1000))


def build_filter_graph(
    start_ms: int | None,
    stop_ms: int | None,
    width_px: int,
    height_px: int,
    filter_params: str,
) -> str:
    chain = ["[0:a]"]
    predicate = time_predicate(start_ms, stop_ms)
    if predicate is not None:
        # 작은따옴표 안의 쉼표는 필터 그래프 구분자로 해석되지 않음
        chain.append(f"aselect='{predicate}',")
    chain.append("asetpts=PTS-STARTPTS,")
    chain.append(f"showwavespic=s={width_px}x{height_px}{filter_params}")
    return "".join(chain)


def build_render_args(request: RenderRequest) -> list[str]:
    """ffmpeg arguments (without the binary) writing one PNG frame to stdout."""
    graph = build_filter_graph(
        request.window.start_ms,
        request.window.stop_ms,
        request.width_px,
        request.height_px,
        request.filter_params,
    )
    return [
        "-hide_banner",
        "-nostdin",
        "-loglevel", "error",
        "-i", str(request.source_file),
        "-filter_complex", graph,
        "-frames:v", "1",
        "-c:v", "png",
        "-f", "image2pipe",
        "-",
    ]


def make_render_request(
    source_file: str | Path,
    window: TimeWindow,
    height_px: int,
    pixels_per_second: float,
    style: FilterStyle,
) -> RenderRequest:
    width_px = width_for_window(window, pixels_per_second)
    return RenderRequest(
        source_file=Path(source_file),
        window=window,
        width_px=width_px,
        height_px=height_px,
        filter_params=build_filter_style(style, width_px, height_px),
    )


# ------------------------------------------------------------------ async job

class RenderHandle:
    """Caller-side view of one async render.

    Outlives the pool's runnable, which is deleted as soon as it finishes.
    kill() terminates the process outright; a killed render never emits
    result or failed.
    """

    class Signals(QObject):
        # (request, png bytes)
        result = Signal(object, object)
        # (request, message)
        failed = Signal(object, str)
        # emitted last, whether or not the render produced anything
        finished = Signal(object)

    def __init__(self, request: RenderRequest):
        self.request = request
        self.signals = self.Signals()
        self._lock = threading.Lock()
        self._process: subprocess.Popen | None = None
        self._cancelled = False
        self._done = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def is_running(self) -> bool:
        return not self._done.is_set() and not self._cancelled

    def kill(self) -> None:
        with self._lock:
            self._cancelled = True
            proc = self._process
        if proc is not None and proc.poll() is None:
            try:
                proc.kill()
            except OSError as e:
                logger.debug(f"Waveform render already gone: {e}")


class WaveformRenderJob(QRunnable):
    """Runs the ffmpeg render behind a RenderHandle on a worker thread."""

    def __init__(self, handle: RenderHandle, runner: FFmpegRunner):
        super().__init__()
        self.handle = handle
        self._runner = runner

    def run(self) -> None:
        handle = self.handle
        try:
            self._run(handle)
        finally:
            handle._done.set()
            handle.signals.finished.emit(handle)
            self.handle = None

    def _run(self, handle: RenderHandle) -> None:
        request = handle.request
        with handle._lock:
            if handle._cancelled:
                return
            try:
                handle._process = self._runner.run_async(build_render_args(request))
            except OSError as e:
                logger.warning(f"Waveform render could not start: {e}")
                handle.signals.failed.emit(request, str(e))
                return
            proc = handle._process

        try:
            stdout, stderr = proc.communicate(timeout=RENDER_TIMEOUT_SEC)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.communicate()
            if not handle.cancelled:
                logger.warning(f"Waveform render timed out for {request.source_file}")
                handle.signals.failed.emit(request, "timeout")
            return

        if handle.cancelled:
            return
        if proc.returncode == 0 and stdout:
            handle.signals.result.emit(request, stdout)
            return

        if stderr:
            log_ffmpeg_output(stderr)
        message = f"ffmpeg exited with code {proc.returncode}" if proc.returncode else "empty output"
        logger.warning(f"Waveform render failed for {request.source_file}: {message}")
        handle.signals.failed.emit(request, message)


# ------------------------------------------------------------------ service

class WaveformRenderService:
    """Entry point for waveform rendering, sync or on a thread pool."""

    def __init__(self, runner: Optional[FFmpegRunner] = None, max_threads: int = 2):
        self._runner = runner or get_ffmpeg_runner()
        self._thread_pool = QThreadPool()
        self._thread_pool.setMaxThreadCount(max_threads)
        # 시그널이 GUI 스레드에 전달될 때까지 핸들을 유지
        self._active: set[RenderHandle] = set()

    @property
    def runner(self) -> FFmpegRunner:
        return self._runner

    @property
    def active_count(self) -> int:
        return len(self._active)

    def render_sync(self, request: RenderRequest) -> bytes:
        """Block until ffmpeg exits. Returns b"" when no image was produced."""
        if not request.is_renderable():
            return b""
        try:
            proc = self._runner.run(build_render_args(request), timeout=RENDER_TIMEOUT_SEC)
        except (OSError, subprocess.SubprocessError) as e:
            logger.warning(f"Waveform render failed for {request.source_file}: {e}")
            return b""
        if proc.returncode != 0 or not proc.stdout:
            if proc.stderr:
                log_ffmpeg_output(proc.stderr)
            logger.warning(f"Waveform render failed for {request.source_file} (code {proc.returncode})")
            return b""
        return proc.stdout

    def start_async(
        self,
        request: RenderRequest,
        on_result: Callable[[RenderRequest, bytes], None],
        on_failed: Callable[[RenderRequest, str], None] | None = None,
    ) -> RenderHandle:
        """Queue a render. Callbacks are connected before the job can emit."""
        handle = RenderHandle(request)
        handle.signals.result.connect(on_result)
        if on_failed is not None:
            handle.signals.failed.connect(on_failed)
        handle.signals.finished.connect(self._release)
        self._active.add(handle)
        self._thread_pool.start(WaveformRenderJob(handle, self._runner))
        return handle

    def _release(self, handle: RenderHandle) -> None:
        self._active.discard(handle)

    def wait_for_done(self, msecs: int = -1) -> bool:
        return self._thread_pool.waitForDone(msecs)
