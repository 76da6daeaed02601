"""SubWave application entry point.

    python main.py movie.mp4 --srt movie.srt            # interactive timing
    python main.py movie.mp4 --start 2000 --stop 5000 --output wave.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication, QUrl
from PySide6.QtGui import QKeySequence, QShortcut, QUndoStack
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from subwave.infrastructure.ffmpeg_runner import FFmpegRunner
from subwave.models.document import SubtitleDocument
from subwave.models.subtitle import SubtitleSegment, SubtitleTrack
from subwave.models.waveform import TimeWindow
from subwave.services.settings_manager import SettingsManager, WaveformSettings
from subwave.services.subtitle_io import export_srt, import_srt
from subwave.services.waveform_render_service import WaveformRenderService, make_render_request
from subwave.ui.controllers.player_adapter import QtMediaPlayerAdapter
from subwave.ui.controllers.view_context import WaveformViewContext
from subwave.ui.waveform_widget import WaveformWidget
from subwave.utils.config import APP_NAME, MEDIA_EXTENSIONS, ORG_NAME
from subwave.utils.time_utils import ms_to_display

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="subwave", description="Waveform-based subtitle timing")
    parser.add_argument("media", type=Path, help="audio or video file")
    parser.add_argument("--srt", type=Path, help="subtitle file to time against the media")
    parser.add_argument("--start", type=int, default=0, help="window start in ms (no --srt)")
    parser.add_argument("--stop", type=int, default=5000, help="window stop in ms (no --srt)")
    parser.add_argument("--output", type=Path, help="render the window to this PNG and exit")
    parser.add_argument("--ffmpeg", help="ffmpeg executable to use")
    parser.add_argument("--save", action="store_true", help="write timing changes back to --srt on exit")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def _render_to_file(args: argparse.Namespace, settings: WaveformSettings) -> int:
    window = TimeWindow.try_create(args.start, args.stop)
    if window is None:
        logger.error(f"Invalid window [{args.start}, {args.stop})")
        return 2
    request = make_render_request(
        args.media, window, settings.height_px, settings.pixels_per_second, settings.style
    )
    data = WaveformRenderService(FFmpegRunner(settings.ffmpeg_path)).render_sync(request)
    if not data:
        logger.error("ffmpeg produced no image")
        return 1
    args.output.write_bytes(data)
    logger.info(f"Wrote {request.width_px}x{request.height_px} waveform to {args.output}")
    return 0


class TimingWindow(QMainWindow):
    """Minimal editor: the waveform of the current subtitle plus navigation."""

    def __init__(
        self,
        view: WaveformViewContext,
        document: SubtitleDocument,
        undo_stack: QUndoStack,
        player: QtMediaPlayerAdapter,
    ):
        super().__init__()
        self._view = view
        self._document = document
        self.setWindowTitle(APP_NAME)

        self._info = QLabel()
        prev_btn = QPushButton("◀ Prev")
        next_btn = QPushButton("Next ▶")
        prev_btn.clicked.connect(lambda: self._move(document.go_previous))
        next_btn.clicked.connect(lambda: self._move(document.go_next))

        loop_box = QCheckBox("Loop entry")
        follow_box = QCheckBox("Follow playback")
        loop_box.toggled.connect(player.set_looping)
        follow_box.toggled.connect(player.set_syncing)
        player.position_synced.connect(self._follow_playback)

        nav = QHBoxLayout()
        nav.addWidget(prev_btn)
        nav.addWidget(self._info, 1)
        nav.addWidget(loop_box)
        nav.addWidget(follow_box)
        nav.addWidget(next_btn)

        layout = QVBoxLayout()
        layout.addLayout(nav)
        layout.addWidget(WaveformWidget(view))
        central = QWidget()
        central.setLayout(layout)
        self.setCentralWidget(central)

        QShortcut(QKeySequence.StandardKey.Undo, self, undo_stack.undo)
        QShortcut(QKeySequence.StandardKey.Redo, self, undo_stack.redo)
        document.add_times_adjusted_listener(self._update_info)
        undo_stack.indexChanged.connect(lambda _idx: self._after_undo())
        self._update_info()

    def _move(self, step) -> None:
        if step():
            self._view.on_cursor_moved()
            self._update_info()

    def _follow_playback(self, position_ms: int) -> None:
        if self._view.follow_position(position_ms):
            self._update_info()

    def _after_undo(self) -> None:
        self._view.schedule_refresh()
        self._update_info()

    def _update_info(self) -> None:
        seg = self._document.current_segment
        if seg is None:
            self._info.setText("(no subtitles)")
            return
        self._info.setText(
            f"#{self._document.current_index + 1}  "
            f"{ms_to_display(seg.start_ms)} → {ms_to_display(seg.end_ms)}  {seg.text}"
        )

    def closeEvent(self, event) -> None:
        self._view.close()
        super().closeEvent(event)


def _run_gui(args: argparse.Namespace, settings: WaveformSettings) -> int:
    app = QApplication(sys.argv[:1])

    if args.srt:
        track = import_srt(args.srt)
    else:
        track = SubtitleTrack([SubtitleSegment(args.start, args.stop)])
    track.media_path = str(args.media)

    undo_stack = QUndoStack()
    document = SubtitleDocument(track, spacing_ms=settings.spacing_ms, undo_stack=undo_stack)

    player = QMediaPlayer()
    audio_output = QAudioOutput()
    player.setAudioOutput(audio_output)
    player.setSource(QUrl.fromLocalFile(str(args.media.resolve())))

    def _entry_bounds() -> tuple[int, int] | None:
        seg = document.current_segment
        return (seg.start_ms, seg.end_ms) if seg else None

    adapter = QtMediaPlayerAdapter(player, loop_bounds=_entry_bounds)
    view = WaveformViewContext(document, adapter, settings)

    window = TimingWindow(view, document, undo_stack, adapter)
    window.show()
    view.schedule_refresh(force=True)

    def _on_about_to_quit() -> None:
        view.renderer.wait_for_done(5000)
        if args.save and args.srt:
            export_srt(track, args.srt)
            logger.info(f"Saved timings to {args.srt}")

    app.aboutToQuit.connect(_on_about_to_quit)
    return app.exec()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.media.suffix.lower() not in MEDIA_EXTENSIONS:
        logger.warning(f"Unrecognised media extension: {args.media.suffix}")

    QCoreApplication.setOrganizationName(ORG_NAME)
    QCoreApplication.setApplicationName(APP_NAME)
    settings = SettingsManager().load_waveform_settings()
    if args.ffmpeg:
        settings.ffmpeg_path = args.ffmpeg

    if args.output:
        return _render_to_file(args, settings)
    return _run_gui(args, settings)


if __name__ == "__main__":
    sys.exit(main())
