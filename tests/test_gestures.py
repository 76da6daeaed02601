"""Tests for gesture classification and the timing edits they perform."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from subwave.models.document import SubtitleDocument
from subwave.models.subtitle import SubtitleSegment, SubtitleTrack
from subwave.models.waveform import TimeWindow
from subwave.services.waveform_mapping import PointerEvent
from subwave.ui.controllers.gestures import (
    GestureAction,
    Modifier,
    PointerButton,
    WaveformInteractionController,
    classify_gesture,
)

L, R, M = PointerButton.LEFT, PointerButton.RIGHT, PointerButton.MIDDLE
CTRL, SHIFT, NONE = Modifier.CTRL, Modifier.SHIFT, Modifier.NONE


class TestClassifyGesture:
    @pytest.mark.parametrize(
        "button,mods,drag,expected",
        [
            (L, NONE, False, GestureAction.SET_START),
            (L, CTRL, False, GestureAction.SET_START_AND_PREVIOUS_STOP),
            (L, SHIFT, True, GestureAction.ADJUST_START_BY_DRAG),
            (L, SHIFT, False, GestureAction.ADJUST_START_BY_STEP),
            (R, NONE, False, GestureAction.SET_STOP),
            (R, CTRL, False, GestureAction.SET_STOP_AND_NEXT_START),
            (R, SHIFT, True, GestureAction.ADJUST_STOP_BY_DRAG),
            (R, SHIFT, False, GestureAction.ADJUST_STOP_BY_STEP),
            (M, NONE, False, GestureAction.JUMP_AND_PREVIEW),
        ],
    )
    def test_table(self, button, mods, drag, expected):
        assert classify_gesture(button, mods, drag) is expected

    def test_plain_drag_acts_as_click(self):
        assert classify_gesture(L, NONE, True) is GestureAction.SET_START
        assert classify_gesture(R, CTRL, True) is GestureAction.SET_STOP_AND_NEXT_START

    def test_shift_wins_over_ctrl(self):
        assert classify_gesture(L, CTRL | SHIFT, True) is GestureAction.ADJUST_START_BY_DRAG
        assert classify_gesture(R, CTRL | SHIFT, False) is GestureAction.ADJUST_STOP_BY_STEP

    def test_middle_ignores_modifiers(self):
        assert classify_gesture(M, CTRL | SHIFT, True) is GestureAction.JUMP_AND_PREVIEW


# ---------------------------------------------------------------------------
# Controller against a real SubtitleDocument
# ---------------------------------------------------------------------------

WINDOW = TimeWindow(2000, 5000)
WIDTH = 225


def _document(current: int = 1, spacing: int = 100) -> SubtitleDocument:
    track = SubtitleTrack([
        SubtitleSegment(0, 1500, "one"),
        SubtitleSegment(2000, 5000, "two"),
        SubtitleSegment(6000, 8000, "three"),
    ])
    doc = SubtitleDocument(track, spacing_ms=spacing)
    doc.select(current)
    return doc


def _click(x: float) -> PointerEvent:
    return PointerEvent(x_px=x, image_width_px=WIDTH, window=WINDOW)


def _drag(press_x: float, release_x: float) -> PointerEvent:
    return PointerEvent(x_px=release_x, image_width_px=WIDTH, window=WINDOW, press_x_px=press_x)


@pytest.fixture
def scheduler():
    return MagicMock()


def _controller(doc, scheduler, **kwargs) -> WaveformInteractionController:
    kwargs.setdefault("pixels_per_second", 75)
    kwargs.setdefault("click_step_ms", 100)
    kwargs.setdefault("sample_ms", 1000)
    return WaveformInteractionController(doc, scheduler, **kwargs)


class TestSetTimes:
    def test_click_left_edge_sets_window_start(self, scheduler):
        doc = _document()
        doc.track[1].start_ms = 3000
        _controller(doc, scheduler).handle(_click(0), L)
        assert doc.track[1].start_ms == 2000

    def test_click_right_edge_sets_window_stop(self, scheduler):
        doc = _document()
        _controller(doc, scheduler).handle(_click(WIDTH), L)
        assert doc.track[1].start_ms == 5000

    def test_right_click_sets_stop(self, scheduler):
        doc = _document()
        _controller(doc, scheduler).handle(_click(75), R)
        assert doc.track[1].end_ms == 3000

    def test_ctrl_click_sets_previous_stop(self, scheduler):
        doc = _document(spacing=100)
        _controller(doc, scheduler).handle(_click(75), L, CTRL)
        assert doc.track[1].start_ms == 3000
        assert doc.track[0].end_ms == 2900

    def test_ctrl_right_click_sets_next_start(self, scheduler):
        doc = _document(spacing=100)
        _controller(doc, scheduler).handle(_click(150), R, CTRL)
        assert doc.track[1].end_ms == 4000
        assert doc.track[2].start_ms == 4100

    def test_ctrl_click_without_previous_still_sets_start(self, scheduler):
        doc = _document(current=0)
        _controller(doc, scheduler).handle(_click(0), L, CTRL)
        assert doc.track[0].start_ms == 2000
        assert doc.current_segment.text == "one"

    def test_ctrl_right_click_without_next_still_sets_stop(self, scheduler):
        doc = _document(current=2)
        _controller(doc, scheduler).handle(_click(WIDTH), R, CTRL)
        assert doc.current_segment.end_ms == 5000


class TestAdjustTimes:
    def test_shift_drag_left_moves_start_earlier(self, scheduler):
        doc = _document()
        _controller(doc, scheduler).handle(_drag(300, 150), L, SHIFT, is_drag=True)
        assert doc.track[1].start_ms == 0

    def test_shift_drag_right_moves_stop(self, scheduler):
        doc = _document()
        # 75px rightward = -1000ms delta
        _controller(doc, scheduler).handle(_drag(0, 75), R, SHIFT, is_drag=True)
        assert doc.track[1].end_ms == 4000

    def test_shift_click_steps_start_back(self, scheduler):
        doc = _document()
        _controller(doc, scheduler, click_step_ms=250).handle(_click(10), L, SHIFT)
        assert doc.track[1].start_ms == 1750

    def test_shift_right_click_steps_stop_forward(self, scheduler):
        doc = _document()
        _controller(doc, scheduler, click_step_ms=250).handle(_click(10), R, SHIFT)
        assert doc.track[1].end_ms == 5250

    def test_start_never_negative(self, scheduler):
        doc = _document(current=0)
        _controller(doc, scheduler, click_step_ms=5000).handle(_click(0), L, SHIFT)
        assert doc.track[0].start_ms == 0


class TestEditSemantics:
    def test_times_adjusted_fired_after_edit(self, scheduler):
        doc = _document()
        events = []
        doc.add_times_adjusted_listener(lambda: events.append(doc.track[1].start_ms))
        _controller(doc, scheduler).handle(_click(75), L)
        assert events == [3000]

    def test_cursor_restored_after_neighbour_edit(self, scheduler):
        doc = _document()
        current = doc.current_segment
        _controller(doc, scheduler).handle(_click(75), L, CTRL)
        assert doc.current_segment is current

    def test_middle_click_does_not_edit(self, scheduler):
        doc = _document()
        events = []
        doc.add_times_adjusted_listener(lambda: events.append(True))
        _controller(doc, scheduler).handle(_click(75), M)
        assert events == []
        assert doc.track[1].start_ms == 2000


class TestPreview:
    def test_middle_click_plays_sample_limited_to_entry(self, scheduler):
        doc = _document()
        _controller(doc, scheduler, sample_ms=1000).handle(_click(150), M)
        scheduler.play_sample.assert_called_once_with(4000, 1000, stop_limit_ms=5000)

    def test_preview_disabled_passes_zero(self, scheduler):
        doc = _document()
        _controller(doc, scheduler, sample_ms=0).handle(_click(0), M)
        scheduler.play_sample.assert_called_once_with(2000, 0, stop_limit_ms=5000)
