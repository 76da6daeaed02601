"""Pointer gestures on the waveform and the timing edits they perform.

classify_gesture() is a pure mapping; WaveformInteractionController applies
the resulting action to the document and player collaborators.
"""

from __future__ import annotations

import logging
from enum import Enum, Flag, auto
from typing import TYPE_CHECKING

from subwave.services.waveform_mapping import PointerEvent, drag_delta_to_ms, event_to_ms
from subwave.utils.config import (
    DEFAULT_CLICK_STEP_MS,
    DEFAULT_PIXELS_PER_SECOND,
    DEFAULT_SAMPLE_MS,
)

if TYPE_CHECKING:
    from subwave.models.protocols import DocumentModel
    from subwave.services.sample_playback import SamplePlaybackScheduler

logger = logging.getLogger(__name__)


class PointerButton(Enum):
    LEFT = auto()
    RIGHT = auto()
    MIDDLE = auto()


class Modifier(Flag):
    NONE = 0
    CTRL = auto()  # also updates the neighbouring entry
    SHIFT = auto()  # relative adjustment instead of absolute set


class GestureAction(Enum):
    NONE = auto()
    SET_START = auto()
    SET_START_AND_PREVIOUS_STOP = auto()
    ADJUST_START_BY_DRAG = auto()
    ADJUST_START_BY_STEP = auto()
    SET_STOP = auto()
    SET_STOP_AND_NEXT_START = auto()
    ADJUST_STOP_BY_DRAG = auto()
    ADJUST_STOP_BY_STEP = auto()
    JUMP_AND_PREVIEW = auto()


_START_ACTIONS = {
    # (shift, ctrl, is_drag) -> action; shift wins over ctrl
    (True, False, True): GestureAction.ADJUST_START_BY_DRAG,
    (True, False, False): GestureAction.ADJUST_START_BY_STEP,
    (False, True, False): GestureAction.SET_START_AND_PREVIOUS_STOP,
    (False, False, False): GestureAction.SET_START,
}

_STOP_ACTIONS = {
    (True, False, True): GestureAction.ADJUST_STOP_BY_DRAG,
    (True, False, False): GestureAction.ADJUST_STOP_BY_STEP,
    (False, True, False): GestureAction.SET_STOP_AND_NEXT_START,
    (False, False, False): GestureAction.SET_STOP,
}


def classify_gesture(button: PointerButton, modifiers: Modifier, is_drag: bool) -> GestureAction:
    """Map a gesture to the edit it performs.

    Without Shift a drag acts like a click at the release point. With both
    Shift and Ctrl held, Shift decides.
    """
    if button is PointerButton.MIDDLE:
        return GestureAction.JUMP_AND_PREVIEW

    shift = bool(modifiers & Modifier.SHIFT)
    ctrl = bool(modifiers & Modifier.CTRL) and not shift
    key = (shift, ctrl, is_drag if shift else False)

    if button is PointerButton.LEFT:
        return _START_ACTIONS[key]
    if button is PointerButton.RIGHT:
        return _STOP_ACTIONS[key]
    return GestureAction.NONE


class WaveformInteractionController:
    """Applies gesture actions to the current subtitle entry."""

    def __init__(
        self,
        document: DocumentModel,
        scheduler: SamplePlaybackScheduler,
        pixels_per_second: float = DEFAULT_PIXELS_PER_SECOND,
        click_step_ms: int = DEFAULT_CLICK_STEP_MS,
        sample_ms: int | None = DEFAULT_SAMPLE_MS,
    ) -> None:
        self.document = document
        self.scheduler = scheduler
        self.pixels_per_second = pixels_per_second
        self.click_step_ms = click_step_ms
        self.sample_ms = sample_ms

    def handle(
        self,
        event: PointerEvent,
        button: PointerButton,
        modifiers: Modifier = Modifier.NONE,
        is_drag: bool = False,
    ) -> GestureAction:
        action = classify_gesture(button, modifiers, is_drag)
        self.apply(action, event)
        return action

    def apply(self, action: GestureAction, event: PointerEvent) -> None:
        if action is GestureAction.NONE:
            return
        if action is GestureAction.JUMP_AND_PREVIEW:
            self._jump_and_preview(event_to_ms(event))
            return

        doc = self.document
        with doc.preserve_cursor():
            self._edit(action, event)
        doc.notify_times_adjusted()

    def _edit(self, action: GestureAction, event: PointerEvent) -> None:
        doc = self.document

        if action is GestureAction.SET_START:
            doc.set_start_ms(event_to_ms(event))
        elif action is GestureAction.SET_START_AND_PREVIOUS_STOP:
            ms = event_to_ms(event)
            doc.set_start_ms(ms)
            if doc.go_previous():
                doc.set_stop_ms(ms - doc.spacing_ms)
            else:
                logger.debug("No previous subtitle; only the start time changed")
        elif action is GestureAction.ADJUST_START_BY_DRAG:
            doc.adjust_start_ms(-self._drag_delta(event))
        elif action is GestureAction.ADJUST_START_BY_STEP:
            doc.adjust_start_ms(-self.click_step_ms)
        elif action is GestureAction.SET_STOP:
            doc.set_stop_ms(event_to_ms(event))
        elif action is GestureAction.SET_STOP_AND_NEXT_START:
            ms = event_to_ms(event)
            doc.set_stop_ms(ms)
            if doc.go_next():
                doc.set_start_ms(ms + doc.spacing_ms)
            else:
                logger.debug("No next subtitle; only the stop time changed")
        elif action is GestureAction.ADJUST_STOP_BY_DRAG:
            doc.adjust_stop_ms(self._drag_delta(event))
        elif action is GestureAction.ADJUST_STOP_BY_STEP:
            doc.adjust_stop_ms(self.click_step_ms)

    def _drag_delta(self, event: PointerEvent) -> int:
        return drag_delta_to_ms(event.start_x_px, event.x_px, self.pixels_per_second)

    def _jump_and_preview(self, ms: int) -> None:
        self.scheduler.play_sample(
            ms,
            self.sample_ms,
            stop_limit_ms=self.document.current_entry_stop_ms(),
        )
