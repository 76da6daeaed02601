"""Label showing the waveform PNG and forwarding mouse gestures to the view."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QMouseEvent, QPixmap
from PySide6.QtWidgets import QLabel, QWidget

from subwave.services.waveform_mapping import PointerEvent
from subwave.ui.controllers.gestures import Modifier, PointerButton
from subwave.utils.config import DRAG_THRESHOLD_PX
from subwave.utils.time_utils import ms_to_display

if TYPE_CHECKING:
    from subwave.models.waveform import WaveformImage
    from subwave.ui.controllers.view_context import WaveformViewContext

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.LEFT,
    Qt.MouseButton.RightButton: PointerButton.RIGHT,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}


def button_from_qt(button: Qt.MouseButton) -> PointerButton | None:
    return _BUTTONS.get(button)


def modifiers_from_qt(modifiers: Qt.KeyboardModifier) -> Modifier:
    result = Modifier.NONE
    if modifiers & Qt.KeyboardModifier.ControlModifier:
        result |= Modifier.CTRL
    if modifiers & Qt.KeyboardModifier.ShiftModifier:
        result |= Modifier.SHIFT
    return result


class WaveformWidget(QLabel):
    """Displays the view's current waveform at 1:1 scale.

    The pixmap is anchored top-left so widget x equals image x.
    """

    def __init__(self, view: WaveformViewContext, parent: QWidget | None = None):
        super().__init__(parent)
        self._view = view
        self._image: WaveformImage | None = None
        self._press_x: float | None = None
        self._press_button: Qt.MouseButton | None = None
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setMinimumHeight(view.settings.height_px)
        self.setContextMenuPolicy(Qt.ContextMenuPolicy.PreventContextMenu)
        view.image_changed.connect(self.set_waveform_image)
        self.set_waveform_image(view.overlay.displayed_image)

    @property
    def waveform_image(self) -> WaveformImage | None:
        return self._image

    @Slot(object)
    def set_waveform_image(self, image: WaveformImage | None) -> None:
        self._image = image
        if image is None:
            self.clear()
            self.setToolTip("")
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(image.data, "PNG"):
            self._image = None
            self.clear()
            return
        self.setPixmap(pixmap)
        self.setToolTip(
            f"{ms_to_display(image.window.start_ms)} - {ms_to_display(image.window.stop_ms)}"
        )

    # ------------------------------------------------------------ mouse

    def _clamp_x(self, x: float) -> float:
        return min(max(x, 0.0), float(self._image.width_px))

    def mousePressEvent(self, event: QMouseEvent) -> None:
        image = self._image
        if image is None or button_from_qt(event.button()) is None:
            super().mousePressEvent(event)
            return
        x = event.position().x()
        # 라벨이 이미지보다 넓을 수 있음: 그림 밖 클릭은 무시
        if not 0 <= x <= image.width_px:
            super().mousePressEvent(event)
            return
        self._press_x = x
        self._press_button = event.button()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        press_x = self._press_x
        press_button = self._press_button
        self._press_x = None
        self._press_button = None
        image = self._image
        if image is None or press_x is None or event.button() != press_button:
            super().mouseReleaseEvent(event)
            return

        raw_x = event.position().x()
        x = self._clamp_x(raw_x)
        pointer = PointerEvent(
            x_px=x,
            image_width_px=image.width_px,
            window=image.window,
            press_x_px=self._clamp_x(press_x),
        )
        self._view.handle_pointer(
            pointer,
            button_from_qt(press_button),
            modifiers_from_qt(event.modifiers()),
            is_drag=abs(raw_x - press_x) > DRAG_THRESHOLD_PX,
        )
        event.accept()
