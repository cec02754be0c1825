# ui/handle.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from PySide6.QtCore import QRect, Qt, Signal
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QWidget


@dataclass(frozen=True)
class HandleConfig:
    """
    Geometry of the drag handle.

    - width_px: full width of the grab area.
    - bar_w_px/bar_h_px: size of the visible grip pill, centered in the grab area.
    - drag_threshold_px: horizontal travel before a press turns into a drag.
    """
    width_px: int = 10
    bar_w_px: int = 6
    bar_h_px: int = 40
    drag_threshold_px: int = 1


class DragHandle(QWidget):
    """
    Horizontal-only drag primitive plus press-state reporter.

    Signals:
    - pressChanged(bool): left button pressed / released on the handle.
    - dragStarted(): the press moved past the threshold.
    - dragMoved(float): horizontal delta (global px) since the press, while dragging.
    - dragEnded(): release after a drag; emitted before pressChanged(False).

    Deltas use global coordinates so the value stays stable while the handle
    itself moves under the pointer.

    When the affordance is hidden the grip is not painted and the handle lets
    mouse input through, so no drag can start from the pointer.
    """

    pressChanged = Signal(bool)
    dragStarted = Signal()
    dragMoved = Signal(float)
    dragEnded = Signal()

    def __init__(self, parent: Optional[QWidget] = None, *, cfg: HandleConfig = HandleConfig()) -> None:
        super().__init__(parent)
        self._cfg = cfg
        self._pressed = False
        self._dragging = False
        self._press_x = 0.0
        self._affordance = True

        self._bar_color = QColor(128, 128, 128, 153)

        self.setCursor(Qt.CursorShape.SizeHorCursor)
        self.setFixedWidth(int(cfg.width_px))

    @property
    def pressed(self) -> bool:
        return self._pressed

    @property
    def affordance_visible(self) -> bool:
        return self._affordance

    def set_affordance_visible(self, visible: bool) -> None:
        v = bool(visible)
        if v == self._affordance:
            return
        self._affordance = v
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, not v)
        self.setCursor(Qt.CursorShape.SizeHorCursor if v else Qt.CursorShape.ArrowCursor)
        self.update()

    def bar_rect(self) -> QRect:
        """Grip rectangle, centered horizontally and vertically."""
        w = min(int(self._cfg.bar_w_px), self.width())
        h = min(int(self._cfg.bar_h_px), self.height())
        return QRect((self.width() - w) // 2, (self.height() - h) // 2, w, h)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        _ = event
        if not self._affordance:
            return
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        p.setPen(Qt.PenStyle.NoPen)

        color = QColor(self._bar_color)
        if self._pressed:
            color.setAlphaF(color.alphaF() * 0.8)
        p.setBrush(color)

        r = self.bar_rect()
        radius = r.width() / 2.0
        p.drawRoundedRect(r, radius, radius)

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._press_x = float(event.globalPosition().x())
        self._pressed = True
        self._dragging = False
        self.pressChanged.emit(True)
        self.update()

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if not self._pressed:
            return
        dx = float(event.globalPosition().x()) - self._press_x
        if not self._dragging:
            if abs(dx) < int(self._cfg.drag_threshold_px):
                return
            self._dragging = True
            self.dragStarted.emit()
        self.dragMoved.emit(dx)

    def mouseReleaseEvent(self, event) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton or not self._pressed:
            return
        was_dragging = self._dragging
        self._pressed = False
        self._dragging = False
        if was_dragging:
            self.dragEnded.emit()
        self.pressChanged.emit(False)
        self.update()
