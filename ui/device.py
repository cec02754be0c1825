"""Device-class signal for the resizer.

The resizer only needs to know whether it is shown on a phone-sized
surface. This module watches the host window width against a breakpoint and
reports changes through a Qt signal.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, QObject, Signal
from PySide6.QtWidgets import QWidget

from resizer.models import DEFAULT_MOBILE_BREAKPOINT_PX


def is_mobile_width(width: int, breakpoint_px: int = DEFAULT_MOBILE_BREAKPOINT_PX) -> bool:
    """Pure breakpoint rule: strictly narrower than the breakpoint is mobile."""
    return max(0, int(width)) < int(breakpoint_px)


class DeviceClassMonitor(QObject):
    """
    Emits mobileChanged(bool) when the watched window crosses the breakpoint.

    - forced: when not None the value is pinned (CLI --mobile) and width changes are ignored.
    - The initial value is computed on construction; no signal is emitted for it.
    """

    mobileChanged = Signal(bool)

    def __init__(
        self,
        window: QWidget,
        *,
        breakpoint_px: int = DEFAULT_MOBILE_BREAKPOINT_PX,
        forced: Optional[bool] = None,
    ) -> None:
        super().__init__(window)
        self._w = window
        self._breakpoint = int(breakpoint_px)
        self._forced = forced
        self._is_mobile = self._evaluate()
        self._w.installEventFilter(self)

    @property
    def is_mobile(self) -> bool:
        return self._is_mobile

    def force(self, value: Optional[bool]) -> None:
        """Pin the device class (True/False) or return to width-driven detection (None)."""
        self._forced = value
        self._update()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._w and event.type() == QEvent.Type.Resize:
            self._update()
        return False

    def _evaluate(self) -> bool:
        if self._forced is not None:
            return bool(self._forced)
        return is_mobile_width(self._w.width(), self._breakpoint)

    def _update(self) -> None:
        v = self._evaluate()
        if v == self._is_mobile:
            return
        self._is_mobile = v
        self.mobileChanged.emit(v)
