# ui/geometry_watcher.py
from __future__ import annotations

from typing import Callable, List

import shiboken6
from PySide6.QtCore import QEvent, QObject, QTimer
from PySide6.QtWidgets import QWidget


class GeometryWatcher(QObject):
    """
    Size observation for a single widget.

    Resize events are picked up through an event filter and delivered on the next
    event-loop turn (QTimer.singleShot(0)), i.e. after the layout pass that caused
    them, not synchronously with it. Several resizes within one turn collapse into
    one notification.

    watch(callback) returns a stop callable; once every watcher is stopped the
    event filter is removed, so repeated mount/unmount cycles do not pile up filters.
    """

    def __init__(self, widget: QWidget) -> None:
        super().__init__(widget)
        self._w = widget
        self._callbacks: List[Callable[[], None]] = []
        self._pending = False
        self._installed = False

    @property
    def active(self) -> bool:
        return self._installed

    def watch(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._callbacks.append(callback)
        if not self._installed:
            self._w.installEventFilter(self)
            self._installed = True

        # Deliver the current size once, as an observer does on observe().
        self._schedule()

        def stop() -> None:
            try:
                self._callbacks.remove(callback)
            except ValueError:
                return
            if not self._callbacks and self._installed:
                self._installed = False
                # The watched widget may already be gone (stop from a destroyed handler).
                if shiboken6.isValid(self._w) and shiboken6.isValid(self):
                    self._w.removeEventFilter(self)

        return stop

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if watched is self._w and event.type() == QEvent.Type.Resize:
            self._schedule()
        return False

    def _schedule(self) -> None:
        if self._pending:
            return
        self._pending = True
        QTimer.singleShot(0, self._deliver)

    def _deliver(self) -> None:
        self._pending = False
        for cb in list(self._callbacks):
            cb()
