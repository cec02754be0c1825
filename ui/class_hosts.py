# ui/class_hosts.py
from __future__ import annotations

from typing import List, Optional

import shiboken6
from PySide6.QtCore import Qt
from PySide6.QtWidgets import QApplication, QWidget

# Dynamic property holding the widget's class list; style sheets can match it
# with selectors like  QWidget[classes~="dragging-ew"].
CLASSES_PROPERTY = "classes"


def widget_classes(w: QWidget) -> List[str]:
    raw = w.property(CLASSES_PROPERTY)
    if not raw:
        return []
    return [c for c in str(raw).split() if c]


def _set_classes(w: QWidget, classes: List[str]) -> None:
    w.setProperty(CLASSES_PROPERTY, " ".join(classes))

    # Re-polish so property selectors in style sheets pick up the change.
    style = w.style()
    style.unpolish(w)
    style.polish(w)


def add_widget_class(w: QWidget, name: str) -> None:
    classes = widget_classes(w)
    if name in classes:
        return
    classes.append(name)
    _set_classes(w, classes)


def remove_widget_class(w: QWidget, name: str) -> None:
    # Release can run from a destroyed handler, after the C++ widget is gone.
    if not shiboken6.isValid(w):
        return
    classes = widget_classes(w)
    if name not in classes:
        return
    _set_classes(w, [c for c in classes if c != name])


class WindowRootHost:
    """
    Document-root equivalent for a Qt window.

    add_class() tags the top-level window and pushes an application-wide
    horizontal-resize cursor, so the cursor stays correct while the pointer
    travels over other widgets mid-drag. remove_class() undoes both; calls are
    expected in pairs, which DraggingSession guarantees.

    The window tagged by add_class() is remembered, so remove_class() still
    works after the widget itself was destroyed or reparented mid-drag.
    """

    def __init__(self, widget: QWidget) -> None:
        self._w = widget
        self._cursor_pushed = False
        self._tagged: Optional[QWidget] = None

    def _root(self) -> QWidget:
        return self._w.window()

    def add_class(self, name: str) -> None:
        root = self._root()
        add_widget_class(root, name)
        self._tagged = root
        if not self._cursor_pushed and QApplication.instance() is not None:
            QApplication.setOverrideCursor(Qt.CursorShape.SizeHorCursor)
            self._cursor_pushed = True

    def remove_class(self, name: str) -> None:
        if self._cursor_pushed:
            QApplication.restoreOverrideCursor()
            self._cursor_pushed = False
        root = self._tagged
        self._tagged = None
        if root is None and shiboken6.isValid(self._w):
            root = self._root()
        if root is not None:
            remove_widget_class(root, name)

    def has_class(self, name: str) -> bool:
        return name in widget_classes(self._root())
