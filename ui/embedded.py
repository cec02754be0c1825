"""Embedded content container.

`EmbeddedContent` is the widget the resizer sizes: it carries a class list,
a pointer-events switch and the document side-effect boundary used by the
styler. The concrete web-engine implementation lives in `ui.web_view`; tests
and other hosts can subclass this with their own document.
"""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget

from resizer.models import PointerEvents
from ui.class_hosts import add_widget_class, remove_widget_class, widget_classes


class EmbeddedContent(QWidget):
    """
    Base widget for the foreign content shown inside the resizer.

    Signals:
    - documentReady(): the embedded document finished loading and can be styled.

    Subclasses implement load() and append_style(); append_style() raises
    resizer.styler.DocumentUnavailable while the document cannot be reached.
    """

    documentReady = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pointer_events: PointerEvents = "auto"
        self._title = ""

    # ---- class list (ClassHost) ----

    def add_class(self, name: str) -> None:
        add_widget_class(self, name)

    def remove_class(self, name: str) -> None:
        remove_widget_class(self, name)

    def has_class(self, name: str) -> bool:
        return name in widget_classes(self)

    # ---- pointer events ----

    @property
    def pointer_events(self) -> PointerEvents:
        return self._pointer_events

    def set_pointer_events(self, value: PointerEvents) -> None:
        """'none' makes the content transparent for mouse input; 'auto' restores it."""
        self._pointer_events = value
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, value == "none")

    # ---- content ----

    def set_title(self, title: Optional[str]) -> None:
        self._title = title or ""
        self.setAccessibleName(self._title)

    @property
    def title(self) -> str:
        return self._title

    def load(self, src: Optional[str]) -> None:
        raise NotImplementedError

    def append_style(self, css: str, *, style_id: Optional[str] = None) -> None:
        raise NotImplementedError
