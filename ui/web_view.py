# ui/web_view.py
from __future__ import annotations

import json
from typing import Optional

from PySide6.QtCore import QUrl, Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QVBoxLayout, QWidget

from resizer.models import PointerEvents
from resizer.styler import DocumentUnavailable
from ui.embedded import EmbeddedContent


# Appends (or, with an id, replaces) a <style> element in the page head.
# Arguments are passed as JSON literals so the css text needs no escaping.
_APPEND_STYLE_JS = """
(function (css, styleId) {
  var head = document.head;
  if (!head) { return false; }
  var el = styleId ? document.getElementById(styleId) : null;
  if (!el) {
    el = document.createElement("style");
    if (styleId) { el.id = styleId; }
    head.appendChild(el);
  }
  el.textContent = css;
  return true;
})(%s, %s);
"""


def build_append_style_js(css: str, style_id: Optional[str] = None) -> str:
    return _APPEND_STYLE_JS % (json.dumps(css), json.dumps(style_id))


class EmbeddedWebView(EmbeddedContent):
    """
    Web-engine backed embedded content.

    The document counts as available after a successful loadFinished and stops
    being available as soon as a new load starts.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._view = QWebEngineView(self)
        self._loaded = False

        lay = QVBoxLayout(self)
        lay.setContentsMargins(0, 0, 0, 0)
        lay.addWidget(self._view)

        self._view.loadStarted.connect(self._on_load_started)  # type: ignore[arg-type]
        self._view.loadFinished.connect(self._on_load_finished)  # type: ignore[arg-type]

    @property
    def view(self) -> QWebEngineView:
        return self._view

    def load(self, src: Optional[str]) -> None:
        # Empty/invalid addresses are passed through; the engine renders whatever it renders for them.
        self._view.setUrl(QUrl(src or "about:blank"))

    def set_title(self, title: Optional[str]) -> None:
        super().set_title(title)
        self._view.setAccessibleName(self.title)

    def set_pointer_events(self, value: PointerEvents) -> None:
        super().set_pointer_events(value)
        self._view.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, value == "none")
        focus = self._view.focusProxy()
        if focus is not None:
            focus.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, value == "none")

    def append_style(self, css: str, *, style_id: Optional[str] = None) -> None:
        if not self._loaded:
            raise DocumentUnavailable("document not loaded")
        page = self._view.page()
        if page is None:
            raise DocumentUnavailable("no page")
        page.runJavaScript(build_append_style_js(css, style_id))

    def _on_load_started(self) -> None:
        self._loaded = False

    def _on_load_finished(self, ok: bool) -> None:
        self._loaded = bool(ok)
        if self._loaded:
            self.documentReady.emit()
