"""
Shared fixtures for the window resizer tests.

Qt runs on the offscreen platform; the widget tests use a fake embedded view
so no web engine is started.
"""
import os
import sys
from typing import List, Optional

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure the project root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


class RecordingHost:
    """ClassHost that records add/remove calls in order."""

    def __init__(self):
        self.classes = set()
        self.calls: List[tuple] = []

    def add_class(self, name):
        self.calls.append(("add", name))
        self.classes.add(name)

    def remove_class(self, name):
        self.calls.append(("remove", name))
        self.classes.discard(name)


class FakeDocument:
    """EmbeddedDocument stand-in: keeps injected style blocks as a list."""

    def __init__(self, available: bool = True):
        self.available = available
        self.styles: List[tuple] = []

    def append_style(self, css: str, *, style_id: Optional[str] = None) -> None:
        from resizer.styler import DocumentUnavailable

        if not self.available:
            raise DocumentUnavailable("not loaded")
        if style_id is not None:
            self.styles = [s for s in self.styles if s[1] != style_id]
        self.styles.append((css, style_id))


@pytest.fixture
def recording_host():
    return RecordingHost()


@pytest.fixture
def fake_document():
    return FakeDocument()


@pytest.fixture
def fake_embedded_factory():
    """Factory building a fake EmbeddedContent widget; created instances are collected."""
    from ui.embedded import EmbeddedContent

    created = []

    class FakeEmbedded(EmbeddedContent):
        def __init__(self, parent=None):
            super().__init__(parent)
            self.loaded_src = "unset"
            self.doc = FakeDocument(available=False)

        def load(self, src):
            self.loaded_src = src

        def append_style(self, css, *, style_id=None):
            self.doc.append_style(css, style_id=style_id)

        def finish_loading(self):
            self.doc.available = True
            self.documentReady.emit()

    def factory(parent):
        w = FakeEmbedded(parent)
        created.append(w)
        return w

    factory.created = created
    return factory


@pytest.fixture
def host_factory():
    """Builds independent RecordingHost instances."""
    return RecordingHost
