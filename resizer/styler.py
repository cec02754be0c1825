"""Override styles injected into the embedded document.

The embedded page is a full docs page; inside the resizer only its content is
wanted, so the page chrome (footer, sidebar, safe-area padding) is hidden and
the body is zoomed.
"""

from __future__ import annotations

from typing import Optional, Protocol

# Tag used to find the previously injected block when deduplication is on.
OVERRIDE_STYLE_ID = "window-resizer-overrides"


class DocumentUnavailable(Exception):
    """The embedded document is not loaded yet or cannot be accessed."""


class EmbeddedDocument(Protocol):
    """
    Side-effect boundary for the foreign document.

    append_style() adds a <style> element with the given text to the document head.
    With a style_id, an existing element carrying that id is replaced instead.
    Implementations raise DocumentUnavailable when the document cannot be reached.
    """

    def append_style(self, css: str, *, style_id: Optional[str] = None) -> None: ...


def format_zoom(zoom: float) -> str:
    """Shortest exact text for the zoom factor; whole numbers drop the trailing ".0"."""
    text = repr(float(zoom))
    if text.endswith(".0"):
        text = text[:-2]
    return text


def build_override_css(zoom: float) -> str:
    """Stylesheet text for the embedded document; a pure function of the zoom factor."""
    return f"""
  body {{
    zoom: {format_zoom(zoom)};
  }}
  footer {{
    display: none !important;
  }}
  .nextra-sidebar-container {{
    display: none !important;
  }}
  .nx-pb-\\[env\\(safe-area-inset-bottom\\)\\] {{
    display: none !important;
  }}
  #__next footer {{
    display: none !important;
    opacity: 0;
  }}
  """


class EmbeddedStyler:
    """
    Injects the override stylesheet after each render.

    By default every call appends a fresh style block, so the head grows with the
    number of renders. `dedupe=True` keeps a single tagged block instead.
    """

    def __init__(self, *, dedupe: bool = False, debug: bool = False) -> None:
        self._dedupe = bool(dedupe)
        self._debug = bool(debug)
        self._applied = 0

    @property
    def applied_count(self) -> int:
        """Number of successful injections since construction."""
        return self._applied

    def apply_overrides(self, document: Optional[EmbeddedDocument], zoom: float) -> bool:
        """
        Returns:
            bool: True if a style block was injected, False if the document was unavailable.
        """
        if document is None:
            return False

        css = build_override_css(zoom)
        try:
            document.append_style(css, style_id=OVERRIDE_STYLE_ID if self._dedupe else None)
        except DocumentUnavailable as e:
            # Retried on the next render.
            if self._debug:
                print(f"[resizer] embedded document unavailable: {e}", flush=True)
            return False

        self._applied += 1
        return True
