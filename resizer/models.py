# resizer/models.py
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import re
from typing import Literal, Optional, Union


# Fill-mode floor for the track computation when no min_width is configured.
MIN_WIDTH = 200

# Content width padding that accounts for the handle overlapping the content edge.
HANDLE_MARGIN_PX = 14

# Space kept between the content floor and the start of the track.
TRACK_GUTTER_PX = 20

DEFAULT_HEIGHT = "420px"

# Host windows narrower than this count as mobile (the layout's "xs" breakpoint).
DEFAULT_MOBILE_BREAKPOINT_PX = 640

# Indicator class toggled on the document root and the embedded content while dragging.
DRAGGING_CLASS = "dragging-ew"

# Pointer-event states for the embedded content.
PointerEvents = Literal["auto", "none"]

CssLength = Union[str, int, float]

_PX_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*(px)?\s*$")


class SizingMode(str, Enum):
    """
    How the content width is derived from the drag offset.

    - FILL: content fills the container and the offset shrinks it from the right.
    - INITIAL_WIDTH: content starts at a fixed seed width and the offset grows it.
    """
    FILL = "fill"
    INITIAL_WIDTH = "initial_width"


@dataclass(frozen=True)
class TrackGeometry:
    """
    Live measurement of the track and the handle, in logical pixels.

    Never persisted: re-read every time the track reports a size change.
    """
    track_width: int
    handle_width: int

    @property
    def max_offset(self) -> int:
        """Largest legal handle travel; never negative."""
        return max(0, int(self.track_width) - int(self.handle_width))


@dataclass(frozen=True)
class ResizerOptions:
    """
    Options accepted by the resizer widget.

    Only `iframe_src` is meaningful for every instance; everything else has the
    defaults of the docs component this widget reproduces.

    Fields:
    - height: fixed block height for the container and the embedded view
      ("420px", 420 or "420" are all accepted).
    - min_width: floor for the track computation in fill mode.
    - iframe_zoom: zoom factor injected into the embedded document.
    - iframe_src: address loaded into the embedded view.
    - iframe_initial_width: presence switches to initial-width mode; the value is the seed width.
    - iframe_title: accessible name of the embedded view.
    - dedupe_styles: replace the injected style block instead of appending a new one per render.
    """
    height: CssLength = DEFAULT_HEIGHT
    min_width: int = MIN_WIDTH
    iframe_zoom: float = 1
    iframe_src: Optional[str] = None
    iframe_initial_width: Optional[int] = None
    iframe_title: Optional[str] = None
    dedupe_styles: bool = False

    @property
    def has_initial_width(self) -> bool:
        return self.iframe_initial_width is not None

    @property
    def mode(self) -> SizingMode:
        """Mode is fixed for the lifetime of the options object."""
        return SizingMode.INITIAL_WIDTH if self.has_initial_width else SizingMode.FILL

    @property
    def height_px(self) -> int:
        return parse_px(self.height, key="height")

    def validated(self) -> "ResizerOptions":
        """
        Return a normalized copy, raising ValueError on values the widget cannot lay out.
        """
        if int(self.min_width) < 0:
            raise ValueError("min_width must be >= 0")
        if float(self.iframe_zoom) <= 0:
            raise ValueError("iframe_zoom must be > 0")
        if self.iframe_initial_width is not None and int(self.iframe_initial_width) < 0:
            raise ValueError("iframe_initial_width must be >= 0")
        if self.height_px <= 0:
            raise ValueError("height must be > 0")

        return replace(
            self,
            min_width=int(self.min_width),
            iframe_zoom=float(self.iframe_zoom),
            iframe_initial_width=None if self.iframe_initial_width is None else int(self.iframe_initial_width),
        )


def parse_px(value: CssLength, *, key: str = "length") -> int:
    """
    Parse a pixel length given as a number or as a css "<n>px" string.

    Other css units are rejected; the Qt layer only lays out in logical pixels.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid '{key}' (expected pixel length)")
    if isinstance(value, (int, float)):
        return round_int(value)
    m = _PX_RE.match(str(value))
    if m is None:
        raise ValueError(f"Invalid '{key}': {value!r} (expected pixel length like '420px')")
    return round_int(float(m.group(1)))


def format_px(value: float) -> str:
    """Format a pixel count the way it is written into css (no trailing .0 for integers)."""
    v = float(value)
    if v.is_integer():
        return f"{int(v)}px"
    return f"{v:g}px"


def round_int(x: float) -> int:
    """
    Round a float to the nearest int using Python's round() semantics.
    """
    return int(round(x))


def clamp_int(v: int, lo: int, hi: int) -> int:
    """Clamp an integer value to an inclusive range [lo, hi]."""
    return max(lo, min(hi, v))


def clamp_float(v: float, lo: float, hi: float) -> float:
    """Clamp a float to an inclusive range [lo, hi]."""
    return max(lo, min(hi, v))
