# resizer/width.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from resizer.models import (
    HANDLE_MARGIN_PX,
    MIN_WIDTH,
    TRACK_GUTTER_PX,
    SizingMode,
    format_px,
    round_int,
)


@dataclass(frozen=True)
class WidthExpr:
    """
    A width of the form `percent% + px`, relative to the container width.

    `css` keeps the calc() text exactly as it is written into a style attribute,
    `to_px()` evaluates it for a concrete container so the Qt layer can apply it.
    """
    percent: float
    px: float
    css: str

    def to_px(self, container_width: int) -> int:
        """Evaluate against a container width; never negative."""
        v = float(container_width) * self.percent / 100.0 + self.px
        return max(0, round_int(v))


FULL_WIDTH = WidthExpr(percent=100.0, px=0.0, css="100%")


def resolve_width(offset: float, mode: SizingMode, seed_width: Optional[float] = None) -> WidthExpr:
    """
    Map the drag offset to the content width.

    - INITIAL_WIDTH: seed + offset + 14px
    - FILL:          100% + offset - 14px

    No clamping happens here; the offset is already bounded upstream.
    """
    x = float(offset)
    if mode is SizingMode.INITIAL_WIDTH:
        if seed_width is None:
            raise ValueError("seed_width is required in initial-width mode")
        seed = float(seed_width)
        return WidthExpr(
            percent=0.0,
            px=seed + x + HANDLE_MARGIN_PX,
            css=f"calc({format_px(seed)} + {format_px(x)} + {HANDLE_MARGIN_PX}px)",
        )
    return WidthExpr(
        percent=100.0,
        px=x - HANDLE_MARGIN_PX,
        css=f"calc(100% + {format_px(x)} - {HANDLE_MARGIN_PX}px)",
    )


def resolve_track_width(
    mode: SizingMode,
    seed_width: Optional[float] = None,
    min_width: float = MIN_WIDTH,
) -> WidthExpr:
    """
    Width of the track the handle travels in.

    The track is end-aligned in the container and leaves room for the content
    floor (seed width or min_width) plus a fixed gutter.
    """
    if mode is SizingMode.INITIAL_WIDTH:
        if seed_width is None:
            raise ValueError("seed_width is required in initial-width mode")
        floor = float(seed_width)
    else:
        floor = float(min_width)
    return WidthExpr(
        percent=100.0,
        px=-(floor + TRACK_GUTTER_PX),
        css=f"calc(100% - {format_px(floor)} - {TRACK_GUTTER_PX}px)",
    )
