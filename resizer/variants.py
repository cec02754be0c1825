# resizer/variants.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Justify = Literal["start", "end"]


@dataclass(frozen=True)
class ResizerVariant:
    """
    Presentation flags for one (has_initial_width, is_mobile) combination.

    - justify: where the handle sits inside the track ("start" in initial-width mode).
    - show_affordance: whether the grip inside the handle is drawn and draggable.
    - full_width: content ignores the offset and spans the container (mobile).
    """
    justify: Justify
    show_affordance: bool
    full_width: bool


def select_variant(*, has_initial_width: bool, is_mobile: bool) -> ResizerVariant:
    """Pure selection; has no effect on the offset or width mechanics."""
    return ResizerVariant(
        justify="start" if has_initial_width else "end",
        show_affordance=not is_mobile,
        full_width=bool(is_mobile),
    )
