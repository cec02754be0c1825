# resizer/constraints.py
from __future__ import annotations

from typing import Callable, Optional, Tuple

from resizer.models import SizingMode, TrackGeometry, clamp_float
from resizer.offset import OffsetCell

# Reads a live width in logical pixels; None while the element is not laid out yet.
WidthReader = Callable[[], Optional[int]]

# Starts observing the track and returns a callable that stops the observation.
WatchFn = Callable[[Callable[[], None]], Callable[[], None]]


class ConstraintTracker:
    """
    Keeps the drag offset inside the track.

    Responsibilities:
    - Observe track size changes (through `watch`) for as long as it is attached.
    - Recompute max_offset = track_width - handle_width on every change.
    - Clamp the offset cell when the track shrank below the current offset.
    - Clamp candidate drag offsets produced by the gesture coordinator.

    Sign convention:
    - Initial-width mode: the handle rests at the start of the track, offsets are in [0, max].
    - Fill mode: the track is end-aligned and the handle rests at its end, so the handle
      can only travel towards the start and offsets are in [-max, 0]. A positive
      fill-mode offset is therefore clamped to 0 here, although resolve_width still
      formats one when called directly (DESIGN.md, "Fill-mode sign convention").

    Until the first measurement arrives the bounds are unknown and nothing is clamped.
    """

    def __init__(
        self,
        *,
        offset: OffsetCell,
        mode: SizingMode,
        read_track_width: WidthReader,
        read_handle_width: WidthReader,
        watch: WatchFn,
        debug: bool = False,
    ) -> None:
        self._offset = offset
        self._mode = mode
        self._read_track = read_track_width
        self._read_handle = read_handle_width
        self._watch = watch
        self._debug = bool(debug)

        # Last measured geometry; None until the track has been laid out.
        self._geometry: Optional[TrackGeometry] = None

        # Disconnect callable of the active observation; None while detached.
        self._stop: Optional[Callable[[], None]] = None

    @property
    def attached(self) -> bool:
        return self._stop is not None

    @property
    def geometry(self) -> Optional[TrackGeometry]:
        return self._geometry

    @property
    def max_offset(self) -> Optional[int]:
        g = self._geometry
        return None if g is None else g.max_offset

    def attach(self) -> None:
        """Start observing. Attaching twice keeps a single observation."""
        if self._stop is not None:
            return
        self._stop = self._watch(self.on_track_resized)

    def detach(self) -> None:
        """Stop observing; safe to call repeatedly and before attach()."""
        stop = self._stop
        self._stop = None
        if stop is not None:
            stop()

    def measure(self) -> Optional[TrackGeometry]:
        track = self._read_track()
        handle = self._read_handle()
        if track is None or handle is None:
            return None
        return TrackGeometry(track_width=int(track), handle_width=int(handle))

    def on_track_resized(self) -> None:
        """
        Observation callback.

        Notifications can still be queued when the observation is stopped, so
        a detached tracker ignores them.
        """
        if self._stop is None:
            return

        g = self.measure()
        if g is None:
            return
        self._geometry = g

        current = self._offset.get()
        clamped = self.clamp(current)
        if clamped != current:
            if self._debug:
                print(f"[resizer] track={g.track_width}px handle={g.handle_width}px clamp {current:g} -> {clamped:g}", flush=True)
            self._offset.set(clamped)

    def drag_bounds(self) -> Optional[Tuple[float, float]]:
        """Inclusive (lo, hi) range for the offset, or None while unmeasured."""
        m = self.max_offset
        if m is None:
            return None
        if self._mode is SizingMode.INITIAL_WIDTH:
            return 0.0, float(m)
        return -float(m), 0.0

    def clamp(self, value: float) -> float:
        """
        Clamp a candidate offset into the drag bounds.

        No elastic overshoot: values past either bound stick to it.
        """
        bounds = self.drag_bounds()
        if bounds is None:
            return float(value)
        lo, hi = bounds
        return clamp_float(float(value), lo, hi)
