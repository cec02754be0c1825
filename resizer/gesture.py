# resizer/gesture.py
from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from resizer.constraints import ConstraintTracker
from resizer.models import DRAGGING_CLASS, PointerEvents
from resizer.offset import OffsetCell


class ClassHost(Protocol):
    """Anything that carries a class list: the document root or the embedded content."""

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...


class DraggingSession:
    """
    Start/end paired hold on the dragging indicator class.

    The class is added to every host at acquisition and removed from the same
    hosts on release. Release is idempotent, so a drag-end followed by a
    press-release (or a teardown after either) still removes the class once.
    """

    def __init__(self, hosts: List[ClassHost], *, class_name: str = DRAGGING_CLASS) -> None:
        self._hosts = list(hosts)
        self._class_name = class_name
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> "DraggingSession":
        if self._active:
            return self
        for host in self._hosts:
            host.add_class(self._class_name)
        self._active = True
        return self

    def release(self) -> None:
        if not self._active:
            return
        self._active = False
        for host in self._hosts:
            host.remove_class(self._class_name)


class DragGestureCoordinator:
    """
    Drag lifecycle state machine for the resize handle.

    States: idle -> dragging -> idle.

    - on_drag_start: dragging=True, acquire the indicator session,
      embedded pointer-events -> "auto". Ignored while already dragging.
    - on_drag_move: offset <- tracker.clamp(raw offset). Ignored while idle.
    - on_drag_end / on_press_change(False): dragging=False, release the session,
      embedded pointer-events -> "none".

    Pointer-events ordering is kept as recorded: "auto" at drag start and "none"
    after every release, including a press-release without any drag.
    """

    def __init__(
        self,
        *,
        offset: OffsetCell,
        tracker: ConstraintTracker,
        document_root: ClassHost,
        embedded: Callable[[], Optional[ClassHost]],
        on_pointer_events: Callable[[PointerEvents], None],
        on_dragging_changed: Optional[Callable[[bool], None]] = None,
    ) -> None:
        self._offset = offset
        self._tracker = tracker
        self._document_root = document_root
        self._embedded = embedded
        self._on_pointer_events = on_pointer_events
        self._on_dragging_changed = on_dragging_changed

        self._dragging = False
        self._session: Optional[DraggingSession] = None
        self._pointer_events: PointerEvents = "auto"

    @property
    def dragging(self) -> bool:
        return self._dragging

    @property
    def pointer_events(self) -> PointerEvents:
        return self._pointer_events

    @property
    def session(self) -> Optional[DraggingSession]:
        return self._session

    def on_drag_start(self) -> bool:
        """
        Returns:
            bool: True if a new drag started (False for a re-entrant start).
        """
        if self._dragging:
            return False

        hosts: List[ClassHost] = [self._document_root]
        embedded = self._embedded()
        if embedded is not None:
            hosts.append(embedded)

        self._session = DraggingSession(hosts).acquire()
        self._set_dragging(True)
        self._set_pointer_events("auto")
        return True

    def on_drag_move(self, raw_offset: float) -> bool:
        """
        Apply a drag position reported by the handle.

        Returns:
            bool: True if the offset changed.
        """
        if not self._dragging:
            return False
        return self._offset.set(self._tracker.clamp(raw_offset))

    def on_drag_end(self) -> None:
        self._finish()

    def on_press_change(self, pressed: bool) -> None:
        if pressed:
            return
        self._finish()

    def teardown(self, *, notify: bool = True) -> None:
        """
        Release an interrupted drag (e.g. the widget goes away mid-gesture).

        notify=False skips on_dragging_changed, for callers whose owner is already destroyed.
        """
        if self._session is not None:
            self._session.release()
            self._session = None
        if self._dragging:
            if notify:
                self._set_dragging(False)
            else:
                self._dragging = False

    def _finish(self) -> None:
        if self._session is not None:
            self._session.release()
            self._session = None
        if self._dragging:
            self._set_dragging(False)
        self._set_pointer_events("none")

    def _set_dragging(self, value: bool) -> None:
        self._dragging = value
        if self._on_dragging_changed is not None:
            self._on_dragging_changed(value)

    def _set_pointer_events(self, value: PointerEvents) -> None:
        self._pointer_events = value
        self._on_pointer_events(value)
