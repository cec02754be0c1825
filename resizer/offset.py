"""Observable drag offset.

The offset is the single source of truth for the resize state. Readers
(the width resolver, the widget layout, the constraint tracker) subscribe
instead of polling, so every change is pushed to them synchronously.
"""

from __future__ import annotations

from typing import Callable, List

OffsetListener = Callable[[float], None]


class OffsetCell:
    """
    Signed horizontal displacement of the handle from its rest position, in pixels.

    Behavior:
    - Starts at the given initial value (0 on mount) and is never reset while mounted.
    - set() notifies listeners only when the value actually changes.
    - subscribe() returns an unsubscribe callable; listeners are called in
      subscription order.
    """

    def __init__(self, initial: float = 0.0) -> None:
        self._value = float(initial)
        self._listeners: List[OffsetListener] = []

    def get(self) -> float:
        return self._value

    def set(self, value: float) -> bool:
        """
        Store a new offset.

        Returns:
            bool: True if the value changed and listeners were notified.
        """
        v = float(value)
        if v == self._value:
            return False
        self._value = v

        # Snapshot so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(v)
        return True

    def subscribe(self, listener: OffsetListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
