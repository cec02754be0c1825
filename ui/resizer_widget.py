"""Resizable embedded-content block.

`WindowResizer` composes the Qt-free pieces from `resizer` (offset cell,
constraint tracker, gesture coordinator, styler, variant selector) with the
widgets that realize them (content wrapper, track, handle, embedded view).

Layout, in container coordinates:

    | content wrapper (resolved width) ........ |   track (end-aligned)   |
                                                  [handle at rest+offset]

Offset changes only move the wrapper edge and the handle. Structural renders
(mount, document load, variant change, press/drag state change) additionally
schedule the override style injection for after the render.
"""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QFrame, QVBoxLayout, QWidget

from resizer.constraints import ConstraintTracker
from resizer.gesture import DragGestureCoordinator
from resizer.models import PointerEvents, ResizerOptions, round_int
from resizer.offset import OffsetCell
from resizer.styler import EmbeddedStyler
from resizer.variants import ResizerVariant, select_variant
from resizer.width import FULL_WIDTH, WidthExpr, resolve_track_width, resolve_width
from ui.class_hosts import WindowRootHost
from ui.embedded import EmbeddedContent
from ui.geometry_watcher import GeometryWatcher
from ui.handle import DragHandle, HandleConfig

EmbeddedFactory = Callable[[QWidget], EmbeddedContent]


def _release_on_destroy(
    tracker: ConstraintTracker,
    coordinator: DragGestureCoordinator,
    unsubscribe: Callable[[], None],
) -> Callable[..., None]:
    """
    Release path for the destroyed signal.

    Captures only the plain-Python state objects: by the time destroyed is
    emitted the widget itself can no longer be touched.
    """

    def release(*_args) -> None:
        tracker.detach()
        coordinator.teardown(notify=False)
        unsubscribe()

    return release


def _default_embedded_factory(parent: QWidget) -> EmbeddedContent:
    # Local import keeps the web engine out of processes that never build a real view (tests, headless tools).
    from ui.web_view import EmbeddedWebView

    return EmbeddedWebView(parent)


class WindowResizer(QWidget):
    """
    Fixed-height block with a horizontally resizable embedded view.

    Public pieces:
    - offset: the observable drag offset (single source of truth).
    - tracker: constraint tracker bound to the track/handle geometry.
    - coordinator: drag lifecycle state machine.
    - styler: override style injection into the embedded document.

    teardown() runs when the block goes away (on close, or through the destroyed
    signal when the widget is deleted): it stops geometry observation and
    releases an interrupted drag.
    """

    def __init__(
        self,
        options: ResizerOptions,
        *,
        is_mobile: bool = False,
        parent: Optional[QWidget] = None,
        embedded_factory: Optional[EmbeddedFactory] = None,
        handle_cfg: HandleConfig = HandleConfig(),
        debug: bool = False,
    ) -> None:
        super().__init__(parent)

        self._opts = options.validated()
        self._is_mobile = bool(is_mobile)
        self._variant = select_variant(has_initial_width=self._opts.has_initial_width, is_mobile=self._is_mobile)
        self._debug = bool(debug)
        self._torn_down = False
        self._laid_out = False
        self._drag_origin = 0.0
        self._inject_pending = False
        self._in_layout = False

        height = self._opts.height_px
        self.setFixedHeight(height)

        # ---- widgets ----
        self._wrapper = QFrame(self)
        self._wrapper.setObjectName("resizerContentWrapper")
        self._wrapper.setStyleSheet(
            "#resizerContentWrapper { border: 1px solid rgba(128, 128, 128, 51); border-radius: 8px; }"
        )
        wrap_lay = QVBoxLayout(self._wrapper)
        wrap_lay.setContentsMargins(1, 1, 1, 1)

        factory = embedded_factory or _default_embedded_factory
        self._embedded = factory(self._wrapper)
        self._embedded.set_title(self._opts.iframe_title)
        wrap_lay.addWidget(self._embedded)

        # Track is a transparent strip; the handle lives inside it.
        self._track = QWidget(self)
        self._track.setObjectName("resizerTrack")
        self._handle = DragHandle(self._track, cfg=handle_cfg)
        self._handle.set_affordance_visible(self._variant.show_affordance)

        # ---- state ----
        self.offset = OffsetCell(0.0)

        self._watcher = GeometryWatcher(self._track)
        self.tracker = ConstraintTracker(
            offset=self.offset,
            mode=self._opts.mode,
            read_track_width=self._read_track_width,
            read_handle_width=self._read_handle_width,
            watch=self._watcher.watch,
            debug=self._debug,
        )

        self._root_host = WindowRootHost(self)
        self.coordinator = DragGestureCoordinator(
            offset=self.offset,
            tracker=self.tracker,
            document_root=self._root_host,
            embedded=lambda: self._embedded,
            on_pointer_events=self._apply_pointer_events,
            on_dragging_changed=lambda _dragging: self._commit(),
        )

        self.styler = EmbeddedStyler(dedupe=self._opts.dedupe_styles, debug=self._debug)

        # ---- wiring ----
        self._unsubscribe_offset = self.offset.subscribe(lambda _x: self._layout())

        self._handle.pressChanged.connect(self._on_press_changed)  # type: ignore[arg-type]
        self._handle.dragStarted.connect(self._on_drag_started)  # type: ignore[arg-type]
        self._handle.dragMoved.connect(self._on_drag_moved)  # type: ignore[arg-type]
        self._handle.dragEnded.connect(self.coordinator.on_drag_end)  # type: ignore[arg-type]
        self._embedded.documentReady.connect(self._commit)  # type: ignore[arg-type]
        self.destroyed.connect(_release_on_destroy(self.tracker, self.coordinator, self._unsubscribe_offset))  # type: ignore[arg-type]

        self.tracker.attach()
        self._embedded.load(self._opts.iframe_src)
        self._commit()

    # ---- read-only views ----

    @property
    def options(self) -> ResizerOptions:
        return self._opts

    @property
    def variant(self) -> ResizerVariant:
        return self._variant

    @property
    def is_mobile(self) -> bool:
        return self._is_mobile

    @property
    def embedded(self) -> EmbeddedContent:
        return self._embedded

    @property
    def handle(self) -> DragHandle:
        return self._handle

    @property
    def track(self) -> QWidget:
        return self._track

    @property
    def content_wrapper(self) -> QFrame:
        return self._wrapper

    def content_width_expr(self) -> WidthExpr:
        """Width expression currently applied to the content wrapper."""
        if self._variant.full_width:
            return FULL_WIDTH
        return resolve_width(self.offset.get(), self._opts.mode, self._opts.iframe_initial_width)

    def track_width_expr(self) -> WidthExpr:
        return resolve_track_width(self._opts.mode, self._opts.iframe_initial_width, self._opts.min_width)

    # ---- inputs ----

    def set_mobile(self, is_mobile: bool) -> None:
        """Slot for DeviceClassMonitor.mobileChanged."""
        v = bool(is_mobile)
        if v == self._is_mobile:
            return
        self._is_mobile = v
        self._variant = select_variant(has_initial_width=self._opts.has_initial_width, is_mobile=v)
        self._handle.set_affordance_visible(self._variant.show_affordance)
        self._commit()

    def teardown(self) -> None:
        """Stop observing geometry and release any drag still in progress. Idempotent."""
        if self._torn_down:
            return
        self._torn_down = True
        self.tracker.detach()
        self.coordinator.teardown()
        self._unsubscribe_offset()

    # ---- handle events ----

    def _on_press_changed(self, pressed: bool) -> None:
        self.coordinator.on_press_change(bool(pressed))
        self._commit()

    def _on_drag_started(self) -> None:
        self._drag_origin = self.offset.get()
        self.coordinator.on_drag_start()

    def _on_drag_moved(self, dx: float) -> None:
        self.coordinator.on_drag_move(self._drag_origin + float(dx))

    def _apply_pointer_events(self, value: PointerEvents) -> None:
        self._embedded.set_pointer_events(value)

    # ---- geometry ----

    def _read_track_width(self) -> Optional[int]:
        if not self._laid_out:
            return None
        return self._track.width()

    def _read_handle_width(self) -> Optional[int]:
        if not self._laid_out:
            return None
        return self._handle.width()

    def _layout(self) -> None:
        # A clamp below re-enters through the offset listener; the outer pass already uses the new offset.
        if self._in_layout:
            return
        self._in_layout = True
        try:
            w = self.width()
            h = self.height()

            track_w = self.track_width_expr().to_px(w)
            self._track.setGeometry(w - track_w, 0, track_w, h)
            self._laid_out = True

            # Clamp against the new track before the offset sizes anything.
            self.tracker.on_track_resized()

            content_w = self.content_width_expr().to_px(w)
            self._wrapper.setGeometry(0, 0, content_w, h)

            handle_w = self._handle.width()
            if self._variant.justify == "start":
                rest = 0
            else:
                rest = track_w - handle_w
            self._handle.setGeometry(rest + round_int(self.offset.get()), 0, handle_w, h)
        finally:
            self._in_layout = False

    def _commit(self) -> None:
        """Structural render: lay out, then inject overrides once the render is done."""
        self._layout()
        if self._torn_down or self._inject_pending:
            return
        self._inject_pending = True
        QTimer.singleShot(0, self._inject_styles)

    def _inject_styles(self) -> None:
        self._inject_pending = False
        if self._torn_down:
            return
        self.styler.apply_overrides(self._embedded, self._opts.iframe_zoom)

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._layout()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.teardown()
        super().closeEvent(event)
