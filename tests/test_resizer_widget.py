"""
Widget tests for WindowResizer, DragHandle, GeometryWatcher and DeviceClassMonitor.

Covers:
- Track and content geometry in fill and initial-width modes
- Clamping when the container shrinks (before the offset is used)
- Mouse-driven drags on the handle (press/drag/release signals)
- Mobile variant (affordance hidden, full-width content)
- Style injection after renders once the embedded document is ready
- Teardown mid-drag, on close and on deletion
"""
import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QApplication, QWidget

from resizer.models import DRAGGING_CLASS, ResizerOptions
from ui.class_hosts import widget_classes
from ui.device import DeviceClassMonitor, is_mobile_width
from ui.geometry_watcher import GeometryWatcher
from ui.resizer_widget import WindowResizer


def send_mouse(widget, kind, x_global):
    buttons = Qt.MouseButton.NoButton if kind == QEvent.Type.MouseButtonRelease else Qt.MouseButton.LeftButton
    local = QPointF(2, 2)
    ev = QMouseEvent(kind, local, QPointF(x_global, 10), Qt.MouseButton.LeftButton, buttons, Qt.KeyboardModifier.NoModifier)
    QApplication.sendEvent(widget, ev)


@pytest.fixture
def make_resizer(qtbot, fake_embedded_factory):
    created = []

    def make(width=1000, is_mobile=False, **opts):
        w = WindowResizer(
            ResizerOptions(**opts),
            is_mobile=is_mobile,
            embedded_factory=fake_embedded_factory,
        )
        qtbot.addWidget(w)
        w.resize(width, w.height())
        w.show()
        # Let the geometry watcher deliver the first measurement.
        qtbot.waitUntil(
            lambda: w.tracker.geometry is not None and w.tracker.geometry.track_width == w.track.width(),
            timeout=2000,
        )
        created.append(w)
        return w

    yield make
    for w in created:
        w.teardown()


# ══════════════════════════════════════════════════════════════════════════
# Geometry
# ══════════════════════════════════════════════════════════════════════════

class TestFillModeGeometry:

    def test_height_is_fixed(self, make_resizer):
        w = make_resizer()
        assert w.height() == 420
        assert w.content_wrapper.height() == 420

    def test_track_width(self, make_resizer):
        w = make_resizer(min_width=200)
        assert w.track.width() == 780
        assert w.track.x() == 220

    def test_content_width_at_rest(self, make_resizer):
        w = make_resizer()
        assert w.content_width_expr().css == "calc(100% + 0px - 14px)"
        assert w.content_wrapper.width() == 986

    def test_handle_rests_at_track_end(self, make_resizer):
        w = make_resizer()
        assert w.handle.x() == 780 - w.handle.width()
        assert w.tracker.max_offset == 780 - w.handle.width()

    def test_drag_shrinks_content(self, make_resizer):
        w = make_resizer()
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(-300)
        w.coordinator.on_drag_end()
        assert w.offset.get() == -300
        assert w.content_wrapper.width() == 1000 - 300 - 14
        assert w.handle.x() == 780 - w.handle.width() - 300

    def test_drag_is_clamped_to_track(self, make_resizer):
        w = make_resizer()
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(-5000)
        assert w.offset.get() == -w.tracker.max_offset
        assert w.handle.x() == 0

    def test_container_shrink_clamps_offset(self, make_resizer, qtbot):
        w = make_resizer()
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(-700)
        w.coordinator.on_drag_end()

        w.resize(600, w.height())
        qtbot.waitUntil(lambda: w.tracker.geometry.track_width == 380, timeout=2000)
        assert w.offset.get() == -(380 - w.handle.width())

    def test_shrink_clamps_before_layout_uses_offset(self, make_resizer):
        w = make_resizer()
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(-700)
        w.coordinator.on_drag_end()

        # Read back without running the event loop: the resize itself must clamp.
        w.resize(600, w.height())
        assert w.track.width() == 380
        assert w.offset.get() == -370
        assert w.handle.x() >= 0
        assert w.handle.x() + w.handle.width() <= w.track.width()
        assert w.content_wrapper.width() == 600 - 370 - 14


class TestInitialWidthGeometry:

    def test_scenario_seed_400(self, make_resizer):
        w = make_resizer(iframe_initial_width=400)
        assert w.track.width() == 580
        assert w.content_width_expr().css == "calc(400px + 0px + 14px)"
        assert w.content_wrapper.width() == 414

    def test_handle_rests_at_track_start(self, make_resizer):
        w = make_resizer(iframe_initial_width=400)
        assert w.handle.x() == 0
        assert w.variant.justify == "start"

    def test_drag_grows_content(self, make_resizer):
        w = make_resizer(iframe_initial_width=400)
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(100)
        assert w.content_wrapper.width() == 514
        w.coordinator.on_drag_move(10_000)
        assert w.offset.get() == 580 - w.handle.width()


# ══════════════════════════════════════════════════════════════════════════
# Mouse gesture on the handle
# ══════════════════════════════════════════════════════════════════════════

class TestHandleMouse:

    def test_press_drag_release(self, make_resizer):
        w = make_resizer(iframe_initial_width=400)
        h = w.handle

        send_mouse(h, QEvent.Type.MouseButtonPress, 500)
        assert h.pressed
        assert not w.coordinator.dragging

        send_mouse(h, QEvent.Type.MouseMove, 560)
        assert w.coordinator.dragging
        assert DRAGGING_CLASS in widget_classes(w.window())
        assert w.embedded.has_class(DRAGGING_CLASS)
        assert w.embedded.pointer_events == "auto"
        assert w.offset.get() == 60

        send_mouse(h, QEvent.Type.MouseMove, 620)
        assert w.offset.get() == 120

        send_mouse(h, QEvent.Type.MouseButtonRelease, 620)
        assert not w.coordinator.dragging
        assert DRAGGING_CLASS not in widget_classes(w.window())
        assert not w.embedded.has_class(DRAGGING_CLASS)
        assert w.embedded.pointer_events == "none"
        assert w.embedded.testAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        assert w.offset.get() == 120

    def test_second_drag_continues_from_current_offset(self, make_resizer):
        w = make_resizer(iframe_initial_width=400)
        h = w.handle
        for start, end in ((100, 150), (300, 330)):
            send_mouse(h, QEvent.Type.MouseButtonPress, start)
            send_mouse(h, QEvent.Type.MouseMove, end)
            send_mouse(h, QEvent.Type.MouseButtonRelease, end)
        assert w.offset.get() == 80

    def test_override_cursor_restored_after_drag(self, make_resizer):
        w = make_resizer()
        before = QApplication.overrideCursor()
        send_mouse(w.handle, QEvent.Type.MouseButtonPress, 500)
        send_mouse(w.handle, QEvent.Type.MouseMove, 480)
        assert QApplication.overrideCursor() is not None
        send_mouse(w.handle, QEvent.Type.MouseButtonRelease, 480)
        assert QApplication.overrideCursor() == before


# ══════════════════════════════════════════════════════════════════════════
# Mobile variant
# ══════════════════════════════════════════════════════════════════════════

class TestMobileVariant:

    def test_full_width_and_hidden_affordance(self, make_resizer):
        w = make_resizer(is_mobile=True)
        assert not w.handle.affordance_visible
        assert w.handle.testAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        assert w.content_width_expr().css == "100%"
        assert w.content_wrapper.width() == 1000

    def test_full_width_regardless_of_offset_and_mode(self, make_resizer):
        w = make_resizer(is_mobile=True, iframe_initial_width=400)
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(200)
        assert w.offset.get() == 200
        assert w.content_wrapper.width() == 1000

    def test_switching_back_restores_resolved_width(self, make_resizer):
        w = make_resizer()
        w.set_mobile(True)
        assert w.content_wrapper.width() == 1000
        w.set_mobile(False)
        assert w.handle.affordance_visible
        assert w.content_wrapper.width() == 986


# ══════════════════════════════════════════════════════════════════════════
# Embedded content
# ══════════════════════════════════════════════════════════════════════════

class TestEmbeddedContent:

    def test_source_and_title_forwarded(self, make_resizer):
        w = make_resizer(iframe_src="http://127.0.0.1:8736/", iframe_title="Buttons")
        assert w.embedded.loaded_src == "http://127.0.0.1:8736/"
        assert w.embedded.title == "Buttons"
        assert w.embedded.accessibleName() == "Buttons"

    def test_no_injection_before_document_ready(self, make_resizer, qtbot):
        w = make_resizer()
        qtbot.wait(20)
        assert w.embedded.doc.styles == []
        assert w.styler.applied_count == 0

    def test_injects_after_document_ready(self, make_resizer, qtbot):
        w = make_resizer(iframe_zoom=0.8)
        w.embedded.finish_loading()
        qtbot.waitUntil(lambda: len(w.embedded.doc.styles) == 1, timeout=2000)
        css, style_id = w.embedded.doc.styles[0]
        assert "zoom: 0.8;" in css
        assert style_id is None

    def test_every_render_appends_a_block(self, make_resizer, qtbot):
        w = make_resizer()
        w.embedded.finish_loading()
        qtbot.waitUntil(lambda: len(w.embedded.doc.styles) == 1, timeout=2000)
        w.set_mobile(True)
        qtbot.waitUntil(lambda: len(w.embedded.doc.styles) == 2, timeout=2000)

    def test_dedupe_keeps_one_block(self, make_resizer, qtbot):
        w = make_resizer(dedupe_styles=True)
        w.embedded.finish_loading()
        qtbot.waitUntil(lambda: w.styler.applied_count == 1, timeout=2000)
        w.set_mobile(True)
        qtbot.waitUntil(lambda: w.styler.applied_count == 2, timeout=2000)
        assert len(w.embedded.doc.styles) == 1


# ══════════════════════════════════════════════════════════════════════════
# Teardown
# ══════════════════════════════════════════════════════════════════════════

class TestTeardown:

    def test_teardown_mid_drag(self, make_resizer, qtbot):
        w = make_resizer()
        w.coordinator.on_drag_start()
        w.coordinator.on_drag_move(-700)
        assert DRAGGING_CLASS in widget_classes(w.window())

        w.teardown()
        assert not w.coordinator.dragging
        assert DRAGGING_CLASS not in widget_classes(w.window())
        assert not w.tracker.attached

        # No further clamping once detached.
        w.resize(500, w.height())
        qtbot.wait(20)
        assert w.offset.get() == -700

    def test_teardown_is_idempotent(self, make_resizer):
        w = make_resizer()
        w.teardown()
        w.teardown()
        assert not w.tracker.attached

    def test_close_tears_down(self, make_resizer):
        w = make_resizer()
        w.close()
        assert not w.tracker.attached

    def make_child(self, qtbot, factory):
        host = QWidget()
        qtbot.addWidget(host)
        host.resize(1000, 500)
        w = WindowResizer(ResizerOptions(), parent=host, embedded_factory=factory)
        w.setGeometry(0, 0, 1000, 420)
        host.show()
        qtbot.waitUntil(lambda: w.tracker.geometry is not None, timeout=2000)
        return host, w

    def test_deleting_child_mid_drag_releases_indicator(self, qtbot, fake_embedded_factory):
        host, w = self.make_child(qtbot, fake_embedded_factory)
        tracker, coordinator, offset = w.tracker, w.coordinator, w.offset
        coordinator.on_drag_start()
        assert DRAGGING_CLASS in widget_classes(host)
        assert QApplication.overrideCursor() is not None

        with qtbot.waitSignal(w.destroyed, timeout=2000):
            w.deleteLater()

        assert DRAGGING_CLASS not in widget_classes(host)
        assert QApplication.overrideCursor() is None
        assert not coordinator.dragging
        assert not tracker.attached
        assert offset.listener_count == 0

    def test_deleting_top_level_mid_drag_restores_cursor(self, qtbot, fake_embedded_factory):
        w = WindowResizer(ResizerOptions(), embedded_factory=fake_embedded_factory)
        w.resize(1000, w.height())
        w.show()
        qtbot.waitUntil(lambda: w.tracker.geometry is not None, timeout=2000)
        tracker, coordinator = w.tracker, w.coordinator
        coordinator.on_drag_start()

        with qtbot.waitSignal(w.destroyed, timeout=2000):
            w.deleteLater()

        assert QApplication.overrideCursor() is None
        assert not coordinator.dragging
        assert not tracker.attached


# ══════════════════════════════════════════════════════════════════════════
# Observers
# ══════════════════════════════════════════════════════════════════════════

class TestGeometryWatcher:

    def test_notifies_after_resize_and_stops(self, qtbot):
        target = QWidget()
        qtbot.addWidget(target)
        target.resize(200, 50)
        target.show()
        watcher = GeometryWatcher(target)
        hits = []
        stop = watcher.watch(lambda: hits.append(target.width()))
        qtbot.waitUntil(lambda: len(hits) == 1, timeout=2000)

        target.resize(321, 50)
        qtbot.waitUntil(lambda: len(hits) == 2, timeout=2000)
        assert hits[-1] == 321

        stop()
        assert not watcher.active
        target.resize(111, 50)
        qtbot.wait(20)
        assert len(hits) == 2


class TestDeviceClassMonitor:

    def test_breakpoint_rule(self):
        assert is_mobile_width(639)
        assert not is_mobile_width(640)
        assert is_mobile_width(-5)

    def test_emits_on_crossing(self, qtbot):
        win = QWidget()
        qtbot.addWidget(win)
        win.resize(1000, 400)
        win.show()
        mon = DeviceClassMonitor(win, breakpoint_px=640)
        assert not mon.is_mobile

        with qtbot.waitSignal(mon.mobileChanged, timeout=2000) as blocker:
            win.resize(500, 400)
        assert blocker.args == [True]
        assert mon.is_mobile

    def test_forced_value_ignores_width(self, qtbot):
        win = QWidget()
        qtbot.addWidget(win)
        win.resize(1000, 400)
        mon = DeviceClassMonitor(win, forced=True)
        assert mon.is_mobile
        win.resize(1200, 400)
        assert mon.is_mobile
        mon.force(None)
        assert not mon.is_mobile


class TestResizerWindow:

    def make_window(self, qtbot, factory, **kw):
        from ui.ui_logic import ResizerWindow

        closed = []
        win = ResizerWindow(
            options=ResizerOptions(),
            title="t",
            width=kw.pop("width", 1000),
            height=560,
            on_close=lambda: closed.append(True),
            embedded_factory=factory,
            **kw,
        )
        qtbot.addWidget(win)
        win.show()
        return win, closed

    def test_forced_mobile_reaches_resizer(self, qtbot, fake_embedded_factory):
        win, _ = self.make_window(qtbot, fake_embedded_factory, force_mobile=True)
        assert win.device.is_mobile
        assert win.resizer.is_mobile
        assert not win.resizer.handle.affordance_visible

    def test_narrow_window_switches_to_mobile(self, qtbot, fake_embedded_factory):
        win, _ = self.make_window(qtbot, fake_embedded_factory)
        assert not win.resizer.is_mobile
        win.resize(500, 560)
        qtbot.waitUntil(lambda: win.resizer.is_mobile, timeout=2000)

    def test_close_tears_down_and_reports(self, qtbot, fake_embedded_factory):
        win, closed = self.make_window(qtbot, fake_embedded_factory)
        win.close()
        assert closed == [True]
        assert not win.resizer.tracker.attached
