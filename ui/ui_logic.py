# ui/ui_logic.py
from __future__ import annotations

import threading
from typing import Callable, Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from resizer.models import ResizerOptions
from ui.device import DEFAULT_MOBILE_BREAKPOINT_PX, DeviceClassMonitor
from ui.resizer_widget import EmbeddedFactory, WindowResizer


class ResizerWindow(QWidget):
    """
    Host window for a single WindowResizer block.

    - Feeds the device-class signal (window width vs breakpoint, or a forced value)
      into the resizer.
    - Tears the resizer down on close so geometry observation stops and an
      interrupted drag releases its indicator.
    """

    def __init__(
        self,
        *,
        options: ResizerOptions,
        title: str,
        width: int,
        height: int,
        on_close: Callable[[], None],
        mobile_breakpoint_px: int = DEFAULT_MOBILE_BREAKPOINT_PX,
        force_mobile: Optional[bool] = None,
        embedded_factory: Optional[EmbeddedFactory] = None,
        debug: bool = False,
    ) -> None:
        super().__init__()
        self._on_close = on_close

        self.setWindowTitle(title)
        self.resize(int(width), int(height))

        self.device = DeviceClassMonitor(self, breakpoint_px=int(mobile_breakpoint_px), forced=force_mobile)

        self.resizer = WindowResizer(
            options,
            is_mobile=self.device.is_mobile,
            parent=self,
            embedded_factory=embedded_factory,
            debug=debug,
        )

        lay = QVBoxLayout(self)
        lay.setContentsMargins(16, 16, 16, 16)
        lay.addWidget(self.resizer, 0, Qt.AlignmentFlag.AlignTop)
        lay.addStretch(1)

        self.device.mobileChanged.connect(self.resizer.set_mobile)  # type: ignore[arg-type]

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.resizer.teardown()
        self._on_close()
        event.accept()


def run_resizer_ui(
    *,
    options: ResizerOptions,
    on_close: Callable[[], None],
    quit_flag: threading.Event,
    title: str = "window resizer",
    width: int = 1100,
    height: int = 560,
    mobile_breakpoint_px: int = DEFAULT_MOBILE_BREAKPOINT_PX,
    force_mobile: Optional[bool] = None,
    debug: bool = False,
) -> None:
    """
    Start (or attach to) the Qt application and show the resizer window.

    Threading model:
    - Must be called from the UI thread; blocks until the window closes.
    - quit_flag may be set from another thread (e.g. the demo server's /quit);
      it is polled with a QTimer so the UI loop never blocks on it.
    """
    # Web engine views in a process need shared GL contexts; must be set before the app exists.
    QApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts, True)
    app = QApplication.instance() or QApplication([])

    w = ResizerWindow(
        options=options,
        title=title,
        width=int(width),
        height=int(height),
        on_close=on_close,
        mobile_breakpoint_px=int(mobile_breakpoint_px),
        force_mobile=force_mobile,
        debug=debug,
    )
    w.show()

    quit_timer = QTimer()
    quit_timer.setInterval(200)

    def on_quit_tick() -> None:
        if quit_flag.is_set():
            quit_timer.stop()
            w.close()
            app.quit()

    quit_timer.timeout.connect(on_quit_tick)  # type: ignore[arg-type]
    quit_timer.start()

    app.exec()
