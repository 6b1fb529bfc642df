from __future__ import annotations
from PySide6 import QtCore, QtWidgets
import logging
import signal
import sys

from .config import load_config
from .collectors import default_sampler
from .log import setup_logger
from .monitor import MemoryMonitor
from .ui.tray import TrayPresenter, ConsolePresenter

logger = logging.getLogger(__name__)

# Python signal handlers only run between Python bytecodes, so the Qt loop
# has to hand control back this often for Ctrl+C / SIGTERM to be seen.
SIGNAL_WAKEUP_MS = 200


def tray_available() -> bool:
    return QtWidgets.QSystemTrayIcon.isSystemTrayAvailable()


class Controller(QtCore.QObject):
    """
    Wires the monitor to a presenter:
    - tray icon + menu when the desktop has a system tray
    - log output otherwise
    """
    def __init__(self, cfg, app: QtCore.QCoreApplication):
        super().__init__()
        self.cfg = cfg
        self.app = app

        self.monitor = MemoryMonitor(default_sampler(), cfg.sample_interval_ms, parent=self)

        if tray_available():
            self.presenter = TrayPresenter(self.monitor, parent=self)
            self.presenter.quit_requested.connect(self.quit)
            self.presenter.show()
        else:
            logger.warning("No system tray available, reporting to the log")
            self.presenter = ConsolePresenter(self.monitor, parent=self)

        self.app.aboutToQuit.connect(self.monitor.stop)

    def start(self):
        self.monitor.start()

    @QtCore.Slot()
    def quit(self):
        self.monitor.stop()
        if isinstance(self.presenter, TrayPresenter):
            self.presenter.hide()
        self.app.quit()


def install_signal_handlers(controller: Controller) -> QtCore.QTimer:
    """Route SIGINT/SIGTERM to Controller.quit while the Qt loop runs."""
    def _on_signal(signum, _frame):
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        controller.quit()

    signal.signal(signal.SIGINT, _on_signal)
    signal.signal(signal.SIGTERM, _on_signal)

    wakeup = QtCore.QTimer(controller)
    wakeup.setInterval(SIGNAL_WAKEUP_MS)
    wakeup.timeout.connect(lambda: None)
    wakeup.start()
    return wakeup


def main():
    cfg = load_config()
    setup_logger("pressureram", cfg.log_level)

    app = QtWidgets.QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)   # tray-only app, no windows

    controller = Controller(cfg, app)
    install_signal_handlers(controller)
    controller.start()

    sys.exit(app.exec())
