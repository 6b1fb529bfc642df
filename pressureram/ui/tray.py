"""
pressureram – status indicator (tray icon + menu)
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..models import PressureLevel
from ..monitor import MemoryMonitor

logger = logging.getLogger(__name__)

_LEVEL_ICONS: Dict[PressureLevel, QtWidgets.QStyle.StandardPixmap] = {
    PressureLevel.NORMAL:  QtWidgets.QStyle.StandardPixmap.SP_DialogApplyButton,
    PressureLevel.CAUTION: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxWarning,
    PressureLevel.SEVERE:  QtWidgets.QStyle.StandardPixmap.SP_MessageBoxCritical,
    PressureLevel.UNKNOWN: QtWidgets.QStyle.StandardPixmap.SP_MessageBoxQuestion,
}


def status_text(level: Optional[PressureLevel]) -> str:
    return f"Status: {level.label if level else 'Loading...'}"


def swap_text(display: Optional[str]) -> str:
    return f"Swap: {display if display else 'Loading...'}"


class TrayPresenter(QtCore.QObject):
    """Renders whatever the monitor pushes. Holds no monitor state."""

    quit_requested = QtCore.Signal()

    def __init__(self, monitor: MemoryMonitor, parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        self._tray = QtWidgets.QSystemTrayIcon(self)
        self._menu = QtWidgets.QMenu()

        self._status_action = self._menu.addAction(status_text(None))
        self._status_action.setEnabled(False)
        self._swap_action = self._menu.addAction(swap_text(None))
        self._swap_action.setEnabled(False)
        self._menu.addSeparator()
        quit_action = self._menu.addAction("STOP Application")
        quit_action.setShortcut(QtGui.QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._on_quit)

        self._tray.setContextMenu(self._menu)
        self._tray.setIcon(self._icon_for(PressureLevel.UNKNOWN))
        self._tray.setToolTip("Memory pressure")

        monitor.pressure_changed.connect(self.on_pressure_changed)
        monitor.swap_updated.connect(self.on_swap_updated)
        self._menu.aboutToShow.connect(monitor.request_swap_refresh)

    def show(self) -> None:
        self._tray.show()

    def hide(self) -> None:
        self._tray.hide()

    def status_label(self) -> str:
        return self._status_action.text()

    def swap_label(self) -> str:
        return self._swap_action.text()

    def _icon_for(self, level: PressureLevel) -> QtGui.QIcon:
        style = QtWidgets.QApplication.style()
        return style.standardIcon(_LEVEL_ICONS[level])

    @QtCore.Slot(object)
    def on_pressure_changed(self, level: PressureLevel):
        self._status_action.setText(status_text(level))
        self._tray.setIcon(self._icon_for(level))
        self._tray.setToolTip(f"Memory pressure: {level.label}")

    @QtCore.Slot(str)
    def on_swap_updated(self, display: str):
        self._swap_action.setText(swap_text(display))

    @QtCore.Slot()
    def _on_quit(self):
        self.quit_requested.emit()


class ConsolePresenter(QtCore.QObject):
    """Fallback when the desktop has no system tray: log what would be shown."""

    def __init__(self, monitor: MemoryMonitor, parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        monitor.pressure_changed.connect(self.on_pressure_changed)
        monitor.swap_updated.connect(self.on_swap_updated)

    @QtCore.Slot(object)
    def on_pressure_changed(self, level: PressureLevel):
        logger.info(status_text(level))

    @QtCore.Slot(str)
    def on_swap_updated(self, display: str):
        logger.info(swap_text(display))
