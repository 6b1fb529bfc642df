from __future__ import annotations
import logging
import threading
import time
from typing import Optional

from PySide6 import QtCore

from .classifier import classify, format_bytes_as_mb
from .collectors import Sampler
from .config import DEFAULT_SAMPLE_INTERVAL_MS
from .errors import SampleError
from .models import MemorySample, MonitorState, PressureLevel, SwapUsage

logger = logging.getLogger(__name__)

# Any code outside 1..3 classifies as UNKNOWN.
UNRECOGNIZED_CODE = 0


class MemoryMonitor(QtCore.QObject):
    """
    Polls the sampler on a fixed QTimer and pushes results to the presenter.

    - pressure_changed fires only when the classified level differs from
      the previous tick (the first tick always fires)
    - swap_updated fires on every tick and on every request_swap_refresh()

    Ticks never overlap: a tick that finds another one in progress is skipped.
    """

    pressure_changed = QtCore.Signal(object)   # PressureLevel
    swap_updated     = QtCore.Signal(str)      # "X.XX MB"

    def __init__(self, sampler: Sampler, interval_ms: int = DEFAULT_SAMPLE_INTERVAL_MS,
                 parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        self._sampler = sampler
        self._state = MonitorState()
        self._tick_lock = threading.Lock()
        self._cancelled = False

        self._timer = QtCore.QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self.tick)

    # ── lifecycle ─────────────────────────────
    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_running(self) -> bool:
        return self._timer.isActive()

    @property
    def last_pressure(self) -> Optional[PressureLevel]:
        return self._state.last_pressure

    def start(self) -> None:
        """Sample once right away, then every interval."""
        if self._timer.isActive():
            return
        self._cancelled = False
        logger.info("Memory monitor started, interval %d ms", self.interval_ms)
        self.tick()
        if not self._cancelled:
            self._timer.start()

    @QtCore.Slot()
    def stop(self) -> None:
        """No tick fires after this; a tick in progress has its results dropped."""
        self._cancelled = True
        if self._timer.isActive():
            self._timer.stop()
            logger.info("Memory monitor stopped")

    # ── polling ───────────────────────────────
    @QtCore.Slot()
    def tick(self) -> Optional[MemorySample]:
        if self._cancelled:
            return None
        if not self._tick_lock.acquire(blocking=False):
            logger.debug("Tick skipped, previous tick still running")
            return None
        try:
            return self._tick()
        finally:
            self._tick_lock.release()

    def _tick(self) -> Optional[MemorySample]:
        ts = time.time()

        level = classify(self._read_pressure_code())
        if self._cancelled:
            return None
        if level != self._state.last_pressure:
            logger.info("Memory pressure %s -> %s",
                        self._state.last_pressure.label if self._state.last_pressure else "none",
                        level.label)
            self._state.last_pressure = level
            self.pressure_changed.emit(level)

        swap = self._emit_swap()
        if swap is None:
            return None

        return MemorySample(
            ts=ts,
            pressure=level,
            swap_used_bytes=swap.used_bytes,
            swap_total_bytes=swap.total_bytes,
        )

    @QtCore.Slot()
    def request_swap_refresh(self) -> None:
        """Out-of-band swap refresh, e.g. right before a menu is shown."""
        if self._cancelled:
            return
        if not self._tick_lock.acquire(blocking=False):
            # the running tick emits a fresh value itself
            return
        try:
            self._emit_swap()
        finally:
            self._tick_lock.release()

    def _read_pressure_code(self) -> int:
        try:
            return self._sampler.pressure_code()
        except SampleError as e:
            logger.warning("Pressure sample failed (%s): %s", e.kind.value, e)
            return UNRECOGNIZED_CODE

    def _read_swap(self) -> SwapUsage:
        try:
            return self._sampler.swap_usage()
        except SampleError as e:
            logger.warning("Swap sample failed (%s): %s", e.kind.value, e)
            return SwapUsage(used_bytes=0, total_bytes=0)

    def _emit_swap(self) -> Optional[SwapUsage]:
        swap = self._read_swap()
        if self._cancelled:
            return None
        self.swap_updated.emit(format_bytes_as_mb(swap.used_bytes))
        return swap
