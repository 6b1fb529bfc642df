from __future__ import annotations
import os
from typing import Iterable, List, Union

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from pressureram.collectors import Sampler
from pressureram.models import SwapUsage
from pressureram.monitor import MemoryMonitor


class ScriptedSampler(Sampler):
    """Plays back raw codes / swap values; an exception in the script is raised."""

    def __init__(self, codes: Iterable[Union[int, Exception]] = (),
                 swaps: Iterable[Union[SwapUsage, Exception]] = ()):
        self.codes = list(codes)
        self.swaps = list(swaps)
        self.pressure_calls = 0
        self.swap_calls = 0

    def pressure_code(self) -> int:
        self.pressure_calls += 1
        item = self.codes.pop(0) if self.codes else 1
        if isinstance(item, Exception):
            raise item
        return item

    def swap_usage(self) -> SwapUsage:
        self.swap_calls += 1
        item = self.swaps.pop(0) if self.swaps else SwapUsage(1 << 20, 1 << 30)
        if isinstance(item, Exception):
            raise item
        return item


class Recorder:
    def __init__(self, monitor: MemoryMonitor):
        self.pressure: List = []
        self.swap: List[str] = []
        monitor.pressure_changed.connect(lambda level: self.pressure.append(level))
        monitor.swap_updated.connect(lambda text: self.swap.append(text))


@pytest.fixture
def make_monitor(qapp):
    created = []

    def _make(codes=(), swaps=(), interval_ms=7000):
        sampler = ScriptedSampler(codes, swaps)
        monitor = MemoryMonitor(sampler, interval_ms)
        created.append(monitor)
        return monitor, sampler, Recorder(monitor)

    yield _make
    for m in created:
        m.stop()
