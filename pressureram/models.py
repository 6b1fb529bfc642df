from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PressureLevel(Enum):
    NORMAL  = "normal"
    CAUTION = "caution"
    SEVERE  = "severe"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def severity(self) -> Optional[int]:
        """Display rank (Normal < Caution < Severe). Unknown has none."""
        return _SEVERITY.get(self)


_SEVERITY = {
    PressureLevel.NORMAL:  0,
    PressureLevel.CAUTION: 1,
    PressureLevel.SEVERE:  2,
}


@dataclass(frozen=True)
class SwapUsage:
    used_bytes: int
    total_bytes: int


@dataclass(frozen=True)
class MemorySample:
    ts: float
    pressure: PressureLevel
    swap_used_bytes: int
    swap_total_bytes: int


@dataclass
class MonitorState:
    last_pressure: Optional[PressureLevel] = None   # None until the first tick
