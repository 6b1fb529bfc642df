"""
pressureram – raw pressure code mapping and byte formatting
"""
from __future__ import annotations
from typing import Dict

from .models import PressureLevel

# kern.memorystatus_vm_pressure_level convention
_CODES: Dict[int, PressureLevel] = {
    1: PressureLevel.NORMAL,
    2: PressureLevel.CAUTION,
    3: PressureLevel.SEVERE,
}

GIB = 1 << 30
MIB = 1 << 20


def classify(raw_code: int) -> PressureLevel:
    return _CODES.get(raw_code, PressureLevel.UNKNOWN)


def format_bytes_as_gb(n: int) -> str:
    return f"{n / GIB:.2f} GB"


def format_bytes_as_mb(n: int) -> str:
    return f"{n / MIB:.2f} MB"
