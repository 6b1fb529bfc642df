from __future__ import annotations
import sys
import ctypes
import ctypes.util
import logging
import psutil
from pathlib import Path
from typing import Dict, Optional

from .errors import SampleError
from .models import SwapUsage

logger = logging.getLogger(__name__)

_PSUTIL_ERRORS = (psutil.Error, OSError, RuntimeError)


# ──────────────────────────────────────────────
# Sampler – raw reads only, no interpretation
# ──────────────────────────────────────────────
class Sampler:
    """
    Reads raw memory data from the OS.
    Every call is self-contained; nothing is held open between calls.
    """

    def pressure_code(self) -> int:
        """Raw pressure code: 1=normal, 2=caution, 3=severe, other=unrecognized."""
        raise NotImplementedError

    def swap_usage(self) -> SwapUsage:
        try:
            sw = psutil.swap_memory()
        except _PSUTIL_ERRORS as e:
            raise SampleError(f"swap_memory: {e}") from e
        return SwapUsage(used_bytes=int(sw.used), total_bytes=int(sw.total))


def _host_vm_check() -> None:
    # Host-level VM statistics must be readable before the pressure
    # indicator is trusted.
    try:
        psutil.virtual_memory()
    except _PSUTIL_ERRORS as e:
        raise SampleError(f"virtual_memory: {e}") from e


# ── macOS ─────────────────────────────────────
PRESSURE_SYSCTL = "kern.memorystatus_vm_pressure_level"


class DarwinSampler(Sampler):
    def __init__(self, libc: Optional[ctypes.CDLL] = None):
        self._libc = libc
        if self._libc is None:
            self._libc = ctypes.CDLL(ctypes.util.find_library("c"), use_errno=True)

    def _sysctl_int(self, name: str) -> int:
        value = ctypes.c_int(0)
        size = ctypes.c_size_t(ctypes.sizeof(value))
        rc = self._libc.sysctlbyname(
            name.encode("ascii"), ctypes.byref(value), ctypes.byref(size), None, ctypes.c_size_t(0),
        )
        if rc != 0:
            raise SampleError(f"sysctlbyname({name}) failed, errno={ctypes.get_errno()}")
        if size.value != ctypes.sizeof(value):
            raise SampleError(f"sysctlbyname({name}) returned {size.value} bytes")
        return int(value.value)

    def pressure_code(self) -> int:
        _host_vm_check()
        return self._sysctl_int(PRESSURE_SYSCTL)


# ── Linux (PSI) ───────────────────────────────
PSI_MEMORY_PATH = Path("/proc/pressure/memory")

# avg10 stall percentages mapped onto the 1/2/3 scale
PSI_FULL_SEVERE_PCT = 10.0
PSI_SOME_CAUTION_PCT = 10.0


def parse_psi(text: str) -> Dict[str, float]:
    """
    Parse /proc/pressure/memory into {"some": avg10, "full": avg10}.

        some avg10=0.00 avg60=0.00 avg300=0.00 total=0
        full avg10=0.00 avg60=0.00 avg300=0.00 total=0
    """
    out: Dict[str, float] = {}
    for line in text.strip().splitlines():
        parts = line.split()
        if not parts or parts[0] not in ("some", "full"):
            continue
        for part in parts[1:]:
            if part.startswith("avg10="):
                try:
                    out[parts[0]] = float(part.split("=", 1)[1])
                except ValueError as e:
                    raise SampleError(f"bad PSI field {part!r}") from e
    if "some" not in out:
        raise SampleError("PSI memory data has no 'some' line")
    return out


class LinuxSampler(Sampler):
    def __init__(self, psi_path: Path = PSI_MEMORY_PATH):
        self.psi_path = Path(psi_path)

    def pressure_code(self) -> int:
        _host_vm_check()
        try:
            text = self.psi_path.read_text(encoding="ascii")
        except (OSError, ValueError) as e:
            raise SampleError(f"{self.psi_path}: {e}") from e

        psi = parse_psi(text)
        if psi.get("full", 0.0) >= PSI_FULL_SEVERE_PCT:
            return 3
        if psi["some"] >= PSI_SOME_CAUTION_PCT:
            return 2
        return 1


# ── everything else ───────────────────────────
class UnsupportedSampler(Sampler):
    def pressure_code(self) -> int:
        raise SampleError(f"no pressure indicator on {sys.platform}")


def default_sampler() -> Sampler:
    if sys.platform == "darwin":
        return DarwinSampler()
    if sys.platform.startswith("linux"):
        return LinuxSampler()
    logger.info("Memory pressure is not available on %s; swap only", sys.platform)
    return UnsupportedSampler()
