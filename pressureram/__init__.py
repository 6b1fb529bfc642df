"""Memory pressure indicator: samples kernel memory pressure and swap usage."""
from .models import PressureLevel, MemorySample, SwapUsage
from .errors import SampleError, SampleErrorKind
from .classifier import classify, format_bytes_as_gb, format_bytes_as_mb

__version__ = "0.1.0"

__all__ = [
    "PressureLevel", "MemorySample", "SwapUsage",
    "SampleError", "SampleErrorKind",
    "classify", "format_bytes_as_gb", "format_bytes_as_mb",
]
