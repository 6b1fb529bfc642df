from __future__ import annotations
from enum import Enum


class SampleErrorKind(Enum):
    KERNEL_QUERY_FAILED = "kernel_query_failed"


class SampleError(Exception):
    """Raised by a sampler when the OS read does not report success."""

    def __init__(self, detail: str = "",
                 kind: SampleErrorKind = SampleErrorKind.KERNEL_QUERY_FAILED):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value
