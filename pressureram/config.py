from __future__ import annotations
from dataclasses import dataclass

# Reference cadence of the status-bar monitor.
DEFAULT_SAMPLE_INTERVAL_MS = 7000

@dataclass(frozen=True)
class AppConfig:
    sample_interval_ms: int = DEFAULT_SAMPLE_INTERVAL_MS
    log_level: str = "INFO"

def load_config() -> AppConfig:
    # Nothing is read from disk or the environment; every start is fresh.
    return AppConfig()
