"""Wall-clock timing for latency-sensitive operations."""

import logging
import time
from typing import Optional

from core.logger import get_logger

logger = get_logger("core.performance")


class PerformanceTimer:
    """Measure an operation and log it, warning when it runs past a threshold.

    Usable as a context manager::

        with PerformanceTimer("get_recommendations", threshold_ms=200):
            ...
    """

    def __init__(self, label: str, threshold_ms: Optional[int] = None, log: Optional[logging.Logger] = None):
        self.label = label
        self.threshold_ms = threshold_ms
        self.log = log or logger
        self._start = time.perf_counter()
        self.elapsed_ms: Optional[float] = None

    def elapsed(self) -> float:
        """Milliseconds since the timer started."""
        return (time.perf_counter() - self._start) * 1000.0

    def stop(self) -> float:
        """Freeze the elapsed time, log it and return it in milliseconds."""
        self.elapsed_ms = self.elapsed()
        if self.threshold_ms is not None and self.elapsed_ms > self.threshold_ms:
            self.log.warning("%s took %.1fms, which exceeds the target of %sms",
                             self.label, self.elapsed_ms, self.threshold_ms)
        else:
            self.log.info("%s completed in %.1fms", self.label, self.elapsed_ms)
        return self.elapsed_ms

    def __enter__(self) -> "PerformanceTimer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
