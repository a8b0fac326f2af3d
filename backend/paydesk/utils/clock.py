"""
Ledger Clock — Strictly increasing nanosecond timestamps.
"""
import threading
import time


class MonotonicNanoClock:
    """Wall-clock nanoseconds that never repeat or go backwards in-process.

    Two payments recorded within the same clock tick still get distinct,
    ordered timestamps.
    """

    def __init__(self, source=time.time_ns):
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = self._source()
            if current <= self._last:
                current = self._last + 1
            self._last = current
            return current

    def observe(self, timestamp: int) -> None:
        """Advance past a timestamp already persisted (e.g. after restart)."""
        with self._lock:
            if timestamp > self._last:
                self._last = timestamp


ledger_clock = MonotonicNanoClock()
