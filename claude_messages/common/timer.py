"""
Timer Module

Measures request latency for debug logging: time to first byte and total time.
"""

import time
from typing import Optional


class Timer:
    """
    Request latency timer based on time.perf_counter().

    Example:
        timer = Timer().start()
        response = await send(...)
        timer.mark_first_byte()
        body = await response.aread()
        timer.stop()
        logger.debug("latency %s", timer.summary())
    """

    def __init__(self):
        self._start_time: Optional[float] = None
        self._first_byte_time: Optional[float] = None
        self._end_time: Optional[float] = None

    def start(self) -> "Timer":
        self._start_time = time.perf_counter()
        self._first_byte_time = None
        self._end_time = None
        return self

    def mark_first_byte(self) -> "Timer":
        """Record the first response byte; later calls keep the first mark."""
        if self._first_byte_time is None:
            self._first_byte_time = time.perf_counter()
        return self

    def stop(self) -> "Timer":
        self._end_time = time.perf_counter()
        if self._first_byte_time is None:
            self._first_byte_time = self._end_time
        return self

    @staticmethod
    def _elapsed_ms(begin: Optional[float], end: Optional[float]) -> Optional[int]:
        if begin is None or end is None:
            return None
        return int((end - begin) * 1000)

    @property
    def first_byte_delay_ms(self) -> Optional[int]:
        return self._elapsed_ms(self._start_time, self._first_byte_time)

    @property
    def total_time_ms(self) -> Optional[int]:
        return self._elapsed_ms(self._start_time, self._end_time)

    def summary(self) -> str:
        """Format as "ttfb=12ms total=340ms" for log lines."""
        return f"ttfb={self.first_byte_delay_ms}ms total={self.total_time_ms}ms"
