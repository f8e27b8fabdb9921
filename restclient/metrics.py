"""Metrics collection for REST requests.

A ``MetricRegistry`` hands out named timers and counters. Each RestClient
registers one request timer and one error counter under its endpoint name, so
callers can derive an error rate from the two cumulative counts.
"""

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import ClassVar

from restclient.constants import METRIC_PREFIX


def metric_name(*parts: str) -> str:
    """Join name parts with dots, skipping empty parts."""
    return ".".join(part for part in parts if part)


def endpoint_metric_name(endpoint_name: str, *parts: str) -> str:
    """Build the metric name for an endpoint, e.g. ``RestClient.users.errors``."""
    return metric_name(METRIC_PREFIX, endpoint_name, *parts)


@dataclass
class RequestTimer:
    """Cumulative request latency.

    Attributes:
        name: Registered metric name.
        count: Number of recorded samples.
        total_duration_ms: Sum of all samples.
        max_duration_ms: Largest sample seen.
    """

    name: str
    count: int = 0
    total_duration_ms: float = 0.0
    max_duration_ms: float = 0.0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record(self, duration_ms: float) -> None:
        """Record one sample.

        Args:
            duration_ms: Duration in milliseconds.
        """
        with self._lock:
            self.count += 1
            self.total_duration_ms += duration_ms
            self.max_duration_ms = max(self.max_duration_ms, duration_ms)

    @contextmanager
    def time(self) -> Iterator["TimerContext"]:
        """Time the enclosed block and record it, also when it raises."""
        context = TimerContext()
        try:
            yield context
        finally:
            self.record(context.stop())

    @property
    def avg_duration_ms(self) -> float:
        """Average request duration in milliseconds."""
        if self.count == 0:
            return 0.0
        return self.total_duration_ms / self.count

    def to_dict(self) -> dict[str, int | float]:
        """Convert timer to dictionary."""
        return {
            "count": self.count,
            "total_duration_ms": self.total_duration_ms,
            "avg_duration_ms": self.avg_duration_ms,
            "max_duration_ms": self.max_duration_ms,
        }


class TimerContext:
    """Running stopwatch handed out by ``RequestTimer.time``."""

    def __init__(self) -> None:
        self._start_ns = time.perf_counter_ns()
        self._duration_ms: float | None = None

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since the timer started (or until it stopped)."""
        if self._duration_ms is not None:
            return self._duration_ms
        return (time.perf_counter_ns() - self._start_ns) / 1_000_000

    def stop(self) -> float:
        """Stop the stopwatch and return the duration in milliseconds."""
        if self._duration_ms is None:
            self._duration_ms = (time.perf_counter_ns() - self._start_ns) / 1_000_000
        return self._duration_ms


@dataclass
class ErrorCounter:
    """Monotonic count of failed requests."""

    name: str
    count: int = 0
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def mark(self, n: int = 1) -> None:
        """Increment the counter.

        Args:
            n: Amount to add.
        """
        with self._lock:
            self.count += n


def error_rate(timer: RequestTimer, counter: ErrorCounter) -> float:
    """Errors per timed request, or 0.0 before the first request."""
    if timer.count == 0:
        return 0.0
    return counter.count / timer.count


class MetricRegistry:
    """Registry of named timers and counters.

    Inject one per application (or per test); ``get_instance`` returns a
    process-wide default for callers that don't.
    """

    _instance: ClassVar["MetricRegistry | None"] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._timers: dict[str, RequestTimer] = {}
        self._counters: dict[str, ErrorCounter] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "MetricRegistry":
        """Get singleton registry instance."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (primarily for testing)."""
        with cls._instance_lock:
            cls._instance = None

    def timer(self, name: str) -> RequestTimer:
        """Get or create the timer registered under ``name``."""
        with self._lock:
            if name not in self._timers:
                self._timers[name] = RequestTimer(name=name)
            return self._timers[name]

    def counter(self, name: str) -> ErrorCounter:
        """Get or create the counter registered under ``name``."""
        with self._lock:
            if name not in self._counters:
                self._counters[name] = ErrorCounter(name=name)
            return self._counters[name]

    def to_dict(self) -> dict[str, dict[str, int | float] | int]:
        """Convert all metrics to a dictionary keyed by metric name.

        Returns:
            Timer snapshots and counter values.
        """
        with self._lock:
            timers = dict(self._timers)
            counters = dict(self._counters)
        result: dict[str, dict[str, int | float] | int] = {}
        for name, timer in timers.items():
            result[name] = timer.to_dict()
        for name, counter in counters.items():
            result[name] = counter.count
        return result
