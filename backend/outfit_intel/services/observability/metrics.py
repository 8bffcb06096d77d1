"""
Observability metrics collection for the outfit analysis pipeline.

Records per-stage duration, resident memory and pixel throughput so slow
extractions on large photos can be spotted without attaching a profiler.
"""

import time
import threading
from collections import defaultdict, deque
from contextlib import contextmanager
from dataclasses import dataclass, asdict
from functools import wraps
from typing import Deque, Dict, Any, Optional, List

import numpy as np
import psutil
from loguru import logger

from outfit_intel.config import config

# Durations kept per stage for percentile estimates
DURATION_WINDOW = 100


@dataclass
class PerformanceMetrics:
    """One timed run of a pipeline stage."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    pixel_count: int
    timestamp: float
    error: Optional[str] = None

    @property
    def megapixels_per_second(self) -> float:
        if self.pixel_count <= 0 or self.duration_ms <= 0:
            return 0.0
        return self.pixel_count / 1e6 / (self.duration_ms / 1000)


class MetricsCollector:
    """Thread-safe store of stage timings, grouped by stage name."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._history: Deque[PerformanceMetrics] = deque(maxlen=max_history)
        self._calls: Dict[str, int] = defaultdict(int)
        self._errors: Dict[str, int] = defaultdict(int)
        self._pixels: Dict[str, int] = defaultdict(int)
        self._durations: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=DURATION_WINDOW))

    def record_performance(self, metrics: PerformanceMetrics) -> None:
        with self._lock:
            name = metrics.operation_name
            self._history.append(metrics)
            self._calls[name] += 1
            self._pixels[name] += metrics.pixel_count
            self._durations[name].append(metrics.duration_ms)
            if metrics.error:
                self._errors[name] += 1

    def get_operation_stats(self, operation_name: str) -> Dict[str, Any]:
        """
        Aggregate timings for one stage.

        Returns an empty dict for a stage that never ran. Percentiles cover
        the most recent DURATION_WINDOW runs; counts cover all runs.
        """
        with self._lock:
            durations = self._durations.get(operation_name)
            if not durations:
                return {}

            window = np.fromiter(durations, dtype=float)
            return {
                'operation_name': operation_name,
                'total_calls': self._calls[operation_name],
                'error_count': self._errors[operation_name],
                'pixels_processed': self._pixels[operation_name],
                'mean_ms': float(window.mean()),
                'p95_ms': float(np.percentile(window, 95)),
                'max_ms': float(window.max()),
            }

    def summary(self) -> Dict[str, Dict[str, Any]]:
        """Stats for every stage seen so far, keyed by stage name."""
        with self._lock:
            names = list(self._calls)
        return {name: self.get_operation_stats(name) for name in names}

    def get_recent_metrics(self, limit: int = 10) -> List[Dict[str, Any]]:
        with self._lock:
            recent = list(self._history)[-limit:]
        return [asdict(metric) for metric in recent]

    def reset(self) -> None:
        with self._lock:
            self._history.clear()
            self._calls.clear()
            self._errors.clear()
            self._pixels.clear()
            self._durations.clear()


_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    return _metrics_collector


def reset_metrics() -> None:
    _metrics_collector.reset()


def _resident_memory_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, pixel_count: int = 0):
    """
    Time a pipeline stage and record it with the global collector.

    Exceptions raised inside the block are recorded against the stage and
    re-raised unchanged. Does nothing when OUTFIT_METRICS_ENABLED is off.
    """
    if not config.METRICS_ENABLED:
        yield
        return

    start = time.perf_counter()
    start_memory = _resident_memory_mb()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        raise
    finally:
        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=(time.perf_counter() - start) * 1000,
            memory_usage_mb=max(_resident_memory_mb(), start_memory),
            pixel_count=pixel_count,
            timestamp=time.time(),
            error=error_msg
        )
        _metrics_collector.record_performance(metrics)

        if error_msg:
            logger.error(f"Stage {operation_name} failed after {metrics.duration_ms:.1f}ms: {error_msg}")
        elif pixel_count:
            logger.debug(f"Stage {operation_name} took {metrics.duration_ms:.1f}ms "
                         f"for {pixel_count} px ({metrics.megapixels_per_second:.1f} MP/s)")
        else:
            logger.debug(f"Stage {operation_name} took {metrics.duration_ms:.1f}ms")


def performance_tracked(operation_name: str):
    """Decorator form of performance_monitor."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            with performance_monitor(operation_name):
                return func(*args, **kwargs)
        return wrapper
    return decorator
