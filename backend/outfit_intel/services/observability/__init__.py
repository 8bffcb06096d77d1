"""
Observability module for the outfit analysis pipeline.

Provides performance monitoring and in-process metrics collection for
zone detection, color extraction and outfit judgment stages.
"""

from .metrics import (
    PerformanceMetrics,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics,
    performance_monitor,
    performance_tracked,
)

__all__ = [
    'PerformanceMetrics',
    'MetricsCollector',
    'get_metrics_collector',
    'reset_metrics',
    'performance_monitor',
    'performance_tracked',
]
