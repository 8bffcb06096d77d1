"""
Outfit Intelligence Structured Logging
Event helpers for the analysis pipeline, plus opt-in loguru sink setup.

Library modules only log through ``loguru.logger``; sinks belong to the
application. Call ``configure_logging()`` once at startup to get the
standard format without touching any sink added elsewhere.
"""
import sys
from typing import Any, Dict, Mapping, Optional

from loguru import logger

from outfit_intel.config import config

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}"

_sink_id: Optional[int] = None


def configure_logging(level: Optional[str] = None, sink=sys.stdout) -> int:
    """
    Add the structured sink at ``level`` (defaults to config.LOG_LEVEL).

    Calling again replaces the sink added by the previous call and leaves
    every other sink in place.

    Returns:
        loguru handler id of the added sink
    """
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
    _sink_id = logger.add(sink, format=LOG_FORMAT,
                          level=(level or config.LOG_LEVEL).upper(), serialize=False)
    return _sink_id


def reset_logging() -> None:
    """Remove the sink added by configure_logging, if any."""
    global _sink_id
    if _sink_id is not None:
        logger.remove(_sink_id)
        _sink_id = None


class StructuredLogger:
    """Binds analysis context onto loguru records."""

    def log(self, level: str, message: str, extra: Optional[Dict[str, Any]] = None):
        logger.bind(**(extra or {})).log(level.upper(), message)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.log("INFO", message, extra)

    def warning(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.log("WARNING", message, extra)

    def error(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.log("ERROR", message, extra)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None):
        self.log("DEBUG", message, extra)

    def log_zone_colors(self, analysis_id: str, colors: Mapping[str, Any]):
        """One line per garment with its hex and extraction confidence."""
        for key, record in colors.items():
            self.debug(f"Zone {key} color {record.hex}", extra={
                "analysis_id": analysis_id,
                "zone": key,
                "confidence": record.confidence,
                "is_pattern": record.is_pattern,
            })

    def log_verdict(self, analysis_id: str, harmony: str, score: int, grade: str, mood: str):
        self.info("Outfit analyzed", extra={
            "analysis_id": analysis_id,
            "harmony": harmony,
            "score": score,
            "grade": grade,
            "mood": mood,
        })


_logger = StructuredLogger()


def get_logger() -> StructuredLogger:
    """Get the shared structured logger."""
    return _logger
