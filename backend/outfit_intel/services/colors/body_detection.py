"""
Body column detection by vertical edge density.

Looks at a horizontal strip through the middle of the photo, computes
per-column luminance and its horizontal gradient, and slides a half-width
window to find where edges concentrate. A person against a plain
background produces a clear peak; a uniform image produces none.

The detector prefers reporting nothing over a wrong crop. Callers fall
back to a centered sampling band when it returns None.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from loguru import logger

from .pixels import PixelBuffer


@dataclass(frozen=True)
class BodyDetectionPolicy:
    """Tuning constants for body column detection."""
    strip_start: float = 0.30      # strip top as a fraction of image height
    strip_height: float = 0.40     # strip height as a fraction of image height
    row_stride: int = 4            # sample every Nth row of the strip
    window_ratio: float = 0.50     # sliding window as a fraction of width
    min_window: int = 10
    min_average_edge: float = 3.0  # mean gradient inside the best window
    padding_ratio: float = 0.05    # padding added on each side of the window
    min_strip_height: int = 10
    min_width: int = 20


DEFAULT_BODY_POLICY = BodyDetectionPolicy()


@dataclass(frozen=True)
class ColumnBounds:
    """Horizontal extent of the detected body."""
    x: int
    width: int


def column_luminance(buffer: PixelBuffer, policy: BodyDetectionPolicy = DEFAULT_BODY_POLICY) -> np.ndarray:
    """Average luma (0.299, 0.587, 0.114) per column of the middle strip."""
    strip_y = int(math.floor(buffer.height * policy.strip_start))
    strip_h = int(math.floor(buffer.height * policy.strip_height))

    rows = buffer.rgba[strip_y:strip_y + strip_h:policy.row_stride, :, :3].astype(np.float64)
    if rows.shape[0] == 0:
        return np.full(buffer.width, 128.0)

    luma = rows[:, :, 0] * 0.299 + rows[:, :, 1] * 0.587 + rows[:, :, 2] * 0.114
    return luma.mean(axis=0)


def edge_strength(luminance: np.ndarray) -> np.ndarray:
    """Central-difference gradient magnitude, zero at both borders."""
    edges = np.zeros_like(luminance, dtype=np.float64)
    if luminance.size >= 3:
        edges[1:-1] = np.abs(luminance[2:] - luminance[:-2])
    return edges


def densest_window(edges: np.ndarray, window: int):
    """
    Start and sum of the fixed-size window with the largest total.

    Uses a running sum, so the first window wins ties.
    """
    values = edges.tolist()
    current = sum(values[:window])
    best_sum = current
    best_start = 0

    for i in range(1, len(values) - window + 1):
        current += values[i + window - 1] - values[i - 1]
        if current > best_sum:
            best_sum = current
            best_start = i

    return best_start, best_sum


def detect_body_column(buffer: PixelBuffer,
                       policy: BodyDetectionPolicy = DEFAULT_BODY_POLICY) -> Optional[ColumnBounds]:
    """
    Estimate the horizontal band containing the person.

    Returns:
        ColumnBounds padded and clamped to the image, or None when the image
        is too small or edges are too weak to trust
    """
    width, height = buffer.width, buffer.height
    strip_h = int(math.floor(height * policy.strip_height))

    if strip_h < policy.min_strip_height or width < policy.min_width:
        logger.debug(f"Body detection skipped: {width}x{height} image too small")
        return None

    window = int(math.floor(width * policy.window_ratio))
    if window < policy.min_window:
        return None

    edges = edge_strength(column_luminance(buffer, policy))
    start, total = densest_window(edges, window)

    average_edge = total / window
    if average_edge < policy.min_average_edge:
        logger.debug(f"No clear body column (average edge {average_edge:.2f} < {policy.min_average_edge})")
        return None

    padding = int(math.floor(width * policy.padding_ratio))
    x = max(0, start - padding)
    w = min(width - x, window + padding * 2)

    logger.debug(f"Body column detected at x={x}, width={w} (average edge {average_edge:.2f})")
    return ColumnBounds(x=x, width=w)
