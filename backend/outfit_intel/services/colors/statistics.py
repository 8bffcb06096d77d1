"""
Robust color statistics over sampled pixels.

Trimmed-mean color extraction and quantized bucketing for dominant colors.
Both operate on (N, 3) RGB arrays produced by the pixel sampler.
"""

import math
from typing import List, Sequence

import numpy as np

from outfit_intel.config import config
from .color_model import rgb_to_hsl, rgb_to_hex, round_half_up
from .records import RGB, DominantColor


def trimmed_mean(values: Sequence[float], trim_ratio: float = 0.1) -> float:
    """
    Mean after discarding ``trim_ratio`` of the sorted values from each end.

    Falls back to the median of the sorted values if trimming leaves
    nothing, and to the neutral gray channel value for empty input.
    """
    arr = np.sort(np.asarray(values, dtype=np.float64).ravel())
    n = arr.size
    if n == 0:
        return float(config.FALLBACK_RGB[0])

    trim = int(math.floor(n * trim_ratio))
    trimmed = arr[trim:n - trim]
    if trimmed.size == 0:
        return float(arr[n // 2])
    return float(trimmed.sum() / trimmed.size)


def extract_average_color(pixels: np.ndarray) -> RGB:
    """
    Representative color of a pixel sample via per-channel trimmed mean.

    Returns:
        Rounded RGB, or neutral gray (128, 128, 128) for an empty sample
    """
    pixels = np.asarray(pixels).reshape(-1, 3)
    if pixels.shape[0] == 0:
        return RGB(*config.FALLBACK_RGB)

    return RGB(*(round_half_up(trimmed_mean(pixels[:, c])) for c in range(3)))


def dominant_color_bucketing(pixels: np.ndarray, k: int = 3, shift: int = 4) -> List[DominantColor]:
    """
    Top-k dominant colors by quantized bucketing.

    Each channel is right-shifted by ``shift`` bits; pixels sharing a
    quantized triple form a bucket. Buckets are ranked by pixel count with
    ties broken by first-seen order, and each is reported as the mean of its
    member pixels.

    Args:
        pixels: (N, 3) RGB array
        k: Number of buckets to return
        shift: Bits dropped per channel (4 -> 16 levels, 3 -> 32 levels)

    Returns:
        List of DominantColor with frequency = bucket count / N
    """
    if not config.validate_bucket_shift(shift):
        raise ValueError(f"Invalid bucket shift: {shift}")

    px = np.asarray(pixels, dtype=np.int64).reshape(-1, 3)
    total = px.shape[0]
    if total == 0 or k <= 0:
        return []

    q = px >> shift
    keys = (q[:, 0] << 16) | (q[:, 1] << 8) | q[:, 2]

    _, first_seen, inverse, counts = np.unique(
        keys, return_index=True, return_inverse=True, return_counts=True
    )
    inverse = inverse.reshape(-1)

    sums = np.zeros((counts.size, 3), dtype=np.int64)
    np.add.at(sums, inverse, px)

    # Primary key: count descending; secondary: first appearance
    order = np.lexsort((first_seen, -counts))[:k]

    results = []
    for idx in order:
        count = int(counts[idx])
        rgb = RGB(*(round_half_up(sums[idx, c] / count) for c in range(3)))
        results.append(DominantColor(
            rgb=rgb,
            hsl=rgb_to_hsl(*rgb),
            hex=rgb_to_hex(*rgb),
            frequency=count / total
        ))

    return results
