"""
Garment color extraction.

This module implements the per-zone extraction pipeline: stride sampling
of the zone's sampling rectangle, skin rejection, trimmed-mean color,
dominant-color bucketing, pattern detection and an extraction confidence.
"""

from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
from loguru import logger

from outfit_intel.config import config
from .color_model import hue_difference, round_half_up
from .pixels import PixelBuffer, Rect, sample_pixels
from .records import RGB, ColorRecord, DominantColor
from .skin import DEFAULT_SKIN_RANGES, SkinRange, reject_skin_pixels
from .statistics import dominant_color_bucketing, extract_average_color
from .zones import Zone


# Pattern detection thresholds
PATTERN_PRIMARY_MIN_FREQUENCY = 0.25
PATTERN_SECONDARY_MIN_FREQUENCY = 0.15
PATTERN_MIN_HUE_DIFF = 25
PATTERN_MIN_LIGHTNESS_DIFF = 25
PATTERN_MIN_SATURATION_DIFF = 30

# Confidence weights and normalizers
CONFIDENCE_SURVIVAL_WEIGHT = 0.4
CONFIDENCE_CONSISTENCY_WEIGHT = 0.4
CONFIDENCE_SAMPLE_WEIGHT = 0.2
FULL_SURVIVAL_RATE = 0.5
CONSISTENCY_SAMPLE_LIMIT = 200
MAX_EXPECTED_DISTANCE = 150.0
FULL_SAMPLE_SIZE = 100


def is_pattern(dominant_colors: Sequence[DominantColor]) -> bool:
    """
    Whether a zone looks like stripes, plaid or a print.

    The two most frequent colors must both have a meaningful share and be
    visually distinct in hue, lightness or saturation.
    """
    if not dominant_colors or len(dominant_colors) < 2:
        return False

    c1, c2 = dominant_colors[0], dominant_colors[1]

    if c1.frequency < PATTERN_PRIMARY_MIN_FREQUENCY or c2.frequency < PATTERN_SECONDARY_MIN_FREQUENCY:
        return False

    hue_diff = hue_difference(c1.hsl.h, c2.hsl.h)
    light_diff = abs(c1.hsl.l - c2.hsl.l)
    sat_diff = abs(c1.hsl.s - c2.hsl.s)

    return (hue_diff > PATTERN_MIN_HUE_DIFF or
            light_diff > PATTERN_MIN_LIGHTNESS_DIFF or
            sat_diff > PATTERN_MIN_SATURATION_DIFF)


def calculate_extraction_confidence(all_pixels: np.ndarray,
                                    filtered_pixels: np.ndarray,
                                    dominant: RGB) -> float:
    """
    Confidence (0-1) that the extracted color represents the garment.

    Combines skin-filter survival rate, color consistency around the
    extracted color, and sample size. Rounded to 2 decimals.
    """
    total = len(all_pixels)
    if total == 0:
        return 0.0

    confidence = 0.0

    # Survival: 50%+ of pixels surviving the skin filter scores fully
    survival_rate = len(filtered_pixels) / total
    confidence += min(1.0, survival_rate / FULL_SURVIVAL_RATE) * CONFIDENCE_SURVIVAL_WEIGHT

    # Consistency: mean RGB distance from the extracted color
    sample_source = filtered_pixels if len(filtered_pixels) > 0 else all_pixels
    sample = np.asarray(sample_source[:CONSISTENCY_SAMPLE_LIMIT], dtype=np.float64)
    if sample.shape[0] > 0:
        distances = np.sqrt(((sample - np.asarray(dominant, dtype=np.float64)) ** 2).sum(axis=1))
        avg_dist = float(distances.mean())
        consistency = max(0.0, 1 - avg_dist / MAX_EXPECTED_DISTANCE)
        confidence += consistency * CONFIDENCE_CONSISTENCY_WEIGHT

    # Sample size
    confidence += min(1.0, len(sample_source) / FULL_SAMPLE_SIZE) * CONFIDENCE_SAMPLE_WEIGHT

    return round_half_up(confidence * 100) / 100


def extract_zone_color(buffer: PixelBuffer, rect: Rect,
                       skin_ranges: Sequence[SkinRange] = DEFAULT_SKIN_RANGES,
                       stride: Optional[int] = None,
                       dominant_count: Optional[int] = None,
                       bucket_shift: Optional[int] = None) -> ColorRecord:
    """
    Extract the representative color of one garment region.

    Args:
        buffer: RGBA pixel buffer
        rect: Sampling rectangle (clamped to the buffer)
        skin_ranges: HSL ranges treated as skin
        stride: Pixel sampling stride (defaults to config)
        dominant_count: Number of dominant colors to report (defaults to config)
        bucket_shift: Quantization shift for bucketing (defaults to config)

    Returns:
        ColorRecord; neutral gray with zero confidence if no opaque pixels
    """
    dominant_count = config.DOMINANT_COLOR_COUNT if dominant_count is None else dominant_count
    bucket_shift = config.BUCKET_SHIFT if bucket_shift is None else bucket_shift

    pixels = sample_pixels(buffer, rect, stride=stride)
    filtered = reject_skin_pixels(pixels, skin_ranges)

    if len(pixels) == 0:
        logger.debug(f"No opaque pixels in {rect}; using neutral gray")
    elif len(filtered) == 0:
        logger.debug(f"Skin filter removed all {len(pixels)} pixels in {rect}; using unfiltered sample")

    working = filtered if len(filtered) > 0 else pixels

    dominant = extract_average_color(working)
    dominant_colors = dominant_color_bucketing(working, k=dominant_count, shift=bucket_shift)
    confidence = calculate_extraction_confidence(pixels, filtered, dominant)

    return ColorRecord.from_rgb(
        *dominant,
        confidence=confidence,
        dominant_colors=tuple(dominant_colors),
        is_pattern=is_pattern(dominant_colors),
        pixel_count=int(len(pixels)),
        filtered_count=int(len(filtered))
    )


def extract_zone_colors(buffer: PixelBuffer,
                        zones: Mapping[str, Union[Zone, Rect]],
                        skin_ranges: Sequence[SkinRange] = DEFAULT_SKIN_RANGES) -> Dict[str, ColorRecord]:
    """
    Extract one color record per zone.

    Zones are sampled through their inset sampling rectangle; a bare Rect
    is sampled as-is.
    """
    colors = {}
    for key, zone in zones.items():
        rect = zone.sampling_rect if isinstance(zone, Zone) else zone
        record = extract_zone_color(buffer, rect, skin_ranges=skin_ranges)

        if record.confidence < config.MIN_ZONE_CONFIDENCE:
            logger.warning(f"Low extraction confidence for {key}: {record.confidence:.2f}")
        logger.debug(f"Zone {key}: {record.hex} ({record.name}) confidence={record.confidence:.2f} "
                     f"pattern={record.is_pattern} pixels={record.pixel_count}/{record.filtered_count}")

        colors[key] = record

    return colors


def extract_region_average_color(buffer: PixelBuffer, rect: Rect) -> RGB:
    """Trimmed-mean color of a region, without skin rejection."""
    return extract_average_color(sample_pixels(buffer, rect))


def extract_region_dominant_colors(buffer: PixelBuffer, rect: Rect,
                                   count: int = 3, shift: int = 3) -> List[DominantColor]:
    """Dominant colors of a region at 32 levels per channel, without skin rejection."""
    return dominant_color_bucketing(sample_pixels(buffer, rect), k=count, shift=shift)
