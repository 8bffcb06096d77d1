"""
Garment zone detection.

Splits the photo into top / bottom / shoes bands using fixed vertical
proportions, and narrows the horizontal sampling band to the detected body
column (or a centered 60% band). Each zone carries an inset sampling
rectangle that keeps clear of neighboring zones.

Zone geometry never touches pixels except through body detection.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from loguru import logger

from outfit_intel.config import config
from .body_detection import (
    BodyDetectionPolicy, ColumnBounds, DEFAULT_BODY_POLICY, detect_body_column
)
from .pixels import PixelBuffer, Rect


@dataclass(frozen=True)
class ZoneBand:
    """Vertical band of the image for one garment."""
    key: str
    y_start: float
    y_end: float
    label: str


DEFAULT_BANDS: Tuple[ZoneBand, ...] = (
    ZoneBand("top", 0.08, 0.42, "Top"),
    ZoneBand("bottom", 0.42, 0.78, "Bottom"),
    ZoneBand("shoes", 0.78, 0.97, "Shoes"),
)


@dataclass(frozen=True)
class ZonePolicy:
    """Zone proportions and sampling insets."""
    bands: Tuple[ZoneBand, ...] = DEFAULT_BANDS
    horizontal_inset: float = 0.20      # fallback: skip 20% on each side
    vertical_inset_ratio: float = 0.10  # skip 10% of band height top and bottom


DEFAULT_ZONE_POLICY = ZonePolicy()


@dataclass(frozen=True)
class Zone:
    """Full visual zone plus the inner rectangle actually sampled."""
    x: int
    y: int
    width: int
    height: int
    label: str
    sampling_rect: Rect = field(default_factory=lambda: Rect(0, 0, 0, 0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "label": self.label,
            "sampling_rect": self.sampling_rect.to_dict(),
        }


def build_zones(width: int, height: int,
                column: Optional[ColumnBounds] = None,
                policy: ZonePolicy = DEFAULT_ZONE_POLICY) -> Dict[str, Zone]:
    """
    Zone geometry for an image of the given size.

    Args:
        width, height: Image dimensions
        column: Detected body column; None selects the centered fallback band
        policy: Band proportions and insets

    Returns:
        Mapping of band key to Zone, in band order
    """
    if column is not None:
        sample_x, sample_w = column.x, column.width
    else:
        sample_x = int(math.floor(width * policy.horizontal_inset))
        sample_w = int(math.floor(width * (1 - 2 * policy.horizontal_inset)))

    sample_x = max(0, sample_x)
    sample_w = min(sample_w, width - sample_x)
    sample_w = max(1, sample_w)

    zones = {}
    for band in policy.bands:
        zone_y = int(math.floor(height * band.y_start))
        zone_h = int(math.floor(height * (band.y_end - band.y_start)))

        v_inset = int(math.floor(zone_h * policy.vertical_inset_ratio))
        inner_y = zone_y + v_inset
        inner_h = max(1, zone_h - v_inset * 2)

        zones[band.key] = Zone(
            x=0,
            y=zone_y,
            width=width,
            height=zone_h,
            label=band.label,
            sampling_rect=Rect(sample_x, inner_y, sample_w, inner_h)
        )

    return zones


def detect_zones(buffer: PixelBuffer,
                 smart_crop: Optional[bool] = None,
                 policy: ZonePolicy = DEFAULT_ZONE_POLICY,
                 body_policy: BodyDetectionPolicy = DEFAULT_BODY_POLICY) -> Dict[str, Zone]:
    """
    Detect top / bottom / shoes zones for a photo.

    Args:
        buffer: RGBA pixel buffer
        smart_crop: Narrow sampling to the detected body column
            (defaults to config.SMART_CROP_DEFAULT)
        policy: Zone proportions and insets
        body_policy: Body detector tuning

    Returns:
        Mapping of zone key to Zone
    """
    if smart_crop is None:
        smart_crop = config.SMART_CROP_DEFAULT

    column = detect_body_column(buffer, body_policy) if smart_crop else None
    if smart_crop and column is None:
        logger.debug("Smart crop found no body column; using centered sampling band")

    return build_zones(buffer.width, buffer.height, column, policy)


def detect_zones_with_proportions(buffer: PixelBuffer,
                                  top_start: float = 0.08,
                                  top_end: float = 0.42,
                                  bottom_end: float = 0.78,
                                  shoes_end: float = 0.97,
                                  smart_crop: bool = True) -> Dict[str, Zone]:
    """
    Detect zones with caller-adjusted band boundaries.

    Raises:
        ValueError: If boundaries are not ascending fractions in [0, 1]
    """
    if not config.validate_proportions(top_start, top_end, bottom_end, shoes_end):
        raise ValueError(
            f"Invalid zone proportions: {top_start}, {top_end}, {bottom_end}, {shoes_end}"
        )

    labels = {band.key: band.label for band in DEFAULT_BANDS}
    policy = ZonePolicy(bands=(
        ZoneBand("top", top_start, top_end, labels["top"]),
        ZoneBand("bottom", top_end, bottom_end, labels["bottom"]),
        ZoneBand("shoes", bottom_end, shoes_end, labels["shoes"]),
    ))
    return detect_zones(buffer, smart_crop=smart_crop, policy=policy)
