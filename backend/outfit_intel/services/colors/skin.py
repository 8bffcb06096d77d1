"""
Skin-tone rejection for garment sampling.

Skin ranges are data: pass a different tuple of SkinRange to tune the
filter without touching the filtering logic.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .color_model import rgb_to_hsl, rgb_to_hsl_array


@dataclass(frozen=True)
class SkinRange:
    """Inclusive HSL box approximating a band of skin tones."""
    h_min: int
    h_max: int
    s_min: int
    s_max: int
    l_min: int
    l_max: int


DEFAULT_SKIN_RANGES: Tuple[SkinRange, ...] = (
    SkinRange(h_min=5, h_max=45, s_min=15, s_max=70, l_min=20, l_max=80),   # light to medium
    SkinRange(h_min=15, h_max=40, s_min=20, s_max=60, l_min=10, l_max=50),  # darker tones
)


def is_skin_color(pixel: Sequence[int], ranges: Sequence[SkinRange] = DEFAULT_SKIN_RANGES) -> bool:
    """True if the (r, g, b) pixel falls inside any skin range."""
    h, s, l = rgb_to_hsl(int(pixel[0]), int(pixel[1]), int(pixel[2]))
    return any(
        rg.h_min <= h <= rg.h_max and
        rg.s_min <= s <= rg.s_max and
        rg.l_min <= l <= rg.l_max
        for rg in ranges
    )


def skin_mask(pixels: np.ndarray, ranges: Sequence[SkinRange] = DEFAULT_SKIN_RANGES) -> np.ndarray:
    """Boolean mask over (N, 3) pixels, True where the pixel looks like skin."""
    pixels = np.asarray(pixels).reshape(-1, 3)
    mask = np.zeros(pixels.shape[0], dtype=bool)
    if pixels.shape[0] == 0:
        return mask

    hsl = rgb_to_hsl_array(pixels)
    h, s, l = hsl[:, 0], hsl[:, 1], hsl[:, 2]
    for rg in ranges:
        mask |= ((h >= rg.h_min) & (h <= rg.h_max) &
                 (s >= rg.s_min) & (s <= rg.s_max) &
                 (l >= rg.l_min) & (l <= rg.l_max))
    return mask


def reject_skin_pixels(pixels: np.ndarray, ranges: Sequence[SkinRange] = DEFAULT_SKIN_RANGES) -> np.ndarray:
    """Drop skin-colored pixels, preserving the order of the rest."""
    pixels = np.asarray(pixels).reshape(-1, 3)
    return pixels[~skin_mask(pixels, ranges)]
