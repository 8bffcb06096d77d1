"""
Color model for outfit analysis.

RGB <-> HSL conversion, WCAG relative luminance and contrast, circular hue
distance, warm/cool classification, neutral and fashion-neutral detection,
and fashion-aware color naming.

Every function here is pure. Rounding is half-up so that integer HSL values
reproduce the reference formula exactly.
"""

import colorsys
import math
from dataclasses import dataclass
from typing import Callable, Tuple, Union

import numpy as np

from .records import HSL, RGB


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up."""
    return int(math.floor(value + 0.5))


# ============================================================================
# CONVERSIONS
# ============================================================================

def rgb_to_hsl(r: int, g: int, b: int) -> HSL:
    """
    Convert 8-bit RGB to integer HSL.

    Args:
        r, g, b: Channel values 0-255

    Returns:
        HSL with h in [0, 360), s and l in [0, 100]
    """
    r /= 255
    g /= 255
    b /= 255

    mx = max(r, g, b)
    mn = min(r, g, b)
    h = 0.0
    s = 0.0
    l = (mx + mn) / 2

    if mx != mn:
        d = mx - mn
        s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)

        if mx == r:
            h = ((g - b) / d + (6 if g < b else 0)) / 6
        elif mx == g:
            h = ((b - r) / d + 2) / 6
        else:
            h = ((r - g) / d + 4) / 6

    return HSL(
        h=round_half_up(h * 360) % 360,
        s=round_half_up(s * 100),
        l=round_half_up(l * 100)
    )


def rgb_to_hsl_array(pixels: np.ndarray) -> np.ndarray:
    """
    Vectorized rgb_to_hsl over an (N, 3) pixel array.

    Returns:
        (N, 3) int array of [h, s, l] matching rgb_to_hsl element-wise
    """
    px = np.asarray(pixels, dtype=np.float64).reshape(-1, 3) / 255
    r, g, b = px[:, 0], px[:, 1], px[:, 2]

    mx = px.max(axis=1)
    mn = px.min(axis=1)
    l = (mx + mn) / 2
    d = mx - mn
    chromatic = d != 0

    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(l > 0.5, d / (2 - mx - mn), d / (mx + mn))
        h_r = ((g - b) / d + np.where(g < b, 6, 0)) / 6
        h_g = ((b - r) / d + 2) / 6
        h_b = ((r - g) / d + 4) / 6

    # Channel priority follows the scalar version: r, then g, then b
    h = np.where(mx == r, h_r, np.where(mx == g, h_g, h_b))
    h = np.where(chromatic, h, 0.0)
    s = np.where(chromatic, s, 0.0)

    hsl = np.empty((px.shape[0], 3), dtype=np.int64)
    hsl[:, 0] = np.floor(h * 360 + 0.5).astype(np.int64) % 360
    hsl[:, 1] = np.floor(s * 100 + 0.5).astype(np.int64)
    hsl[:, 2] = np.floor(l * 100 + 0.5).astype(np.int64)
    return hsl


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Inverse of rgb_to_hsl (h in degrees, s/l in percent)."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0, l / 100.0, s / 100.0)
    return RGB(
        max(0, min(255, round_half_up(r * 255))),
        max(0, min(255, round_half_up(g * 255))),
        max(0, min(255, round_half_up(b * 255)))
    )


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB values to hex color string."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert hex color string to RGB.

    Raises:
        ValueError: If the string is not in #RRGGBB format
    """
    if not isinstance(hex_color, str) or not hex_color.startswith("#"):
        raise ValueError(f"Invalid hex color format: {hex_color}")

    hex_clean = hex_color[1:]
    if len(hex_clean) != 6:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    try:
        return RGB(*(int(hex_clean[i:i + 2], 16) for i in (0, 2, 4)))
    except ValueError:
        raise ValueError(f"Invalid hex color format: {hex_color}")


# ============================================================================
# LUMINANCE & CONTRAST
# ============================================================================

def _linearize(channel: int) -> float:
    c = channel / 255
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(r: int, g: int, b: int) -> float:
    """WCAG 2.0 relative luminance in [0, 1]."""
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def calculate_contrast(color1, color2) -> float:
    """
    WCAG 2.0 contrast ratio between two colors.

    Args:
        color1, color2: Objects with an ``rgb`` attribute

    Returns:
        Ratio from 1.0 (identical) to 21.0 (black on white)
    """
    l1 = relative_luminance(*color1.rgb)
    l2 = relative_luminance(*color2.rgb)

    lighter = max(l1, l2)
    darker = min(l1, l2)

    return (lighter + 0.05) / (darker + 0.05)


def lightness_contrast(color1, color2) -> int:
    """Absolute HSL lightness difference (0-100)."""
    return abs(color1.hsl.l - color2.hsl.l)


# ============================================================================
# HUE & TEMPERATURE
# ============================================================================

def hue_difference(h1: float, h2: float) -> float:
    """Circular hue difference in degrees [0, 180]."""
    diff = abs(h1 - h2)
    return min(diff, 360 - diff)


def is_warm_hue(h: float) -> bool:
    """Reds, oranges, yellows and magentas."""
    return (0 <= h < 70) or h >= 300


def is_cool_hue(h: float) -> bool:
    """Cyans, blues and violets."""
    return 170 <= h < 300


def get_temperature(color) -> str:
    """Return 'warm', 'cool' or 'neutral' for a color."""
    if is_neutral(color):
        return "neutral"
    return "warm" if is_warm_hue(color.hsl.h) else "cool"


# ============================================================================
# NEUTRALS
# ============================================================================

def is_neutral(color) -> bool:
    """Black, white, gray, off-white or charcoal."""
    s, l = color.hsl.s, color.hsl.l
    if s < 12:
        return True
    # Near-black or near-white with low-ish saturation
    if (l < 12 or l > 92) and s < 20:
        return True
    return False


def is_achromatic(color) -> bool:
    """Plain low-saturation test used by the scoring engine."""
    return color.hsl.s < 12


@dataclass(frozen=True)
class HSLBox:
    """Inclusive HSL range."""
    name: str
    h_min: int
    h_max: int
    s_min: int
    s_max: int
    l_min: int
    l_max: int

    def contains(self, hsl: HSL) -> bool:
        return (self.h_min <= hsl.h <= self.h_max and
                self.s_min <= hsl.s <= self.s_max and
                self.l_min <= hsl.l <= self.l_max)


FASHION_NEUTRAL_BOXES: Tuple[HSLBox, ...] = (
    HSLBox("navy", 210, 250, 20, 60, 10, 30),
    HSLBox("khaki", 30, 55, 10, 40, 50, 80),
    HSLBox("olive", 60, 100, 15, 45, 20, 45),
    HSLBox("brown", 15, 40, 20, 60, 15, 40),
)


def is_fashion_neutral(color) -> bool:
    """Neutral, or a navy/khaki/olive/brown that styles like one."""
    if is_neutral(color):
        return True
    return any(box.contains(color.hsl) for box in FASHION_NEUTRAL_BOXES)


# ============================================================================
# NAMING
# ============================================================================

def _red_name(h, s, l):
    if l < 30 and s > 30:
        return "Maroon"
    if l < 40 and s > 40:
        return "Burgundy"
    return "Red"


def _red_orange_name(h, s, l):
    if l > 60 and s > 50:
        return "Coral"
    if l < 35:
        return "Rust"
    return "Red-Orange"


def _orange_name(h, s, l):
    if l < 35 and s >= 20:
        return "Brown"
    if 35 <= l < 50 and s < 50:
        return "Tan"
    if s > 60 and l > 55:
        return "Orange"
    if l > 70:
        return "Peach"
    return "Orange"


def _gold_name(h, s, l):
    if l < 40:
        return "Dark Gold"
    if s > 50:
        return "Gold"
    if l > 75:
        return "Beige"
    return "Gold"


def _yellow_name(h, s, l):
    if l < 40 and s < 50:
        return "Olive"
    if s < 40 and l > 60:
        return "Khaki"
    if l > 75:
        return "Lemon"
    return "Yellow"


def _yellow_green_name(h, s, l):
    if l < 40:
        return "Olive"
    if s > 50:
        return "Lime"
    return "Yellow-Green"


def _green_name(h, s, l):
    if l < 25 and s < 50:
        return "Forest Green"
    if l < 35:
        return "Dark Green"
    if h >= 140 and s > 30:
        return "Emerald"
    if s > 50 and l > 40:
        return "Green"
    if s < 35:
        return "Sage"
    return "Green"


def _teal_name(h, s, l):
    return "Dark Teal" if l < 35 else "Teal"


def _cyan_name(h, s, l):
    return "Light Cyan" if l > 70 else "Cyan"


def _blue_name(h, s, l):
    if l < 20 and s > 25:
        return "Navy"
    if l < 35 and s > 20:
        return "Dark Blue"
    if 220 <= h < 245 and s > 50:
        return "Royal Blue"
    if l > 65:
        return "Sky Blue"
    if s < 35:
        return "Steel Blue"
    return "Blue"


def _indigo_name(h, s, l):
    return "Dark Indigo" if l < 30 else "Indigo"


def _purple_name(h, s, l):
    if l < 30:
        return "Dark Purple"
    if l > 70:
        return "Lavender"
    if s > 50:
        return "Purple"
    return "Mauve"


def _pink_name(h, s, l):
    if s > 60 and l > 40:
        return "Magenta"
    if l > 70:
        return "Pink"
    if l < 35:
        return "Plum"
    return "Pink"


def _rose_name(h, s, l):
    if l > 65:
        return "Rose"
    if l < 30:
        return "Wine"
    if s > 50:
        return "Hot Pink"
    return "Rose"


# (h_start, h_end, namer); reds wrap around 0 and are handled first
HUE_BANDS: Tuple[Tuple[int, int, Callable[[int, int, int], str]], ...] = (
    (8, 20, _red_orange_name),
    (20, 40, _orange_name),
    (40, 50, _gold_name),
    (50, 70, _yellow_name),
    (70, 90, _yellow_green_name),
    (90, 160, _green_name),
    (160, 185, _teal_name),
    (185, 200, _cyan_name),
    (200, 250, _blue_name),
    (250, 270, _indigo_name),
    (270, 300, _purple_name),
    (300, 330, _pink_name),
    (330, 345, _rose_name),
)

ACHROMATIC_NAMES: Tuple[Tuple[int, str], ...] = (
    (8, "Black"),
    (20, "Charcoal"),
    (35, "Dark Gray"),
    (50, "Gray"),
    (65, "Silver"),
    (80, "Light Gray"),
    (92, "Off-White"),
)


def get_hue_name(h: int, s: int, l: int) -> str:
    """Map a hue angle to a fashion-aware base color name."""
    if h >= 345 or h < 8:
        return _red_name(h, s, l)
    for start, end, namer in HUE_BANDS:
        if start <= h < end:
            return namer(h, s, l)
    return "Unknown"


def get_color_description(color: Union[HSL, object]) -> str:
    """
    Human-readable fashion name for a color.

    Accepts an HSL triple or any object with an ``hsl`` attribute.
    At most one modifier prefix is applied; lightness wins over saturation.
    """
    h, s, l = getattr(color, "hsl", color)

    if s < 8:
        for upper, name in ACHROMATIC_NAMES:
            if l < upper:
                return name
        return "White"

    if s < 15:
        if l < 15:
            return "Near Black"
        if l > 85:
            return "Off-White"
        if 20 <= h < 50:
            return "Cream" if l >= 60 else "Taupe"
        return "Gray"

    hue_name = get_hue_name(h, s, l)

    if l < 18:
        return f"Very Dark {hue_name}"
    if l < 30:
        return f"Dark {hue_name}"
    if l > 82:
        return f"Pale {hue_name}"
    if l > 70:
        return f"Light {hue_name}"

    if s < 25:
        return f"Muted {hue_name}"
    if s > 80:
        return f"Vivid {hue_name}"
    if s > 65:
        return f"Vibrant {hue_name}"

    return hue_name
