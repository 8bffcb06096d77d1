"""
Scoring primitives: smooth curves and aggregate HSL statistics.
"""

import math
from typing import List, Sequence, Tuple

from outfit_intel.services.colors.color_model import is_achromatic, is_cool_hue, is_warm_hue


def bell_curve(value: float, center: float, spread: float) -> float:
    """Gaussian falloff peaking at ``center``; always in (0, 1]."""
    return math.exp(-0.5 * ((value - center) / spread) ** 2)


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation."""
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def pairwise_lightness_contrasts(colors: Sequence) -> List[int]:
    """|l_i - l_j| for every unordered pair of colors."""
    return [
        abs(colors[i].hsl.l - colors[j].hsl.l)
        for i in range(len(colors))
        for j in range(i + 1, len(colors))
    ]


def split_achromatic(colors: Sequence) -> Tuple[list, list]:
    """(achromatic, chromatic) split using the scoring engine's s < 12 rule."""
    achromatic = [c for c in colors if is_achromatic(c)]
    chromatic = [c for c in colors if not is_achromatic(c)]
    return achromatic, chromatic


def warm_cool_counts(chromatic: Sequence) -> Tuple[int, int]:
    """Warm and cool tallies; hues in the green band count as neither."""
    warm = sum(1 for c in chromatic if is_warm_hue(c.hsl.h))
    cool = sum(1 for c in chromatic if is_cool_hue(c.hsl.h))
    return warm, cool
