"""
Outfit confidence (0-100): how self-assured the color choices read.

Six weighted factors summing to 100 at maximum.
"""

from typing import Sequence

from outfit_intel.services.colors.color_model import round_half_up
from .curves import (
    bell_curve, mean, pairwise_lightness_contrasts, split_achromatic, std_dev, warm_cool_counts
)


CONFIDENCE_WEIGHTS = {
    "contrast": 25,
    "saturation": 20,
    "balance": 15,
    "neutral_anchor": 15,
    "intentionality": 15,
    "darkness": 10,
}


def calculate_confidence(colors: Sequence) -> int:
    """
    Estimate outfit confidence.

    Returns:
        Integer in [0, 100]; 0 for an empty color set
    """
    colors = list(colors)
    if not colors:
        return 0

    w = CONFIDENCE_WEIGHTS
    score = 0.0

    # Contrast: ideal mean lightness difference around 40
    contrasts = pairwise_lightness_contrasts(colors)
    if contrasts:
        score += bell_curve(mean(contrasts), 40, 20) * w["contrast"]

    # Saturation strength: moderate-to-high reads most confident
    avg_sat = mean([c.hsl.s for c in colors])
    score += bell_curve(avg_sat, 55, 25) * w["saturation"]

    # Visual balance: some lightness spread, but not extreme
    lightness = [c.hsl.l for c in colors]
    avg_light = mean(lightness)
    score += bell_curve(std_dev(lightness), 15, 12) * w["balance"]

    # Neutral anchor
    achromatic, chromatic = split_achromatic(colors)
    neutral_count = len(achromatic)
    if neutral_count == 1 and chromatic:
        score += w["neutral_anchor"]
    elif neutral_count == len(colors):
        score += w["neutral_anchor"] * 0.75
    elif neutral_count == 0 and avg_sat > 50:
        score += w["neutral_anchor"] * 0.6
    elif neutral_count >= 2:
        score += w["neutral_anchor"] * 0.5

    # Intentionality: warm/cool commitment among chromatic colors
    if len(chromatic) >= 2:
        warm, cool = warm_cool_counts(chromatic)
        score += max(warm, cool) / len(chromatic) * w["intentionality"]
    else:
        score += w["intentionality"] * 0.8

    # Darkness: all-dark looks project confidence
    if avg_light < 20 and avg_sat < 20:
        score += w["darkness"]
    elif avg_light < 35:
        score += w["darkness"] * 0.7
    elif avg_light > 75:
        score += w["darkness"] * 0.4
    else:
        score += w["darkness"] * 0.5

    return max(0, min(100, round_half_up(score)))
