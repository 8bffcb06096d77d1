"""
Outfit score (0-100) from six independently capped sub-scores.

    Color Harmony          30  harmony score x 0.30
    Contrast Balance       18  bell curve on mean pairwise lightness contrast
    Color Intensity        15  bell curves on saturation spread and mean
    Warm/Cool Coherence    12  three-tier dominance ratio
    Neutral Anchoring      10  five-tier neutral count pattern
    Professional Polish    15  15 - penalties + bonuses, clamped
"""

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Sequence

from outfit_intel.services.colors.color_model import round_half_up
from outfit_intel.services.colors.harmony import HarmonyResult, HarmonyType
from .curves import (
    bell_curve, mean, pairwise_lightness_contrasts, split_achromatic, std_dev, warm_cool_counts
)


@dataclass(frozen=True)
class ScoreBreakdownItem:
    """Points earned in one scoring category."""
    category: str
    points: int
    max: int
    detail: str


@dataclass(frozen=True)
class ScoreResult:
    """Total outfit score and its per-category breakdown."""
    total: int
    breakdown: List[ScoreBreakdownItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "breakdown": [asdict(item) for item in self.breakdown]}


def _harmony_points(harmony: HarmonyResult) -> ScoreBreakdownItem:
    points = round_half_up(harmony.score * 0.30)
    return ScoreBreakdownItem("Color Harmony", points, 30, HarmonyType(harmony.type).value)


def _contrast_points(colors: Sequence) -> ScoreBreakdownItem:
    contrasts = pairwise_lightness_contrasts(colors)
    if not contrasts:
        return ScoreBreakdownItem("Contrast Balance", 0, 18, "N/A")

    avg_contrast = mean(contrasts)
    points = round_half_up(bell_curve(avg_contrast, 38, 18) * 18)
    return ScoreBreakdownItem(
        "Contrast Balance", points, 18, f"Avg difference: {round_half_up(avg_contrast)}%"
    )


def _intensity_points(colors: Sequence) -> ScoreBreakdownItem:
    saturations = [c.hsl.s for c in colors]
    avg_sat = mean(saturations)
    sat_variance = max(saturations) - min(saturations) if saturations else 0

    # Reward saturation spread around 35 and a moderate average around 45
    points = round_half_up(bell_curve(sat_variance, 35, 20) * 8 + bell_curve(avg_sat, 45, 25) * 7)
    return ScoreBreakdownItem(
        "Color Intensity", points, 15,
        f"Avg saturation: {round_half_up(avg_sat)}% · Variance: {round_half_up(sat_variance)}%"
    )


def _coherence_points(chromatic: Sequence) -> ScoreBreakdownItem:
    if len(chromatic) < 2:
        return ScoreBreakdownItem("Warm/Cool Coherence", 10, 12, "Neutral palette")

    warm, cool = warm_cool_counts(chromatic)
    dominance = max(warm, cool) / len(chromatic)

    if dominance == 1:
        points = 12
    elif dominance >= 0.66:
        points = 8
    else:
        points = 4

    if warm > cool:
        detail = f"Warm-dominant ({warm}/{len(chromatic)})"
    elif cool > warm:
        detail = f"Cool-dominant ({cool}/{len(chromatic)})"
    else:
        detail = "Mixed warm/cool"

    return ScoreBreakdownItem("Warm/Cool Coherence", points, 12, detail)


def _anchor_points(colors: Sequence, neutral_count: int, chromatic_count: int) -> ScoreBreakdownItem:
    avg_sat = mean([c.hsl.s for c in colors])

    if neutral_count == 1 and chromatic_count >= 1:
        points = 10
    elif neutral_count == 2 and len(colors) == 3:
        points = 7
    elif neutral_count == 0 and avg_sat > 50:
        points = 5
    elif neutral_count == len(colors):
        points = 8
    else:
        points = 6

    plural = "" if neutral_count == 1 else "s"
    return ScoreBreakdownItem(
        "Neutral Anchoring", points, 10, f"{neutral_count} neutral{plural} out of {len(colors)} items"
    )


def _polish_points(colors: Sequence, chromatic: Sequence, harmony: HarmonyResult) -> ScoreBreakdownItem:
    points = 15
    notes = []

    if harmony.type == HarmonyType.COLOR_CLASH:
        points -= 8
        notes.append("Color clash detected")

    if sum(1 for c in colors if c.hsl.s > 75) >= 3:
        points -= 5
        notes.append("Too many vibrant colors")

    if len(chromatic) >= 2:
        warm, cool = warm_cool_counts(chromatic)
        if warm > 0 and cool > 0 and abs(warm - cool) <= 1:
            points -= 4
            notes.append("Warm/cool temperature clash")

    if std_dev([c.hsl.l for c in colors]) > 30:
        points -= 3
        notes.append("Extreme lightness variation")

    if harmony.type == HarmonyType.ANALOGOUS:
        points += 3
        notes.append("Analogous harmony (+)")
    elif harmony.type == HarmonyType.COMPLEMENTARY:
        points += 2
        notes.append("Complementary intent (+)")
    elif harmony.type == HarmonyType.MONOCHROMATIC and len(chromatic) >= 2:
        points += 2
        notes.append("Monochromatic intent (+)")

    points = max(0, min(15, points))
    return ScoreBreakdownItem(
        "Professional Polish", points, 15, " · ".join(notes) if notes else "No issues detected"
    )


def calculate_outfit_score(colors: Sequence, harmony: HarmonyResult) -> ScoreResult:
    """
    Score an outfit 0-100.

    Args:
        colors: Garment color records
        harmony: Result of analyze_harmony for the same colors

    Returns:
        ScoreResult whose total is the clamped sum of its breakdown points
    """
    colors = list(colors)
    achromatic, chromatic = split_achromatic(colors)

    breakdown = [
        _harmony_points(harmony),
        _contrast_points(colors),
        _intensity_points(colors),
        _coherence_points(chromatic),
        _anchor_points(colors, len(achromatic), len(chromatic)),
        _polish_points(colors, chromatic, harmony),
    ]

    total = sum(item.points for item in breakdown)
    return ScoreResult(total=max(0, min(100, total)), breakdown=breakdown)
