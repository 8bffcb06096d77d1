"""
Outfit Intelligence Color Harmony Classifier

Classifies how two or three garment colors relate on the hue wheel and
across the neutral/chromatic split, and scores the relationship 0-100.

Classification is an ordered rule table. Each rule sees the same
precomputed context and either returns a result or passes; the first
result wins. Later rules rely on earlier ones having passed, so the order
of HARMONY_RULES is part of the behavior. "Mixed" is the default when no
rule matches.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from loguru import logger

from ..color_model import hue_difference, is_neutral, round_half_up
from . import explanations
from .temperature import TemperatureAnalysis, analyze_temperature


class HarmonyType(str, Enum):
    """Harmony classifications."""
    SINGLE_COLOR = "Single Color"
    ACHROMATIC_CONTRAST = "Achromatic Contrast"
    ACHROMATIC = "Achromatic"
    NEUTRAL_ANCHORED_POP = "Neutral-Anchored Pop"
    NEUTRAL_ANCHORED = "Neutral-Anchored"
    MONOCHROMATIC = "Monochromatic"
    MONOCHROMATIC_FLAT = "Monochromatic - Flat"
    ANALOGOUS = "Analogous"
    SPLIT_COMPLEMENTARY = "Split-Complementary"
    COMPLEMENTARY_BOLD = "Complementary - Bold"
    COMPLEMENTARY = "Complementary"
    TRIADIC = "Triadic"
    TENSION_NEUTRAL_RESCUED = "Tension (Neutral-Rescued)"
    COLOR_CLASH = "Color Clash"
    WARM_HARMONY = "Warm Harmony"
    COOL_HARMONY = "Cool Harmony"
    MIXED = "Mixed"


@dataclass(frozen=True)
class HarmonyResult:
    """Outcome of harmony classification."""
    type: HarmonyType
    score: int
    explanation: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "score": self.score,
            "explanation": self.explanation,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HarmonyContext:
    """Aggregate statistics shared by all harmony rules."""
    colors: Tuple[Any, ...]
    neutrals: Tuple[Any, ...]
    chromatics: Tuple[Any, ...]
    saturations: Tuple[int, ...]
    avg_saturation: float
    differences: Tuple[float, ...]
    max_diff: float
    min_diff: float
    avg_diff: float
    temperature: TemperatureAnalysis

    @property
    def has_neutral(self) -> bool:
        return len(self.neutrals) > 0


def build_context(colors: Sequence) -> HarmonyContext:
    """Partition colors and compute pairwise hue statistics among chromatics."""
    colors = tuple(colors)
    neutrals = tuple(c for c in colors if is_neutral(c))
    chromatics = tuple(c for c in colors if not is_neutral(c))

    hues = [c.hsl.h for c in chromatics]
    saturations = tuple(c.hsl.s for c in chromatics)
    avg_saturation = sum(saturations) / len(saturations) if saturations else 0.0

    differences = tuple(
        hue_difference(hues[i], hues[j])
        for i in range(len(hues))
        for j in range(i + 1, len(hues))
    )

    return HarmonyContext(
        colors=colors,
        neutrals=neutrals,
        chromatics=chromatics,
        saturations=saturations,
        avg_saturation=avg_saturation,
        differences=differences,
        max_diff=max(differences) if differences else 0,
        min_diff=min(differences) if differences else 0,
        avg_diff=sum(differences) / len(differences) if differences else 0.0,
        temperature=analyze_temperature(chromatics)
    )


def _value_range(values: Sequence[float]) -> float:
    return max(values) - min(values) if values else 0


# ============================================================================
# RULES (evaluated in HARMONY_RULES order)
# ============================================================================

def _single_color(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if len(ctx.colors) >= 2:
        return None
    return HarmonyResult(HarmonyType.SINGLE_COLOR, 50, explanations.SINGLE_COLOR, {})


def _all_neutral(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if ctx.chromatics:
        return None

    light_range = _value_range([c.hsl.l for c in ctx.colors])
    details = {"light_range": light_range, "neutral_count": len(ctx.neutrals)}
    if light_range > 40:
        return HarmonyResult(HarmonyType.ACHROMATIC_CONTRAST, 85, explanations.ACHROMATIC_CONTRAST, details)
    return HarmonyResult(HarmonyType.ACHROMATIC, 72, explanations.ACHROMATIC, details)


def _neutral_anchored(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if len(ctx.chromatics) != 1 or not ctx.neutrals:
        return None

    pop = ctx.chromatics[0]
    details = {"pop_color": pop.hsl._asdict(), "neutral_count": len(ctx.neutrals)}
    if pop.hsl.s > 50:
        return HarmonyResult(HarmonyType.NEUTRAL_ANCHORED_POP, 88, explanations.NEUTRAL_ANCHORED_POP, details)
    return HarmonyResult(HarmonyType.NEUTRAL_ANCHORED, 80, explanations.NEUTRAL_ANCHORED, details)


def _monochromatic(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if ctx.max_diff >= 25:
        return None

    sat_variance = _value_range(ctx.saturations)
    light_variance = _value_range([c.hsl.l for c in ctx.chromatics])
    details = {
        "max_diff": ctx.max_diff,
        "sat_variance": sat_variance,
        "light_variance": light_variance,
        "has_neutrals": ctx.has_neutral,
    }

    if sat_variance > 25 or light_variance > 25:
        return HarmonyResult(HarmonyType.MONOCHROMATIC, 87, explanations.MONOCHROMATIC, details)
    return HarmonyResult(HarmonyType.MONOCHROMATIC_FLAT, 68, explanations.MONOCHROMATIC_FLAT, details)


def _analogous(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if not 25 <= ctx.max_diff <= 60:
        return None

    coherent = ctx.temperature.coherence == 1
    score = 88 + (5 if ctx.has_neutral else 0) + (3 if coherent else 0)
    explanation = explanations.ANALOGOUS.format(
        neutral_note=explanations.ANALOGOUS_NEUTRAL_NOTE if ctx.has_neutral else "",
        temperature_note=explanations.ANALOGOUS_TEMPERATURE_NOTE if coherent else ""
    ).strip()

    return HarmonyResult(HarmonyType.ANALOGOUS, min(100, score), explanation, {
        "avg_diff": ctx.avg_diff,
        "has_neutrals": ctx.has_neutral,
        "temperature": ctx.temperature.dominant,
    })


def _split_complementary(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if len(ctx.chromatics) < 2 or not any(130 <= d <= 170 for d in ctx.differences):
        return None
    return HarmonyResult(HarmonyType.SPLIT_COMPLEMENTARY, 84, explanations.SPLIT_COMPLEMENTARY, {
        "differences": list(ctx.differences),
        "avg_saturation": ctx.avg_saturation,
    })


def _complementary(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if not 150 <= ctx.max_diff <= 180:
        return None

    details = {
        "max_diff": ctx.max_diff,
        "avg_saturation": ctx.avg_saturation,
        "has_neutral_anchor": ctx.has_neutral,
    }
    if ctx.avg_saturation > 60 and not ctx.has_neutral:
        return HarmonyResult(HarmonyType.COMPLEMENTARY_BOLD, 75, explanations.COMPLEMENTARY_BOLD, details)

    explanation = explanations.COMPLEMENTARY.format(
        anchor_note=(explanations.COMPLEMENTARY_ANCHORED_NOTE if ctx.has_neutral
                     else explanations.COMPLEMENTARY_UNANCHORED_NOTE)
    )
    return HarmonyResult(HarmonyType.COMPLEMENTARY, 90 if ctx.has_neutral else 84, explanation, details)


def _triadic(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if len(ctx.chromatics) < 3 or len(ctx.differences) < 3:
        return None

    spread_variance = ctx.max_diff - ctx.min_diff
    evenly_spaced = all(90 <= d <= 150 for d in ctx.differences) or spread_variance < 40
    if not (evenly_spaced and ctx.avg_diff >= 90):
        return None

    return HarmonyResult(HarmonyType.TRIADIC, 82, explanations.TRIADIC, {
        "differences": list(ctx.differences),
        "spread_variance": spread_variance,
    })


def _clash(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if not (60 <= ctx.avg_diff < 130 and ctx.avg_saturation > 45):
        return None

    if ctx.has_neutral and len(ctx.chromatics) <= 2:
        return HarmonyResult(HarmonyType.TENSION_NEUTRAL_RESCUED, 62, explanations.TENSION_NEUTRAL_RESCUED, {
            "avg_diff": ctx.avg_diff,
            "avg_saturation": ctx.avg_saturation,
            "neutral_count": len(ctx.neutrals),
        })

    temp_clash = ctx.temperature.warm_count > 0 and ctx.temperature.cool_count > 0
    explanation = explanations.COLOR_CLASH.format(
        avg_diff=round_half_up(ctx.avg_diff),
        clash_note=explanations.COLOR_CLASH_TEMPERATURE_NOTE if temp_clash else ""
    )
    return HarmonyResult(HarmonyType.COLOR_CLASH, 32 if temp_clash else 40, explanation, {
        "avg_diff": ctx.avg_diff,
        "avg_saturation": ctx.avg_saturation,
        "temp_clash": temp_clash,
    })


def _temperature_harmony(ctx: HarmonyContext) -> Optional[HarmonyResult]:
    if ctx.temperature.coherence != 1 or len(ctx.chromatics) < 2:
        return None

    warm = ctx.temperature.dominant == "warm"
    explanation = explanations.TEMPERATURE_HARMONY.format(
        temperature=ctx.temperature.dominant,
        temperature_note=explanations.WARM_NOTE if warm else explanations.COOL_NOTE
    )
    return HarmonyResult(
        HarmonyType.WARM_HARMONY if warm else HarmonyType.COOL_HARMONY,
        78,
        explanation,
        {"temperature": ctx.temperature.to_dict()}
    )


def _mixed(ctx: HarmonyContext) -> HarmonyResult:
    mixed_score = round_half_up(50 + ctx.temperature.coherence * 15 + (5 if ctx.has_neutral else 0))
    explanation = explanations.MIXED.format(
        neutral_note=explanations.MIXED_NEUTRAL_NOTE if ctx.has_neutral else ""
    )
    return HarmonyResult(HarmonyType.MIXED, min(70, mixed_score), explanation, {
        "avg_diff": ctx.avg_diff,
        "max_diff": ctx.max_diff,
        "temperature": ctx.temperature.to_dict(),
        "neutral_count": len(ctx.neutrals),
    })


HarmonyRule = Callable[[HarmonyContext], Optional[HarmonyResult]]

HARMONY_RULES: Tuple[HarmonyRule, ...] = (
    _single_color,
    _all_neutral,
    _neutral_anchored,
    _monochromatic,
    _analogous,
    _split_complementary,
    _complementary,
    _triadic,
    _clash,
    _temperature_harmony,
)


def analyze_harmony(colors: Sequence) -> HarmonyResult:
    """
    Classify the harmony of 2-3 garment colors.

    Args:
        colors: Color records (anything with an ``hsl`` attribute)

    Returns:
        HarmonyResult with type, 0-100 score, explanation and details
    """
    ctx = build_context(colors)
    for rule in HARMONY_RULES:
        result = rule(ctx)
        if result is not None:
            logger.debug(f"Harmony classified as {result.type.value} (score {result.score}) by {rule.__name__}")
            return result

    result = _mixed(ctx)
    logger.debug(f"Harmony classified as {result.type.value} (score {result.score}) by default rule")
    return result


__all__: List[str] = [
    "HarmonyType",
    "HarmonyResult",
    "HarmonyContext",
    "HARMONY_RULES",
    "TemperatureAnalysis",
    "analyze_harmony",
    "analyze_temperature",
    "build_context",
]
