"""
Color temperature analysis.

Counts warm, cool and neutral colors and measures how consistently the
chromatic colors commit to one temperature family.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Sequence

from ..color_model import get_temperature


@dataclass(frozen=True)
class TemperatureAnalysis:
    """Temperature breakdown of a color set."""
    dominant: str       # "warm", "cool" or "neutral"
    warm_count: int
    cool_count: int
    neutral_count: int
    coherence: float    # share of chromatic colors in the majority family

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def analyze_temperature(colors: Sequence) -> TemperatureAnalysis:
    """
    Analyze temperature coherence across colors.

    An all-neutral set is perfectly coherent (1.0).
    """
    warm_count = 0
    cool_count = 0
    neutral_count = 0

    for color in colors:
        temp = get_temperature(color)
        if temp == "warm":
            warm_count += 1
        elif temp == "cool":
            cool_count += 1
        else:
            neutral_count += 1

    chromatic_total = warm_count + cool_count
    coherence = max(warm_count, cool_count) / chromatic_total if chromatic_total > 0 else 1.0

    if warm_count > cool_count:
        dominant = "warm"
    elif cool_count > warm_count:
        dominant = "cool"
    else:
        dominant = "neutral"

    return TemperatureAnalysis(
        dominant=dominant,
        warm_count=warm_count,
        cool_count=cool_count,
        neutral_count=neutral_count,
        coherence=coherence
    )
