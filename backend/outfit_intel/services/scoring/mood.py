"""
Mood detection.

An ordered table of mood rules over aggregate HSL statistics. The first
matching rule wins, and later rules assume earlier ones did not match.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Sequence, Tuple

from outfit_intel.services.colors.color_model import is_cool_hue, is_warm_hue
from .curves import mean, split_achromatic


class Mood(str, Enum):
    DARK_EDGY = "Dark / Edgy"
    MONOCHROME_MINIMAL = "Monochrome Minimal"
    ENERGETIC_BOLD = "Energetic / Bold"
    ROMANTIC_SOFT = "Romantic / Soft"
    EARTHY_NATURAL = "Earthy / Natural"
    CALM_PROFESSIONAL = "Calm / Professional"
    PLAYFUL_CREATIVE = "Playful / Creative"
    FRESH_SPORTY = "Fresh / Sporty"
    MINIMAL_ELEGANT = "Minimal / Elegant"
    NEUTRAL_CLASSIC = "Neutral / Classic"
    BALANCED = "Balanced"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class MoodResult:
    mood: Mood
    emoji: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mood"] = self.mood.value
        return data


@dataclass(frozen=True)
class MoodStats:
    """Aggregates the mood rules test against."""
    count: int
    avg_hue: float
    avg_sat: float
    avg_light: float
    max_contrast: float
    neutral_count: int
    chromatic_count: int
    hue_spread: float

    @property
    def is_warm(self) -> bool:
        return is_warm_hue(self.avg_hue)

    @property
    def is_cool(self) -> bool:
        return is_cool_hue(self.avg_hue)


def compute_mood_stats(colors: Sequence) -> MoodStats:
    achromatic, chromatic = split_achromatic(colors)
    lightness = [c.hsl.l for c in colors]
    hues = [c.hsl.h for c in chromatic]

    return MoodStats(
        count=len(colors),
        avg_hue=mean([c.hsl.h for c in colors]),
        avg_sat=mean([c.hsl.s for c in colors]),
        avg_light=mean(lightness),
        max_contrast=max(lightness) - min(lightness) if lightness else 0,
        neutral_count=len(achromatic),
        chromatic_count=len(chromatic),
        # Linear (not circular) spread of chromatic hues
        hue_spread=max(hues) - min(hues) if len(hues) >= 2 else 0,
    )


MoodRule = Tuple[Callable[[MoodStats], bool], MoodResult]

MOOD_RULES: Tuple[MoodRule, ...] = (
    (lambda m: m.avg_light < 18 and m.avg_sat < 20,
     MoodResult(Mood.DARK_EDGY, "🖤",
                "A very dark, moody palette. Projects power, mystery, and a bold sense of self.")),
    (lambda m: m.neutral_count == m.count and 18 <= m.avg_light <= 75,
     MoodResult(Mood.MONOCHROME_MINIMAL, "🤍",
                "A purely neutral palette. Timeless, clean, and effortlessly chic. Works anywhere.")),
    (lambda m: m.avg_sat > 55 and (m.is_warm or m.max_contrast > 40),
     MoodResult(Mood.ENERGETIC_BOLD, "⚡",
                "High saturation and warm tones create an energetic, attention-grabbing look. "
                "You mean business!")),
    (lambda m: m.avg_light > 60 and 20 <= m.avg_sat <= 55 and (m.avg_hue >= 300 or m.avg_hue < 30),
     MoodResult(Mood.ROMANTIC_SOFT, "🌸",
                "Soft pastels and warm pinks evoke warmth, romance, and approachability.")),
    (lambda m: m.is_warm and 15 <= m.avg_sat <= 50 and 20 <= m.avg_light <= 55,
     MoodResult(Mood.EARTHY_NATURAL, "🍂",
                "Warm, grounded tones inspired by nature. Feels authentic, approachable, and reliable.")),
    (lambda m: m.is_cool and 20 <= m.avg_sat <= 55 and m.max_contrast < 40,
     MoodResult(Mood.CALM_PROFESSIONAL, "💼",
                "Cool colors with balanced saturation project professionalism and trustworthiness.")),
    (lambda m: m.chromatic_count >= 2 and m.hue_spread > 60 and m.avg_sat > 35,
     MoodResult(Mood.PLAYFUL_CREATIVE, "🎨",
                "Diverse colors and high saturation create a fun, creative, and expressive vibe.")),
    (lambda m: m.avg_light > 55 and m.avg_sat > 40 and m.max_contrast > 25,
     MoodResult(Mood.FRESH_SPORTY, "🏃",
                "Bright, energetic colors with good contrast. Feels active, youthful, and dynamic.")),
    (lambda m: m.avg_sat < 25 and 30 < m.avg_light < 70,
     MoodResult(Mood.MINIMAL_ELEGANT, "✨",
                "Muted tones and subtle colors create a refined, sophisticated aesthetic.")),
    (lambda m: m.avg_sat < 15,
     MoodResult(Mood.NEUTRAL_CLASSIC, "🎯",
                "Achromatic palette with neutral tones. Timeless and versatile for any occasion.")),
)

BALANCED_MOOD = MoodResult(
    Mood.BALANCED, "⚖️",
    "A well-balanced outfit with moderate color choices. Versatile for everyday wear."
)
UNKNOWN_MOOD = MoodResult(Mood.UNKNOWN, "❓", "No colors detected.")


def detect_mood(colors: Sequence) -> MoodResult:
    """Classify the outfit mood; Unknown for an empty color set."""
    colors = list(colors)
    if not colors:
        return UNKNOWN_MOOD

    stats = compute_mood_stats(colors)
    for matches, result in MOOD_RULES:
        if matches(stats):
            return result
    return BALANCED_MOOD
