"""
Outfit analysis orchestration.

Chains zone detection, garment color extraction, harmony classification,
scoring, mood and suggestions into one analysis object handed back to the
application layer for display and persistence.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from outfit_intel.services.colors.color_model import calculate_contrast
from outfit_intel.services.colors.extraction import extract_zone_colors
from outfit_intel.services.colors.harmony import HarmonyResult, analyze_harmony
from outfit_intel.services.colors.harmony.temperature import TemperatureAnalysis, analyze_temperature
from outfit_intel.services.colors.pixels import PixelBuffer
from outfit_intel.services.colors.records import ColorRecord
from outfit_intel.services.colors.zones import Zone, detect_zones
from outfit_intel.services.observability import performance_monitor, performance_tracked
from outfit_intel.services.scoring import (
    Grade, MoodResult, ScoreResult, calculate_confidence, calculate_outfit_score, detect_mood, get_grade
)
from outfit_intel.services.suggestions import generate_suggestions
from outfit_intel.utils.ids import generate_analysis_id
from outfit_intel.utils.logging import get_logger


GARMENT_ORDER = ("top", "bottom", "shoes")
GARMENT_LABELS = {"top": "Top", "bottom": "Bottom", "shoes": "Shoes"}


class OutfitAnalysisError(Exception):
    """Raised when an outfit cannot be analyzed at all."""
    pass


@dataclass(frozen=True)
class ContrastRatio:
    """WCAG contrast ratio for one garment pair."""
    pair: str
    ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {"pair": self.pair, "ratio": self.ratio}


@dataclass
class OutfitAnalysis:
    """Complete judgment of one outfit."""
    analysis_id: str
    timestamp: str
    colors: Dict[str, ColorRecord]
    harmony: HarmonyResult
    confidence: int
    mood: MoodResult
    score: ScoreResult
    grade: Grade
    suggestions: List[str]
    temperature: TemperatureAnalysis
    contrast_ratios: List[ContrastRatio] = field(default_factory=list)
    zones: Optional[Dict[str, Zone]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "analysis_id": self.analysis_id,
            "timestamp": self.timestamp,
            "colors": {key: record.to_dict() for key, record in self.colors.items()},
            "harmony": self.harmony.to_dict(),
            "confidence": self.confidence,
            "mood": self.mood.to_dict(),
            "score": self.score.to_dict(),
            "grade": self.grade.to_dict(),
            "suggestions": list(self.suggestions),
            "temperature": self.temperature.to_dict(),
            "contrast_ratios": [cr.to_dict() for cr in self.contrast_ratios],
        }
        if self.zones is not None:
            data["zones"] = {key: zone.to_dict() for key, zone in self.zones.items()}
        return data


def _ordered_colors(colors: Union[Mapping[str, ColorRecord], Sequence[ColorRecord]]) -> Dict[str, ColorRecord]:
    """Garment colors keyed by garment, known garments first in outfit order."""
    if isinstance(colors, Mapping):
        ordered = {key: colors[key] for key in GARMENT_ORDER if key in colors}
        ordered.update({key: value for key, value in colors.items() if key not in ordered})
        return ordered

    colors = list(colors)
    keys = list(GARMENT_ORDER) + [f"item_{i}" for i in range(len(GARMENT_ORDER), len(colors))]
    return dict(zip(keys, colors))


def _garment_label(key: str) -> str:
    return GARMENT_LABELS.get(key, key.replace("_", " ").title())


def calculate_contrast_ratios(colors: Mapping[str, ColorRecord]) -> List[ContrastRatio]:
    """WCAG ratio for every garment pair, labelled like "Top ↔ Bottom"."""
    keys = list(colors)
    ratios = []
    for i in range(len(keys)):
        for j in range(i + 1, len(keys)):
            ratios.append(ContrastRatio(
                pair=f"{_garment_label(keys[i])} ↔ {_garment_label(keys[j])}",
                ratio=calculate_contrast(colors[keys[i]], colors[keys[j]])
            ))
    return ratios


def analyze_outfit(colors: Union[Mapping[str, ColorRecord], Sequence[ColorRecord]],
                   zones: Optional[Dict[str, Zone]] = None) -> OutfitAnalysis:
    """
    Judge an outfit from its garment colors.

    Args:
        colors: Mapping of garment key ("top", "bottom", "shoes") to ColorRecord,
            or records in top/bottom/shoes order
        zones: Zone geometry the colors were extracted from, if any

    Returns:
        OutfitAnalysis

    Raises:
        OutfitAnalysisError: If no colors are given
    """
    logger = get_logger()
    garments = _ordered_colors(colors)
    if not garments:
        raise OutfitAnalysisError("No garment colors to analyze")

    records = list(garments.values())
    analyzed_at = datetime.now(timezone.utc)
    analysis_id = generate_analysis_id(analyzed_at)

    with performance_monitor("judge_outfit"):
        harmony = analyze_harmony(records)
        confidence = calculate_confidence(records)
        mood = detect_mood(records)
        score = calculate_outfit_score(records, harmony)
        grade = get_grade(score.total)
        suggestions = generate_suggestions(records, harmony)
        temperature = analyze_temperature(records)
        contrast_ratios = calculate_contrast_ratios(garments)

    logger.log_zone_colors(analysis_id, garments)
    logger.log_verdict(analysis_id, harmony.type.value, score.total, grade.letter, mood.mood.value)

    return OutfitAnalysis(
        analysis_id=analysis_id,
        timestamp=analyzed_at.isoformat(),
        colors=garments,
        harmony=harmony,
        confidence=confidence,
        mood=mood,
        score=score,
        grade=grade,
        suggestions=suggestions,
        temperature=temperature,
        contrast_ratios=contrast_ratios,
        zones=zones,
    )


@performance_tracked("analyze_image")
def analyze_image(buffer: PixelBuffer, smart_crop: Optional[bool] = None) -> OutfitAnalysis:
    """
    Full pipeline for one outfit photo: zones, garment colors, judgment.

    Args:
        buffer: RGBA pixel buffer of the photo
        smart_crop: Narrow sampling to the detected body column
            (defaults to config.SMART_CROP_DEFAULT)
    """
    pixel_count = buffer.width * buffer.height

    with performance_monitor("detect_zones", pixel_count=pixel_count):
        zones = detect_zones(buffer, smart_crop=smart_crop)

    with performance_monitor("extract_colors", pixel_count=pixel_count):
        colors = extract_zone_colors(buffer, zones)

    return analyze_outfit(colors, zones=zones)
