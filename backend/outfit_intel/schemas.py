"""
Outfit Intelligence Response Schemas
Pydantic models for the analysis object handed to the application layer.
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field


# ============================================================================
# COLOR SCHEMAS
# ============================================================================

class RGBModel(BaseModel):
    """sRGB triple."""
    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")


class HSLModel(BaseModel):
    """Integer HSL triple."""
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees (0-359)")
    s: int = Field(..., ge=0, le=100, description="Saturation percent")
    l: int = Field(..., ge=0, le=100, description="Lightness percent")


class DominantColorModel(BaseModel):
    """One quantized color bucket within a garment zone."""
    rgb: RGBModel
    hsl: HSLModel
    hex: str = Field(
        ...,
        pattern=r"^#[0-9A-Fa-f]{6}$",
        description="Hex color code in format #RRGGBB"
    )
    frequency: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Share of sampled pixels falling in this bucket"
    )


class ColorRecordModel(BaseModel):
    """Representative color of one garment."""
    rgb: RGBModel
    hsl: HSLModel
    hex: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$", description="Hex color code")
    name: str = Field(..., description="Human-readable color name")
    confidence: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Extraction confidence (1.0 for manually entered colors)"
    )
    dominant_colors: List[DominantColorModel] = Field(
        default_factory=list,
        description="Most frequent color buckets, most frequent first"
    )
    is_pattern: bool = Field(False, description="Whether the garment looks patterned")
    pixel_count: int = Field(0, ge=0, description="Opaque pixels sampled")
    filtered_count: int = Field(0, ge=0, description="Pixels left after skin rejection")


# ============================================================================
# JUDGMENT SCHEMAS
# ============================================================================

class HarmonyModel(BaseModel):
    """Harmony classification."""
    type: str = Field(..., description="Harmony label, e.g. 'Analogous'")
    score: int = Field(..., ge=0, le=100, description="Harmony score")
    explanation: str = Field(..., description="User-facing explanation")
    details: Dict[str, Any] = Field(default_factory=dict, description="Rule-specific diagnostics")


class MoodModel(BaseModel):
    """Detected outfit mood."""
    mood: str = Field(..., description="Mood label")
    emoji: str = Field(..., description="Display emoji")
    explanation: str = Field(..., description="User-facing explanation")


class ScoreBreakdownModel(BaseModel):
    """Points earned in one scoring category."""
    category: str
    points: int = Field(..., ge=0)
    max: int = Field(..., gt=0)
    detail: str


class ScoreModel(BaseModel):
    """Outfit score with per-category breakdown."""
    total: int = Field(..., ge=0, le=100, description="Overall outfit score")
    breakdown: List[ScoreBreakdownModel]


class GradeModel(BaseModel):
    """Letter grade for the score."""
    letter: str = Field(..., description="Grade letter (S, A+ ... F)")
    description: str
    color: str = Field(..., description="Display color token")


class TemperatureModel(BaseModel):
    """Warm/cool balance of the outfit."""
    dominant: str = Field(..., description="'warm', 'cool' or 'neutral'")
    warm_count: int = Field(..., ge=0)
    cool_count: int = Field(..., ge=0)
    neutral_count: int = Field(..., ge=0)
    coherence: float = Field(..., ge=0.0, le=1.0, description="Share of the dominant temperature")


class ContrastRatioModel(BaseModel):
    """WCAG contrast ratio between two garments."""
    pair: str = Field(..., description="Garment pair, e.g. 'Top ↔ Bottom'")
    ratio: float = Field(..., ge=1.0, description="WCAG 2.0 contrast ratio (1-21)")


class RectModel(BaseModel):
    x: int
    y: int
    width: int
    height: int


class ZoneModel(BaseModel):
    """Garment zone and its inset sampling rectangle."""
    x: int
    y: int
    width: int
    height: int
    label: str
    sampling_rect: RectModel


class AnalysisResponse(BaseModel):
    """Complete outfit analysis."""
    analysis_id: str = Field(..., description="Unique analysis identifier")
    timestamp: str = Field(..., description="ISO-8601 analysis time (UTC)")
    colors: Dict[str, ColorRecordModel] = Field(..., description="Garment key to color record")
    harmony: HarmonyModel
    confidence: int = Field(..., ge=0, le=100, description="Outfit confidence")
    mood: MoodModel
    score: ScoreModel
    grade: GradeModel
    suggestions: List[str] = Field(default_factory=list, description="Improvement suggestions")
    temperature: TemperatureModel
    contrast_ratios: List[ContrastRatioModel] = Field(default_factory=list)
    zones: Optional[Dict[str, ZoneModel]] = Field(
        None,
        description="Zone geometry, present when the analysis started from a photo"
    )


def to_response(analysis) -> AnalysisResponse:
    """Convert an OutfitAnalysis into its validated response model."""
    return AnalysisResponse.model_validate(analysis.to_dict())
