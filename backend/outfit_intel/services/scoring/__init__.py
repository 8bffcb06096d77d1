"""
Outfit Intelligence Scoring Engine

Outfit score (six weighted sub-scores), outfit confidence, mood detection
and letter grades. Scores use bell curves around ideal values instead of
hard thresholds wherever a quantity has a sweet spot.
"""

from .confidence import calculate_confidence
from .grades import Grade, GRADE_TIERS, get_grade
from .mood import Mood, MoodResult, MOOD_RULES, detect_mood
from .outfit_score import ScoreBreakdownItem, ScoreResult, calculate_outfit_score

__all__ = [
    "calculate_confidence",
    "Grade",
    "GRADE_TIERS",
    "get_grade",
    "Mood",
    "MoodResult",
    "MOOD_RULES",
    "detect_mood",
    "ScoreBreakdownItem",
    "ScoreResult",
    "calculate_outfit_score",
]
