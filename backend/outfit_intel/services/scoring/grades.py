"""
Letter grades for outfit scores.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Grade:
    letter: str
    description: str
    color: str  # display color token for the UI

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# (lower bound inclusive, grade), highest first
GRADE_TIERS: Tuple[Tuple[int, Grade], ...] = (
    (95, Grade("S", "Perfection! Runway-ready.", "purple")),
    (90, Grade("A+", "Outstanding! A masterclass in color.", "green")),
    (85, Grade("A", "Excellent: polished and intentional.", "green")),
    (80, Grade("B+", "Very Good: minor tweaks away from great.", "blue")),
    (75, Grade("B", "Good: solid color choices.", "blue")),
    (70, Grade("C+", "Above Average: room to improve.", "yellow")),
    (65, Grade("C", "Average: safe but unremarkable.", "yellow")),
    (58, Grade("D+", "Below Average: some clashing.", "orange")),
    (50, Grade("D", "Weak: needs rethinking.", "orange")),
    (40, Grade("E", "Poor: significant color issues.", "red")),
)

FAILING_GRADE = Grade("F", "Fail: complete color mismatch.", "red")


def get_grade(score: float) -> Grade:
    """Map a 0-100 score to its grade tier."""
    for lower_bound, grade in GRADE_TIERS:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE
