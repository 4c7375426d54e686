"""
Strength Engine — Tier classification

Six ordered tiers partition [0, 100]. Every lower bound is inclusive, and
the top tier also includes 100:

    E [0, 6)  D [6, 23)  C [23, 47)  B [47, 70)  A [70, 85)  S [85, 100]

So a percentile of exactly 85 is S, not A, and the same holds at 6, 23,
47 and 70.

Display grades ("S+", "A-", "S++", ...) split each tier further. They are
only for display: base_tier() maps any grade back to its tier, and only the
tier counts for transitions.
"""
import math
from enum import Enum

from src.errors import InvalidInput


class Tier(Enum):
    E = (0, 0.0, 6.0, "#808080")
    D = (1, 6.0, 23.0, "#808080")
    C = (2, 23.0, 47.0, "#2E8B57")
    B = (3, 47.0, 70.0, "#3558C0")
    A = (4, 70.0, 85.0, "#9932CC")
    S = (5, 85.0, 100.0, "#FFD700")

    def __init__(self, rank, lower, upper, color):
        self.rank = rank
        self.lower = lower
        self.upper = upper
        self.color = color

    def contains(self, percentile: float) -> bool:
        if self is Tier.S:
            return self.lower <= percentile <= self.upper
        return self.lower <= percentile < self.upper

    def __lt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, Tier):
            return NotImplemented
        return self.rank >= other.rank

    def __str__(self):
        return self.name


# Ascending by threshold; a grade applies from its threshold up to the next one.
GRADE_THRESHOLDS = [
    ("E-", 0), ("E", 1), ("E+", 3),
    ("D-", 6), ("D", 11), ("D+", 17),
    ("C-", 23), ("C", 31), ("C+", 39),
    ("B-", 47), ("B", 55), ("B+", 63),
    ("A-", 70), ("A", 75), ("A+", 80),
    ("S-", 85), ("S", 90), ("S+", 95), ("S++", 99),
]
GRADES = tuple(label for label, _ in GRADE_THRESHOLDS)


def _check_percentile(percentile) -> float:
    try:
        value = float(percentile)
    except (TypeError, ValueError):
        raise InvalidInput(f"percentile must be a number, got {percentile!r}") from None
    if math.isnan(value) or not 0 <= value <= 100:
        raise InvalidInput(f"percentile must be within [0, 100], got {percentile!r}")
    return value


def tier_for(percentile: float) -> Tier:
    """Tier for a percentile in [0, 100]. Raises InvalidInput outside that range."""
    value = _check_percentile(percentile)
    for tier in reversed(Tier):
        if value >= tier.lower:
            return tier
    return Tier.E


def grade_for(percentile: float) -> str:
    """Display sub-grade, e.g. 86 -> "S-", 99.5 -> "S++"."""
    value = _check_percentile(percentile)
    grade = GRADES[0]
    for label, threshold in GRADE_THRESHOLDS:
        if value >= threshold:
            grade = label
        else:
            break
    return grade


def base_tier(tier_or_grade) -> Tier:
    """Strip any cosmetic suffix: "S+" -> Tier.S, "A-" -> Tier.A."""
    if isinstance(tier_or_grade, Tier):
        return tier_or_grade
    label = str(tier_or_grade).strip()
    if label not in GRADES:
        raise InvalidInput(f"unknown tier or grade {tier_or_grade!r}")
    return Tier[label[0]]


def is_high_tier(tier_or_grade) -> bool:
    """A and S get the "high tier" styling."""
    return base_tier(tier_or_grade) >= Tier.A


def next_tier_info(percentile: float) -> dict:
    """
    Current grade, the next grade up and the whole percentile points needed.

    At the top grade: next is None and needed is 0.
    """
    value = _check_percentile(percentile)
    current = grade_for(value)
    for label, threshold in GRADE_THRESHOLDS:
        if threshold > value:
            return {"current": current, "next": label, "needed": threshold - math.floor(value)}
    return {"current": current, "next": None, "needed": 0}
