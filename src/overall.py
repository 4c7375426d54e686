"""
Strength Engine — Overall strength score

Combines per-exercise percentiles into one overall percentile and tier.

- no exercises      -> overall_percentile None, display 0, lowest tier
                       shown as a placeholder (has_data=False)
- one exercise      -> exactly that exercise's percentile
- several exercises -> weighted mean (equal weights unless configured)

The tier comes from the unrounded value; display_percentile is the rounded
value shown to users. The function is pure: the same input always gives the
same OverallStats.
"""
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import numpy as np

from src.errors import InvalidInput
from src.percentile import ExercisePercentile
from src.tiers import Tier, grade_for, tier_for


@dataclass(frozen=True)
class OverallStats:
    overall_percentile: float | None
    strength_level: Tier
    grade: str
    per_exercise: Mapping = field(default_factory=dict)
    has_data: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_exercise", MappingProxyType(dict(self.per_exercise)))

    @property
    def display_percentile(self) -> int:
        """Whole-number percentile for display; 0 when there is no data."""
        if self.overall_percentile is None:
            return 0
        return int(math.floor(self.overall_percentile + 0.5))


NO_DATA_STATS = OverallStats(
    overall_percentile=None, strength_level=Tier.E, grade=grade_for(0), has_data=False,
)


def _entries(exercise_percentiles: Mapping) -> dict:
    """Normalize values to ExercisePercentile and drop "no data" (None) entries."""
    entries = {}
    for exercise_id, value in exercise_percentiles.items():
        if value is None:
            continue
        if not isinstance(value, ExercisePercentile):
            value = ExercisePercentile(exercise_id=exercise_id, percentile=value)
        pct = value.percentile
        if pct is None:
            continue
        if not isinstance(pct, (int, float)) or math.isnan(pct) or not 0 <= pct <= 100:
            raise InvalidInput(f"{exercise_id}: percentile must be within [0, 100], got {pct!r}")
        entries[exercise_id] = value
    return entries


def overall_stats_for(exercise_percentiles: Mapping, weights: Mapping | None = None) -> OverallStats:
    """
    Overall percentile and tier from {exercise_id: percentile}.

    Values may be floats, ExercisePercentile or None. weights maps
    exercise_id -> weight (missing ids weigh 1.0).
    """
    entries = _entries(exercise_percentiles)
    if not entries:
        return NO_DATA_STATS

    ids = sorted(entries)
    values = [float(entries[eid].percentile) for eid in ids]

    if len(values) == 1:
        overall = values[0]
    else:
        w = [float((weights or {}).get(eid, 1.0)) for eid in ids]
        if any(x < 0 or math.isnan(x) for x in w):
            raise InvalidInput(f"weights must be non-negative, got {dict(zip(ids, w))}")
        if sum(w) == 0:
            raise InvalidInput("weights of the tracked exercises sum to zero")
        overall = float(np.average(values, weights=w))
        overall = min(100.0, max(0.0, overall))

    return OverallStats(
        overall_percentile=overall,
        strength_level=tier_for(overall),
        grade=grade_for(overall),
        per_exercise=entries,
        has_data=True,
    )


# ═════════════════════════════════════════════════════════════════════
# BREAKDOWNS — muscle groups, top lifts, trend
# ═════════════════════════════════════════════════════════════════════

def muscle_group_percentiles(exercise_percentiles: Mapping, muscle_map: Mapping) -> dict:
    """
    Mean percentile per muscle group.

    muscle_map: {exercise_id: [muscle groups]}. Groups without data are omitted.
    """
    groups = {}
    for exercise_id, entry in _entries(exercise_percentiles).items():
        for group in muscle_map.get(exercise_id, []):
            groups.setdefault(group, []).append(float(entry.percentile))
    return {g: round(float(np.mean(v)), 1) for g, v in sorted(groups.items())}


def top_contributions(exercise_percentiles: Mapping, limit: int = 5) -> list:
    """Highest-percentile exercises first; ties in id order."""
    entries = _entries(exercise_percentiles)
    ranked = sorted(entries.values(), key=lambda e: (-e.percentile, e.exercise_id))
    return [
        {"exercise_id": e.exercise_id, "percentile": e.percentile, "tier": tier_for(e.percentile).name}
        for e in ranked[:limit]
    ]


def improvement_trend(history, window: int = 3, tolerance: float = 1.0) -> str:
    """
    "improving" / "stable" / "declining" from chronological overall percentiles.

    Mean of the last `window` values vs the `window` before them; moves within
    `tolerance` percentile points count as stable. None values are skipped.
    """
    values = [float(v) for v in history if v is not None]
    if len(values) < 2:
        return "stable"
    if len(values) > window:
        recent, earlier = values[-window:], values[-2 * window:-window]
    else:
        half = len(values) // 2
        recent, earlier = values[half:], values[:half]
    delta = float(np.mean(recent)) - float(np.mean(earlier))
    if delta > tolerance:
        return "improving"
    if delta < -tolerance:
        return "declining"
    return "stable"
