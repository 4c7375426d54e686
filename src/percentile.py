"""
Strength Engine — Percentile calculator

One lift observation -> one population percentile:

1. normalize weight and bodyweight to lbs,
2. estimate a single-rep max from weight x reps,
3. divide by bodyweight (relative curves) or keep the raw max (absolute),
4. interpolate linearly on the benchmark curve for (exercise, sex).

A missing curve means "no data" and returns None. Invalid numbers raise
InvalidInput even though ingestion is expected to have validated them.
For fixed exercise/sex/bodyweight the result never decreases when weight
or reps increase.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

import numpy as np

from src.benchmarks import BenchmarkTable
from src.config import KG_TO_LBS
from src.errors import ConfigurationError, InvalidInput

POLICIES = ("best", "latest")
BRZYCKI_MAX_REPS = 12


@dataclass(frozen=True)
class LiftObservation:
    exercise_id: str
    weight_value: float
    unit: str
    reps: int
    bodyweight_value: float
    sex: str
    timestamp: datetime | None = None
    bodyweight_unit: str | None = None  # defaults to unit


@dataclass(frozen=True)
class ExercisePercentile:
    exercise_id: str
    percentile: float
    timestamp: datetime | None = None
    estimated_max_lbs: float | None = None


# ═════════════════════════════════════════════════════════════════════
# 1. UNITS & ONE-REP MAX
# ═════════════════════════════════════════════════════════════════════

def to_lbs(value: float, unit: str) -> float:
    unit = str(unit).lower()
    if unit in ("lbs", "lb"):
        return float(value)
    if unit == "kg":
        return float(value) * KG_TO_LBS
    raise InvalidInput(f"unknown weight unit {unit!r}")


def epley(weight: float, reps: float) -> float:
    """weight × (1 + reps/30)"""
    return weight * (1 + reps / 30)


def brzycki(weight: float, reps: float) -> float:
    """weight × 36 / (37 - reps); reps above 12 are evaluated at 12."""
    reps = min(reps, BRZYCKI_MAX_REPS)
    return weight * 36 / (37 - reps)


def lombardi(weight: float, reps: float) -> float:
    """weight × reps^0.1"""
    return weight * reps ** 0.1


def average(weight: float, reps: float) -> float:
    return (epley(weight, reps) + brzycki(weight, reps) + lombardi(weight, reps)) / 3


ONE_REP_MAX_FORMULAS = {
    "epley": epley,
    "brzycki": brzycki,
    "lombardi": lombardi,
    "average": average,
}


def estimate_one_rep_max(weight: float, reps: int, formula: str = "epley") -> float:
    """Single-effort equivalent of weight × reps. A single rep is taken as-is."""
    try:
        fn = ONE_REP_MAX_FORMULAS[formula]
    except KeyError:
        raise ConfigurationError(f"unknown one-rep-max formula {formula!r}") from None
    if reps == 1:
        return float(weight)
    return float(fn(weight, reps))


# ═════════════════════════════════════════════════════════════════════
# 2. PERCENTILE LOOKUP
# ═════════════════════════════════════════════════════════════════════

def _validate(weight_value, reps, bodyweight_value) -> None:
    for name, value in (("weight", weight_value), ("reps", reps), ("bodyweight", bodyweight_value)):
        if value is None or not math.isfinite(value):
            raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    if reps < 1:
        raise InvalidInput(f"reps must be >= 1, got {reps}")
    if weight_value < 0:
        raise InvalidInput(f"weight must be >= 0, got {weight_value}")
    if bodyweight_value <= 0:
        raise InvalidInput(f"bodyweight must be > 0, got {bodyweight_value}")


def interpolate_percentile(curve, strength: float) -> float:
    """
    Piecewise-linear lookup of strength on a curve.

    Below the first control point -> 0, above the last -> 100.
    """
    strengths = np.asarray(curve.strengths, dtype=float)
    percentiles = np.asarray(curve.percentiles, dtype=float)
    if strength < strengths[0]:
        return 0.0
    if strength > strengths[-1]:
        return 100.0
    # side="right" skips flat segments so the bracket always has hi > lo
    idx = int(np.searchsorted(strengths, strength, side="right"))
    if idx >= len(strengths):
        return float(percentiles[-1])
    lo, hi = idx - 1, idx
    frac = (strength - strengths[lo]) / (strengths[hi] - strengths[lo])
    pct = percentiles[lo] + frac * (percentiles[hi] - percentiles[lo])
    return float(min(100.0, max(0.0, pct)))


def percentile_for(
    exercise_id: str,
    weight_value: float,
    unit: str,
    reps: int,
    bodyweight_value: float,
    sex: str,
    *,
    table: BenchmarkTable,
    formula: str = "epley",
    bodyweight_unit: str | None = None,
) -> float | None:
    """
    Population percentile of one lift, or None when no benchmark exists.

    Raises InvalidInput for reps < 1, weight < 0 or bodyweight <= 0.
    """
    _validate(weight_value, reps, bodyweight_value)
    weight_lbs = to_lbs(weight_value, unit)
    bodyweight_lbs = to_lbs(bodyweight_value, bodyweight_unit or unit)

    curve = table.curve_for(exercise_id, sex)
    if curve is None:
        return None

    estimated_max = estimate_one_rep_max(weight_lbs, reps, formula)
    if curve.scale == "absolute":
        strength = estimated_max
    else:
        strength = estimated_max / bodyweight_lbs
    return interpolate_percentile(curve, strength)


def percentile_for_observation(
    observation: LiftObservation, *, table: BenchmarkTable, formula: str = "epley",
) -> float | None:
    return percentile_for(
        observation.exercise_id,
        observation.weight_value,
        observation.unit,
        observation.reps,
        observation.bodyweight_value,
        observation.sex,
        table=table,
        formula=formula,
        bodyweight_unit=observation.bodyweight_unit,
    )


# ═════════════════════════════════════════════════════════════════════
# 3. CURRENT PERCENTILE PER EXERCISE
# ═════════════════════════════════════════════════════════════════════

def _sort_key(entry: ExercisePercentile):
    # Entries without timestamp sort as oldest
    ts = entry.timestamp
    return (ts is not None, ts.timestamp() if ts is not None else 0.0)


def current_percentiles(
    observations: Iterable[LiftObservation],
    *,
    table: BenchmarkTable,
    policy: str = "best",
    formula: str = "epley",
) -> dict:
    """
    One ExercisePercentile per exercise that has benchmark data.

    policy "best":   highest percentile over the observations (ties -> latest)
    policy "latest": most recent observation wins
    """
    if policy not in POLICIES:
        raise ConfigurationError(f"unknown percentile policy {policy!r}")

    current = {}
    for obs in observations:
        pct = percentile_for_observation(obs, table=table, formula=formula)
        if pct is None:
            continue
        entry = ExercisePercentile(
            exercise_id=obs.exercise_id,
            percentile=pct,
            timestamp=obs.timestamp,
            estimated_max_lbs=round(estimate_one_rep_max(to_lbs(obs.weight_value, obs.unit), obs.reps, formula), 1),
        )
        prev = current.get(obs.exercise_id)
        if prev is None:
            current[obs.exercise_id] = entry
        elif policy == "best":
            if (entry.percentile, _sort_key(entry)) >= (prev.percentile, _sort_key(prev)):
                current[obs.exercise_id] = entry
        elif _sort_key(entry) >= _sort_key(prev):
            current[obs.exercise_id] = entry
    return current
