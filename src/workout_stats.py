"""
Strength Engine — Workout stats

Per-workout totals (sets, reps, volume, cardio distance/time) and the merge
that rolls them up into day / week / all-time views.

Sets are tagged variants: WeightSet, CardioSet and TimedSet. The tracking
type comes from the variant, never from which fields happen to be filled,
so cardio distance can never leak into weight volume.

Totals are rounded to whole numbers once per workout. After that, combine()
is plain integer addition: associative, commutative, with ZERO_STATS as
identity. Rollups therefore give the same result in any order or chunking.
"""
import math
from dataclasses import dataclass, fields
from enum import Enum
from functools import reduce
from typing import ClassVar, Iterable

import pandas as pd

from src.config import KG_TO_LBS
from src.errors import InvalidInput
from src.percentile import to_lbs


class TrackingType(Enum):
    REPS = "reps"
    CARDIO = "cardio"
    TIMED = "timed"


def _non_negative(name: str, value) -> None:
    if value is None or not math.isfinite(value) or value < 0:
        raise InvalidInput(f"{name} must be a non-negative number, got {value!r}")


@dataclass(frozen=True)
class WeightSet:
    weight: float
    reps: int
    unit: str = "lbs"
    completed: bool = True

    tracking_type: ClassVar[TrackingType] = TrackingType.REPS

    def __post_init__(self) -> None:
        _non_negative("weight", self.weight)
        _non_negative("reps", self.reps)
        if self.reps != int(self.reps):
            raise InvalidInput(f"reps must be a whole number, got {self.reps!r}")
        object.__setattr__(self, "reps", int(self.reps))


@dataclass(frozen=True)
class CardioSet:
    distance_meters: float = 0.0
    duration_seconds: float = 0.0
    completed: bool = True

    tracking_type: ClassVar[TrackingType] = TrackingType.CARDIO

    def __post_init__(self) -> None:
        _non_negative("distance_meters", self.distance_meters)
        _non_negative("duration_seconds", self.duration_seconds)


@dataclass(frozen=True)
class TimedSet:
    """Planks, wall sits, dead hangs: counted as sets, no volume."""

    duration_seconds: float = 0.0
    completed: bool = True

    tracking_type: ClassVar[TrackingType] = TrackingType.TIMED

    def __post_init__(self) -> None:
        _non_negative("duration_seconds", self.duration_seconds)


@dataclass(frozen=True)
class ExerciseLog:
    """All sets of one exercise in one workout; every set has the same tracking type."""

    exercise_id: str
    sets: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sets", tuple(self.sets))
        kinds = {type(s) for s in self.sets}
        if not kinds <= {WeightSet, CardioSet, TimedSet}:
            raise InvalidInput(f"{self.exercise_id}: unsupported set type in {kinds}")
        if len(kinds) > 1:
            raise InvalidInput(f"{self.exercise_id}: mixed tracking types {sorted(k.__name__ for k in kinds)}")

    @property
    def tracking_type(self) -> TrackingType | None:
        return self.sets[0].tracking_type if self.sets else None


@dataclass(frozen=True)
class WorkoutStats:
    total_sets: int = 0
    total_reps: int = 0
    total_volume_lbs: int = 0
    total_distance_meters: int = 0
    total_cardio_duration_seconds: int = 0
    has_weighted_exercises: bool = False
    has_cardio_exercises: bool = False

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


ZERO_STATS = WorkoutStats()

_FLAG_FIELDS = ("has_weighted_exercises", "has_cardio_exercises")
_SUM_FIELDS = tuple(f.name for f in fields(WorkoutStats) if f.name not in _FLAG_FIELDS)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ═════════════════════════════════════════════════════════════════════
# 1. PER-WORKOUT STATS
# ═════════════════════════════════════════════════════════════════════

def stats_for(exercises: Iterable[ExerciseLog]) -> WorkoutStats:
    total_sets = 0
    total_reps = 0
    volume_lbs = 0.0
    distance = 0.0
    cardio_seconds = 0.0
    has_weighted = False
    has_cardio = False

    for exercise in exercises:
        for s in exercise.sets:
            if not s.completed:
                continue
            total_sets += 1
            if isinstance(s, WeightSet):
                total_reps += s.reps
                if s.weight > 0:
                    has_weighted = True
                    volume_lbs += to_lbs(s.weight, s.unit) * s.reps
            elif isinstance(s, CardioSet):
                has_cardio = True
                distance += s.distance_meters
                cardio_seconds += s.duration_seconds
            # TimedSet: counted above, nothing else to add

    return WorkoutStats(
        total_sets=total_sets,
        total_reps=total_reps,
        total_volume_lbs=_round_half_up(volume_lbs),
        total_distance_meters=_round_half_up(distance),
        total_cardio_duration_seconds=_round_half_up(cardio_seconds),
        has_weighted_exercises=has_weighted,
        has_cardio_exercises=has_cardio,
    )


# ═════════════════════════════════════════════════════════════════════
# 2. MERGE & ROLLUPS
# ═════════════════════════════════════════════════════════════════════

def combine(a: WorkoutStats, b: WorkoutStats) -> WorkoutStats:
    merged = {name: getattr(a, name) + getattr(b, name) for name in _SUM_FIELDS}
    merged.update({name: getattr(a, name) or getattr(b, name) for name in _FLAG_FIELDS})
    return WorkoutStats(**merged)


def combine_all(stats: Iterable[WorkoutStats]) -> WorkoutStats:
    return reduce(combine, stats, ZERO_STATS)


def period_start(day, period: str):
    """Key of the rollup bucket a date falls into."""
    if period == "all":
        return "all"
    ts = pd.Timestamp(day).normalize()
    if period == "day":
        return ts
    if period == "week":
        return ts - pd.Timedelta(days=ts.weekday())
    raise InvalidInput(f"unknown rollup period {period!r}")


def rollup_stats(dated_stats: Iterable[tuple], period: str = "week") -> dict:
    """{period_start: WorkoutStats} by folding combine() over each bucket."""
    buckets = {}
    for day, stats in dated_stats:
        key = period_start(day, period)
        buckets[key] = combine(buckets.get(key, ZERO_STATS), stats)
    return dict(sorted(buckets.items(), key=lambda kv: str(kv[0])))


def rollup(dated_stats: Iterable[tuple], period: str = "week") -> pd.DataFrame:
    """
    Day / week / all-time rollup as a DataFrame, one row per period.

    Weeks start on Monday. Numeric columns are summed and flags OR-ed, which
    matches rollup_stats() row for row.
    """
    rows = []
    for day, stats in dated_stats:
        rows.append({"period": period_start(day, period), **stats.as_dict()})
    columns = ["period", *_SUM_FIELDS, *_FLAG_FIELDS]
    if not rows:
        return pd.DataFrame(columns=columns).set_index("period")

    df = pd.DataFrame(rows, columns=columns)
    agg = {name: "sum" for name in _SUM_FIELDS}
    agg.update({name: "any" for name in _FLAG_FIELDS})
    out = df.groupby("period").agg(agg)
    out[list(_SUM_FIELDS)] = out[list(_SUM_FIELDS)].astype(int)
    out[list(_FLAG_FIELDS)] = out[list(_FLAG_FIELDS)].astype(bool)
    return out


def row_to_stats(row) -> WorkoutStats:
    """Turn one rollup() row back into WorkoutStats."""
    values = {name: int(row[name]) for name in _SUM_FIELDS}
    values.update({name: bool(row[name]) for name in _FLAG_FIELDS})
    return WorkoutStats(**values)


# ═════════════════════════════════════════════════════════════════════
# 3. DISPLAY
# ═════════════════════════════════════════════════════════════════════

def format_volume(volume_lbs: float, unit: str = "lbs") -> str:
    volume = volume_lbs / KG_TO_LBS if unit == "kg" else volume_lbs
    formatted = f"{volume / 1000:.1f}k" if volume >= 1000 else f"{_round_half_up(volume):,}"
    return f"{formatted} {unit}"


def format_duration(seconds: float) -> str:
    """M:SS, or H:MM:SS past an hour."""
    if not seconds or seconds <= 0:
        return "0:00"
    seconds = int(seconds)
    hours, rem = divmod(seconds, 3600)
    mins, secs = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{mins:02d}:{secs:02d}"
    return f"{mins}:{secs:02d}"


def format_distance(meters: float) -> str:
    if not meters or meters <= 0:
        return ""
    if meters >= 1000:
        km = meters / 1000
        return f"{km:.0f}km" if km == int(km) else f"{km:.1f}km"
    return f"{_round_half_up(meters)}m"


def format_stats_line(stats: WorkoutStats, unit: str = "lbs", show_set_count: bool = True) -> str:
    """
    One-line summary for cards and feed items.

    Weights only: "8 sets · 45.2k lbs"
    Cardio only:  "45:00 · 8.5km"
    Mixed:        "8 sets · 45.2k lbs · 5km · 20:00 cardio"
    """
    parts = []

    if stats.has_cardio_exercises and not stats.has_weighted_exercises:
        if stats.total_cardio_duration_seconds > 0:
            parts.append(format_duration(stats.total_cardio_duration_seconds))
        if stats.total_distance_meters > 0:
            parts.append(format_distance(stats.total_distance_meters))
        return " · ".join(parts) if parts else "—"

    if show_set_count and stats.total_sets > 0:
        parts.append(f"{stats.total_sets} sets")
    if stats.has_weighted_exercises and stats.total_volume_lbs > 0:
        parts.append(format_volume(stats.total_volume_lbs, unit))
    if stats.has_cardio_exercises:
        if stats.total_distance_meters > 0:
            parts.append(format_distance(stats.total_distance_meters))
        if stats.total_cardio_duration_seconds > 0:
            parts.append(f"{format_duration(stats.total_cardio_duration_seconds)} cardio")

    return " · ".join(parts) if parts else "—"



def format_aggregate_stats(stats: WorkoutStats, unit: str = "lbs") -> str:
    """
    Weekly / monthly totals, no set count: "125.0k lbs · 25km · 2.1h cardio".

    Cardio of an hour or more is shown in hours.
    """
    parts = []
    if stats.has_weighted_exercises and stats.total_volume_lbs > 0:
        parts.append(format_volume(stats.total_volume_lbs, unit))
    if stats.has_cardio_exercises:
        if stats.total_distance_meters > 0:
            parts.append(format_distance(stats.total_distance_meters))
        seconds = stats.total_cardio_duration_seconds
        if seconds >= 3600:
            parts.append(f"{seconds / 3600:.1f}h cardio")
        elif seconds > 0:
            parts.append(f"{format_duration(seconds)} cardio")
    return " · ".join(parts) if parts else "—"
