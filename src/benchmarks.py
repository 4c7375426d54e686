"""
Strength Engine — Benchmark tables

A benchmark table maps (exercise_id, sex) to a population curve of
(percentile, relative_strength) control points. Tables are validated once
at load time and are immutable afterwards, so one instance can be shared by
any number of callers.

Datasets come in two shapes, and one dataset may mix both:

    "standards": {sex: {exercise_id: (ratio@10, ratio@25, ...)}}
        anchor ratios at "anchor_percentiles"; expanded into a full curve
        with a zero point and an extrapolated 100th-percentile tail.

    "curves": {sex: {exercise_id: {"points": [[pct, strength], ...],
                                   "scale": "relative" | "absolute"}}}
        explicit control points.
"""
import json
import logging
import math
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from src.benchmark_data import BENCHMARK_DATASETS
from src.errors import ConfigurationError

logger = logging.getLogger(__name__)

SCALES = ("relative", "absolute")

# Above the last anchor (90th) the standards gain 9 percentile
# points per 20% of the 90th-percentile ratio; the tail point continues that
# slope up to the 100th percentile.
TAIL_PERCENTILE = 100.0
TAIL_STRENGTH_FACTOR = 1 + 0.2 * 10 / 9


@dataclass(frozen=True)
class BenchmarkCurve:
    """Control points for one exercise/sex pair, ascending by percentile."""

    exercise_id: str
    sex: str
    points: tuple
    scale: str = "relative"

    def __post_init__(self) -> None:
        label = f"{self.exercise_id}/{self.sex}"
        if self.scale not in SCALES:
            raise ConfigurationError(f"{label}: unknown scale {self.scale!r}")
        if len(self.points) < 2:
            raise ConfigurationError(f"{label}: a curve needs at least two control points")
        prev_pct, prev_strength = None, None
        for pct, strength in self.points:
            if not (math.isfinite(pct) and math.isfinite(strength)):
                raise ConfigurationError(f"{label}: non-finite control point ({pct}, {strength})")
            if not 0 <= pct <= 100:
                raise ConfigurationError(f"{label}: percentile {pct} outside [0, 100]")
            if strength < 0:
                raise ConfigurationError(f"{label}: negative strength {strength}")
            if prev_pct is not None and pct <= prev_pct:
                raise ConfigurationError(f"{label}: percentiles must be strictly ascending")
            if prev_strength is not None and strength < prev_strength:
                raise ConfigurationError(
                    f"{label}: strength decreases from {prev_strength} to {strength} at p{pct}"
                )
            prev_pct, prev_strength = pct, strength

    @property
    def percentiles(self) -> tuple:
        return tuple(p for p, _ in self.points)

    @property
    def strengths(self) -> tuple:
        return tuple(s for _, s in self.points)


@dataclass(frozen=True, eq=False)
class BenchmarkTable:
    """
    Versioned, read-only collection of curves.

    Hashes by identity so it can key memoized computations.
    """

    version: str
    source: str = ""
    curves: Mapping = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "curves", MappingProxyType(dict(self.curves)))

    def curve_for(self, exercise_id: str, sex: str) -> BenchmarkCurve | None:
        return self.curves.get((exercise_id, str(sex).lower()))

    def exercise_ids(self, sex: str | None = None) -> set:
        return {eid for eid, s in self.curves if sex is None or s == str(sex).lower()}

    def __len__(self) -> int:
        return len(self.curves)


def standards_to_points(anchor_percentiles, ratios) -> tuple:
    """
    Expand anchor ratios into control points.

    Adds (0, 0.0) below the first anchor and a tail point at the 100th
    percentile, giving a curve that covers the whole [0, 100] range.
    """
    if len(anchor_percentiles) != len(ratios):
        raise ConfigurationError(
            f"expected {len(anchor_percentiles)} anchor ratios, got {len(ratios)}"
        )
    points = [(0.0, 0.0)]
    points += [(float(p), float(r)) for p, r in zip(anchor_percentiles, ratios)]
    if anchor_percentiles[-1] < TAIL_PERCENTILE:
        points.append((TAIL_PERCENTILE, float(ratios[-1]) * TAIL_STRENGTH_FACTOR))
    return tuple(points)


def load_benchmark_table(dataset: dict) -> BenchmarkTable:
    """Validate a dataset dict and build a BenchmarkTable. Raises ConfigurationError."""
    if not isinstance(dataset, dict):
        raise ConfigurationError("benchmark dataset must be a mapping")
    version = dataset.get("version")
    if not version:
        raise ConfigurationError("benchmark dataset has no version")

    curves = {}

    standards = dataset.get("standards", {})
    if not isinstance(standards, dict) or not isinstance(dataset.get("curves", {}), dict):
        raise ConfigurationError(f"{version}: standards and curves must be mappings by sex")
    if standards:
        anchors = tuple(dataset.get("anchor_percentiles", ()))
        if not anchors:
            raise ConfigurationError(f"{version}: standards given without anchor_percentiles")
        for sex, by_exercise in standards.items():
            if not isinstance(by_exercise, dict):
                raise ConfigurationError(f"{version}: standards for {sex!r} must be a mapping")
            for exercise_id, ratios in by_exercise.items():
                try:
                    points = standards_to_points(anchors, tuple(ratios))
                except ConfigurationError as e:
                    raise ConfigurationError(f"{exercise_id}/{sex}: {e}") from e
                except (TypeError, ValueError) as e:
                    raise ConfigurationError(f"{exercise_id}/{sex}: malformed ratios") from e
                curves[(exercise_id, sex.lower())] = BenchmarkCurve(exercise_id, sex.lower(), points)

    for sex, by_exercise in dataset.get("curves", {}).items():
        if not isinstance(by_exercise, dict):
            raise ConfigurationError(f"{version}: curves for {sex!r} must be a mapping")
        for exercise_id, entry in by_exercise.items():
            try:
                points = tuple((float(p), float(s)) for p, s in entry["points"])
            except (KeyError, TypeError, ValueError) as e:
                raise ConfigurationError(f"{exercise_id}/{sex}: malformed points") from e
            curves[(exercise_id, sex.lower())] = BenchmarkCurve(
                exercise_id, sex.lower(), points, entry.get("scale", "relative"),
            )

    if not curves:
        raise ConfigurationError(f"{version}: dataset contains no curves")

    logger.debug("Loaded benchmark table %s with %d curves", version, len(curves))
    return BenchmarkTable(version=str(version), source=dataset.get("source", ""), curves=curves)


def load_benchmark_file(path: str) -> BenchmarkTable:
    """Load a dataset from a JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            dataset = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{path}: invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigurationError(f"{path}: cannot read ({e})") from e
    return load_benchmark_table(dataset)


def empty_table(version: str = "unknown") -> BenchmarkTable:
    """A table with no curves: every lookup is "no data"."""
    return BenchmarkTable(version=version)


@lru_cache(maxsize=None)
def get_benchmark_table(version: str) -> BenchmarkTable:
    """
    Bundled table for a version, built once per process.

    An unrecognized version is not fatal: it yields an empty table so every
    percentile comes back as "no data".
    """
    dataset = BENCHMARK_DATASETS.get(version)
    if dataset is None:
        logger.warning("Unknown benchmark version %r, percentiles will be unavailable", version)
        return empty_table(version)
    return load_benchmark_table(dataset)
