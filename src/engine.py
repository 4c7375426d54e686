"""
Strength Engine — Event-driven facade

Holds one user's lifts and profile, and recomputes the overall score only
when data changes: a lift is recorded or the profile is updated. Reading
`overall` never triggers work. Recomputation is memoized on its inputs
(table identity, the frozen observations, settings), so replaying the same
state costs a cache lookup.

The profile is passed in explicitly and never read from ambient state.
"""
import logging
from dataclasses import dataclass, replace
from datetime import datetime
from functools import lru_cache

from src.benchmarks import BenchmarkTable
from src.config import CANONICAL_UNIT, ONE_RM_FORMULA, PERCENTILE_POLICY, SEXES
from src.errors import InvalidInput
from src.overall import OverallStats, improvement_trend, overall_stats_for
from src.percentile import LiftObservation, current_percentiles, percentile_for_observation
from src.transitions import TierTransition, transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    bodyweight_value: float
    sex: str
    unit: str = CANONICAL_UNIT

    def __post_init__(self) -> None:
        if self.sex not in SEXES:
            raise InvalidInput(f"sex must be one of {SEXES}, got {self.sex!r}")
        if not self.bodyweight_value or self.bodyweight_value <= 0:
            raise InvalidInput(f"bodyweight must be > 0, got {self.bodyweight_value!r}")


@lru_cache(maxsize=256)
def compute_overall(
    table: BenchmarkTable,
    observations: tuple,
    formula: str = "epley",
    policy: str = "best",
    weights: tuple = (),
) -> OverallStats:
    """Memoized observations -> OverallStats. All arguments must be hashable."""
    percentiles = current_percentiles(observations, table=table, policy=policy, formula=formula)
    return overall_stats_for(percentiles, weights=dict(weights) or None)


class StrengthEngine:
    def __init__(
        self,
        table: BenchmarkTable,
        profile: Profile,
        *,
        formula: str = ONE_RM_FORMULA,
        policy: str = PERCENTILE_POLICY,
        weights: dict | None = None,
    ):
        self.table = table
        self.profile = profile
        self.formula = formula
        self.policy = policy
        self.weights = tuple(sorted((weights or {}).items()))
        self._observations: tuple = ()
        self._history: list = []
        self._overall = self._recompute()

    @property
    def overall(self) -> OverallStats:
        return self._overall

    @property
    def exercise_percentiles(self) -> dict:
        return dict(self._overall.per_exercise)

    @property
    def observations(self) -> tuple:
        return self._observations

    @property
    def trend(self) -> str:
        return improvement_trend(self._history)

    def _recompute(self) -> OverallStats:
        before = compute_overall.cache_info().hits
        overall = compute_overall(self.table, self._observations, self.formula, self.policy, self.weights)
        logger.debug(
            "Recomputed overall stats (%d observations, cache %s): %s",
            len(self._observations),
            "hit" if compute_overall.cache_info().hits > before else "miss",
            overall.overall_percentile,
        )
        return overall

    def _apply(self, observations: tuple) -> TierTransition:
        previous = self._overall
        self._observations = observations
        self._overall = self._recompute()
        if self._overall.has_data:
            self._history.append(self._overall.overall_percentile)

        result = transition(
            previous.overall_percentile if previous.has_data else 0.0,
            self._overall.overall_percentile if self._overall.has_data else 0.0,
        )
        if result.tier_changed:
            logger.info("Tier changed %s -> %s", result.previous_tier.name, result.new_tier.name)
        return result

    def record_lift(
        self,
        exercise_id: str,
        weight_value: float,
        reps: int,
        unit: str | None = None,
        timestamp: datetime | None = None,
    ) -> TierTransition:
        """New set saved: store it, recompute, and report the tier transition."""
        observation = LiftObservation(
            exercise_id=exercise_id,
            weight_value=weight_value,
            unit=unit or self.profile.unit,
            reps=reps,
            bodyweight_value=self.profile.bodyweight_value,
            sex=self.profile.sex,
            timestamp=timestamp,
            bodyweight_unit=self.profile.unit,
        )
        # Reject bad input before it becomes part of the state
        percentile_for_observation(observation, table=self.table, formula=self.formula)
        return self._apply(self._observations + (observation,))

    def update_profile(self, profile: Profile) -> TierTransition:
        """Profile changed: percentiles are re-evaluated against the new bodyweight/sex."""
        restamped = tuple(
            replace(
                obs,
                bodyweight_value=profile.bodyweight_value,
                sex=profile.sex,
                bodyweight_unit=profile.unit,
            )
            for obs in self._observations
        )
        for obs in restamped:
            percentile_for_observation(obs, table=self.table, formula=self.formula)
        self.profile = profile
        return self._apply(restamped)
