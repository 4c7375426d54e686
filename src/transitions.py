"""
Strength Engine — Tier transitions

Flags a "rank up" (or down) between two overall percentiles. Only a change
of base tier counts: moving from "A-" to "A+" is cosmetic and does not
trigger the celebration overlay. Deciding when to call this (after a new PR
is saved) is the caller's job.
"""
from dataclasses import dataclass

from src.tiers import Tier, base_tier, grade_for, tier_for


@dataclass(frozen=True)
class TierTransition:
    previous_percentile: float
    new_percentile: float
    previous_tier: Tier
    new_tier: Tier
    previous_grade: str
    new_grade: str
    tier_changed: bool

    @property
    def is_rank_up(self) -> bool:
        return self.new_tier > self.previous_tier

    @property
    def percentile_delta(self) -> float:
        return self.new_percentile - self.previous_percentile


def transition(previous_percentile: float, new_percentile: float) -> TierTransition:
    previous_tier = tier_for(previous_percentile)
    new_tier = tier_for(new_percentile)
    return TierTransition(
        previous_percentile=float(previous_percentile),
        new_percentile=float(new_percentile),
        previous_tier=previous_tier,
        new_tier=new_tier,
        previous_grade=grade_for(previous_percentile),
        new_grade=grade_for(new_percentile),
        tier_changed=base_tier(previous_tier) != base_tier(new_tier),
    )
