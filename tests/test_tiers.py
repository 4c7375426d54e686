"""
Tests for tier classification, display grades and transitions.
Run: pytest tests/ -v
"""
import math

import numpy as np
import pytest


# ═══════════════════════════════════════════════════════════════════════
# TIER CLASSIFIER
# ═══════════════════════════════════════════════════════════════════════

class TestTierPartition:
    """The six ranges cover [0, 100] with no gap or overlap."""

    def test_every_percentile_in_exactly_one_tier(self):
        from src.tiers import Tier, tier_for
        for p in np.linspace(0, 100, 20001):
            containing = [t for t in Tier if t.contains(p)]
            assert len(containing) == 1, p
            assert tier_for(p) is containing[0]

    @pytest.mark.parametrize("p, expected", [
        (0, "E"), (5.999, "E"), (6, "D"),
        (22.999, "D"), (23, "C"),
        (46.999, "C"), (47, "B"),
        (69.999, "B"), (70, "A"),
        (84.999, "A"), (85, "S"),
        (100, "S"),
    ])
    def test_lower_bounds_inclusive(self, p, expected):
        from src.tiers import tier_for
        assert tier_for(p).name == expected

    def test_85_is_s_not_a(self):
        from src.tiers import Tier, tier_for
        assert tier_for(85) is Tier.S
        assert tier_for(85.0) is not Tier.A

    @pytest.mark.parametrize("bad", [-0.001, 100.001, math.nan, "high", None])
    def test_outside_range_rejected(self, bad):
        from src.errors import InvalidInput
        from src.tiers import tier_for
        with pytest.raises(InvalidInput):
            tier_for(bad)

    def test_tiers_are_ordered(self):
        from src.tiers import Tier
        assert Tier.E < Tier.D < Tier.C < Tier.B < Tier.A < Tier.S
        assert sorted([Tier.S, Tier.E, Tier.B]) == [Tier.E, Tier.B, Tier.S]
        assert max(Tier) is Tier.S
        assert Tier.S.color == "#FFD700"
        assert str(Tier.A) == "A"


class TestGrades:
    """Cosmetic sub-grades never disagree with the base tier."""

    @pytest.mark.parametrize("p, grade", [
        (0, "E-"), (1, "E"), (5.5, "E+"), (6, "D-"), (84.9, "A+"),
        (85, "S-"), (90, "S"), (95, "S+"), (99, "S++"), (100, "S++"),
    ])
    def test_grade_for(self, p, grade):
        from src.tiers import grade_for
        assert grade_for(p) == grade

    def test_grade_base_matches_tier(self):
        from src.tiers import base_tier, grade_for, tier_for
        for p in np.linspace(0, 100, 5001):
            assert base_tier(grade_for(p)) is tier_for(p)

    def test_base_tier_strips_suffix(self):
        from src.tiers import Tier, base_tier
        assert base_tier("S++") is Tier.S
        assert base_tier("S-") is Tier.S
        assert base_tier("A") is Tier.A
        assert base_tier(Tier.C) is Tier.C

    def test_base_tier_unknown_grade(self):
        from src.errors import InvalidInput
        from src.tiers import base_tier
        with pytest.raises(InvalidInput):
            base_tier("Z+")

    def test_high_tier_styling(self):
        from src.tiers import is_high_tier
        assert is_high_tier("A-")
        assert is_high_tier("S++")
        assert not is_high_tier("B+")


class TestNextTierInfo:

    def test_points_to_next_grade(self):
        from src.tiers import next_tier_info
        info = next_tier_info(84.5)
        assert info == {"current": "A+", "next": "S-", "needed": 1}

    def test_mid_grade(self):
        from src.tiers import next_tier_info
        info = next_tier_info(50.2)
        assert info["current"] == "B-"
        assert info["next"] == "B"
        assert info["needed"] == 5

    def test_top_grade(self):
        from src.tiers import next_tier_info
        assert next_tier_info(99.5) == {"current": "S++", "next": None, "needed": 0}


# ═══════════════════════════════════════════════════════════════════════
# TIER TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════

class TestTransition:

    def test_same_percentile_no_change(self):
        from src.transitions import transition
        for p in (0, 6, 50, 85, 100):
            assert transition(p, p).tier_changed is False

    def test_b_to_a_boundary(self):
        from src.tiers import Tier
        from src.transitions import transition
        t = transition(69, 70)
        assert t.tier_changed is True
        assert (t.previous_tier, t.new_tier) == (Tier.B, Tier.A)
        assert t.is_rank_up

    def test_a_to_s_boundary(self):
        from src.tiers import Tier
        from src.transitions import transition
        t = transition(84, 85)
        assert t.tier_changed is True
        assert t.new_tier is Tier.S

    def test_sub_grade_move_is_not_a_transition(self):
        from src.transitions import transition
        t = transition(86, 96)
        assert (t.previous_grade, t.new_grade) == ("S-", "S+")
        assert t.tier_changed is False

    def test_rank_down(self):
        from src.transitions import transition
        t = transition(70, 69)
        assert t.tier_changed is True
        assert not t.is_rank_up
        assert t.percentile_delta == -1

    def test_invalid_percentile(self):
        from src.errors import InvalidInput
        from src.transitions import transition
        with pytest.raises(InvalidInput):
            transition(50, 101)
