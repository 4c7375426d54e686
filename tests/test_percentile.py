"""
Tests for one-rep-max estimation, percentile lookup and per-exercise
current values.
Run: pytest tests/ -v
"""
import math
from datetime import datetime, timedelta

import pytest


# ═══════════════════════════════════════════════════════════════════════
# UNITS & ONE-REP MAX
# ═══════════════════════════════════════════════════════════════════════

class TestOneRepMax:

    def test_epley(self):
        from src.percentile import estimate_one_rep_max
        assert estimate_one_rep_max(100, 10) == pytest.approx(133.333, abs=0.001)
        assert estimate_one_rep_max(315, 5) == pytest.approx(367.5)

    def test_single_rep_is_raw_weight(self):
        from src.percentile import ONE_REP_MAX_FORMULAS, estimate_one_rep_max
        for formula in ONE_REP_MAX_FORMULAS:
            assert estimate_one_rep_max(225, 1, formula) == 225.0

    def test_brzycki_caps_reps(self):
        from src.percentile import estimate_one_rep_max
        assert estimate_one_rep_max(100, 10, "brzycki") == pytest.approx(133.333, abs=0.001)
        assert estimate_one_rep_max(100, 20, "brzycki") == pytest.approx(144.0)
        assert estimate_one_rep_max(100, 20, "brzycki") == estimate_one_rep_max(100, 12, "brzycki")

    def test_average(self):
        from src.percentile import brzycki, epley, estimate_one_rep_max, lombardi
        expected = (epley(200, 5) + brzycki(200, 5) + lombardi(200, 5)) / 3
        assert estimate_one_rep_max(200, 5, "average") == pytest.approx(expected)

    def test_unknown_formula(self):
        from src.errors import ConfigurationError
        from src.percentile import estimate_one_rep_max
        with pytest.raises(ConfigurationError):
            estimate_one_rep_max(100, 5, "wathan")

    def test_to_lbs(self):
        from src.errors import InvalidInput
        from src.percentile import to_lbs
        assert to_lbs(100, "kg") == pytest.approx(220.462)
        assert to_lbs(100, "LBS") == 100.0
        with pytest.raises(InvalidInput):
            to_lbs(100, "stone")


# ═══════════════════════════════════════════════════════════════════════
# PERCENTILE LOOKUP
# ═══════════════════════════════════════════════════════════════════════

class TestPercentileFor:

    def test_known_lift_is_deterministic(self, table):
        """315 × 5 at 180 lbs: e1RM 367.5, ratio 2.042, between p50 (1.5) and p75 (2.2)."""
        from src.percentile import percentile_for
        expected = 50 + 25 * ((367.5 / 180) - 1.5) / 0.7
        results = {
            percentile_for("squat-barbell", 315, "lbs", 5, 180, "male", table=table)
            for _ in range(5)
        }
        assert len(results) == 1
        assert results.pop() == pytest.approx(expected)
        assert expected == pytest.approx(69.345, abs=0.001)

    def test_anchor_points_hit_exactly(self, table):
        from src.percentile import percentile_for
        # 1.25 × bodyweight single = male squat p25
        assert percentile_for("squat-barbell", 225, "lbs", 1, 180, "male", table=table) == pytest.approx(25.0)

    def test_kg_matches_lbs(self, table):
        from src.percentile import percentile_for
        kg = percentile_for("squat-barbell", 100, "kg", 1, 80, "male", table=table)
        lbs = percentile_for("squat-barbell", 100 * 2.20462, "lbs", 1, 80 * 2.20462, "male", table=table)
        assert kg == pytest.approx(lbs)
        assert kg == pytest.approx(25.0)

    def test_mixed_bodyweight_unit(self, table):
        from src.percentile import percentile_for
        mixed = percentile_for("squat-barbell", 100, "kg", 1, 176.3696, "male", table=table, bodyweight_unit="lbs")
        assert mixed == pytest.approx(25.0)

    def test_monotonic_in_weight_and_reps(self, table):
        from src.percentile import ONE_REP_MAX_FORMULAS, percentile_for
        for formula in ONE_REP_MAX_FORMULAS:
            for reps in (1, 3, 5, 8, 12, 15, 20):
                prev = -1.0
                for weight in range(0, 700, 5):
                    p = percentile_for("deadlift-barbell", weight, "lbs", reps, 190, "male",
                                       table=table, formula=formula)
                    assert p >= prev, (formula, reps, weight)
                    prev = p
            for weight in (95, 225, 405):
                prev = -1.0
                for reps in range(1, 31):
                    p = percentile_for("deadlift-barbell", weight, "lbs", reps, 190, "male",
                                       table=table, formula=formula)
                    assert p >= prev, (formula, weight, reps)
                    prev = p

    def test_clamped_to_range(self, table):
        from src.percentile import percentile_for
        assert percentile_for("squat-barbell", 0, "lbs", 1, 180, "male", table=table) == 0.0
        assert percentile_for("squat-barbell", 2000, "lbs", 5, 120, "male", table=table) == 100.0

    def test_no_data_is_none(self, table):
        from src.benchmarks import empty_table
        from src.percentile import percentile_for
        assert percentile_for("zercher-squat", 200, "lbs", 5, 180, "male", table=table) is None
        assert percentile_for("plank", 200, "lbs", 5, 180, "male", table=table) is None
        assert percentile_for("squat-barbell", 200, "lbs", 5, 180, "other", table=table) is None
        assert percentile_for("squat-barbell", 200, "lbs", 5, 180, "male", table=empty_table()) is None

    @pytest.mark.parametrize("weight, reps, bodyweight", [
        (200, 0, 180),
        (-5, 5, 180),
        (200, 5, 0),
        (200, 5, -80),
        (math.nan, 5, 180),
        (200, 5, math.inf),
    ])
    def test_invalid_input(self, table, weight, reps, bodyweight):
        from src.errors import InvalidInput
        from src.percentile import percentile_for
        with pytest.raises(InvalidInput):
            percentile_for("squat-barbell", weight, "lbs", reps, bodyweight, "male", table=table)

    def test_invalid_input_checked_before_lookup(self):
        from src.benchmarks import empty_table
        from src.errors import InvalidInput
        from src.percentile import percentile_for
        with pytest.raises(InvalidInput):
            percentile_for("anything", 100, "lbs", 0, 180, "male", table=empty_table())

    def test_absolute_curve_ignores_bodyweight(self):
        from src.benchmarks import load_benchmark_table
        from src.percentile import percentile_for
        t = load_benchmark_table({
            "version": "t",
            "curves": {"male": {"sled-push": {"points": [[0, 0], [50, 200], [100, 400]], "scale": "absolute"}}},
        })
        assert percentile_for("sled-push", 100, "lbs", 1, 150, "male", table=t) == pytest.approx(25.0)
        assert percentile_for("sled-push", 100, "lbs", 1, 250, "male", table=t) == pytest.approx(25.0)

    def test_flat_segment(self):
        from src.benchmarks import load_benchmark_table
        from src.percentile import interpolate_percentile
        t = load_benchmark_table({
            "version": "t",
            "curves": {"male": {"x": {"points": [[0, 0], [50, 1.0], [60, 1.0], [100, 2.0]]}}},
        })
        curve = t.curve_for("x", "male")
        assert interpolate_percentile(curve, 0.5) == pytest.approx(25.0)
        assert interpolate_percentile(curve, 1.0) == pytest.approx(60.0)
        assert interpolate_percentile(curve, 1.5) == pytest.approx(80.0)
        assert interpolate_percentile(curve, 2.0) == pytest.approx(100.0)


# ═══════════════════════════════════════════════════════════════════════
# CURRENT PERCENTILE PER EXERCISE
# ═══════════════════════════════════════════════════════════════════════

def _obs(exercise_id, weight, reps, day, bodyweight=180):
    from src.percentile import LiftObservation
    return LiftObservation(
        exercise_id=exercise_id, weight_value=weight, unit="lbs", reps=reps,
        bodyweight_value=bodyweight, sex="male",
        timestamp=datetime(2026, 3, 1) + timedelta(days=day),
    )


class TestCurrentPercentiles:

    def _history(self):
        return [
            _obs("squat-barbell", 225, 5, 0),
            _obs("squat-barbell", 315, 1, 7),
            _obs("squat-barbell", 185, 5, 14),
            _obs("bench-press-barbell", 185, 5, 3),
            _obs("mystery-lift", 500, 5, 3),
        ]

    def test_best_policy(self, table):
        from src.percentile import current_percentiles, percentile_for
        current = current_percentiles(self._history(), table=table)
        assert set(current) == {"squat-barbell", "bench-press-barbell"}
        squat = current["squat-barbell"]
        assert squat.percentile == pytest.approx(
            percentile_for("squat-barbell", 315, "lbs", 1, 180, "male", table=table)
        )
        assert squat.timestamp == datetime(2026, 3, 8)
        assert squat.estimated_max_lbs == 315.0

    def test_latest_policy(self, table):
        from src.percentile import current_percentiles
        current = current_percentiles(self._history(), table=table, policy="latest")
        squat = current["squat-barbell"]
        assert squat.timestamp == datetime(2026, 3, 15)
        assert squat.estimated_max_lbs == pytest.approx(215.8)

    def test_best_tie_goes_to_latest(self, table):
        from src.percentile import current_percentiles
        obs = [_obs("squat-barbell", 225, 5, 5), _obs("squat-barbell", 225, 5, 1)]
        current = current_percentiles(obs, table=table)
        assert current["squat-barbell"].timestamp == datetime(2026, 3, 6)

    def test_order_independent(self, table):
        from src.percentile import current_percentiles
        history = self._history()
        assert current_percentiles(history, table=table) == current_percentiles(history[::-1], table=table)

    def test_unknown_policy(self, table):
        from src.errors import ConfigurationError
        from src.percentile import current_percentiles
        with pytest.raises(ConfigurationError):
            current_percentiles([], table=table, policy="average")

    def test_empty(self, table):
        from src.percentile import current_percentiles
        assert current_percentiles([], table=table) == {}
