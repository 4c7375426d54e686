"""
Strength Engine — Strength Report
Run manually: python -m src.report --bodyweight 180 --sex male
"""
import argparse
import sys
from datetime import datetime

from src.benchmarks import get_benchmark_table, load_benchmark_file
from src.config import (
    BENCHMARK_FILE, BENCHMARK_VERSION, MAIN_LIFT_IDS, MUSCLE_GROUPS, ONE_RM_FORMULA,
    PERCENTILE_POLICY, SEXES, WEIGHT_UNITS, get_muscle_map,
)
from src.engine import Profile
from src.hevy_client import fetch_all_workouts, to_dated_stats, to_lift_observations
from src.overall import muscle_group_percentiles, overall_stats_for, top_contributions
from src.percentile import current_percentiles
from src.tiers import next_tier_info
from src.workout_stats import format_aggregate_stats, rollup_stats


def build_report(workouts: list[dict], profile: Profile, table, weeks: int = 4,
                 formula: str = ONE_RM_FORMULA, policy: str = PERCENTILE_POLICY) -> dict:
    """Everything the report prints, computed from raw Hevy workouts."""
    observations = to_lift_observations(workouts, profile, formula=formula)
    per_exercise = current_percentiles(observations, table=table, policy=policy, formula=formula)
    overall = overall_stats_for(per_exercise)
    weekly = rollup_stats(to_dated_stats(workouts), period="week")
    recent_weeks = dict(list(weekly.items())[-weeks:]) if weeks > 0 else {}
    return {
        "overall": overall,
        "main_lifts": overall_stats_for({k: v for k, v in per_exercise.items() if k in MAIN_LIFT_IDS}),
        "per_exercise": per_exercise,
        "muscle_groups": muscle_group_percentiles(per_exercise, get_muscle_map()),
        "top": top_contributions(per_exercise),
        "next_tier": next_tier_info(overall.overall_percentile) if overall.has_data else None,
        "weekly": recent_weeks,
        "unit": profile.unit,
    }


def print_report(report: dict) -> None:
    overall = report["overall"]
    unit = report["unit"]

    print(f"\n{'='*50}")
    print("💪 Overall Strength:")
    if overall.has_data:
        print(f"   {overall.display_percentile}th percentile — {overall.grade} Tier ({overall.strength_level.name})")
        nxt = report["next_tier"]
        if nxt and nxt["next"]:
            print(f"   Next: {nxt['next']} in {nxt['needed']} percentile points")
        main = report["main_lifts"]
        if main.has_data:
            print(f"   Main lifts: {main.display_percentile}th percentile ({main.grade})")
    else:
        print("   No benchmarked lifts yet")

    if report["top"]:
        print("\n🏆 Top lifts:")
        for item in report["top"]:
            entry = report["per_exercise"][item["exercise_id"]]
            print(f"   {entry.exercise_id}: e1RM {entry.estimated_max_lbs} lbs → p{entry.percentile:.1f} ({item['tier']})")

    if report["muscle_groups"]:
        print("\n🎯 Muscle groups:")
        for group in MUSCLE_GROUPS:
            if group in report["muscle_groups"]:
                print(f"   {group}: p{report['muscle_groups'][group]}")

    if report["weekly"]:
        print("\n📊 Weekly volume:")
        for week, stats in report["weekly"].items():
            print(f"   {week.date()} | {format_aggregate_stats(stats, unit=unit)}")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Strength percentile & tier report from Hevy history")
    parser.add_argument("--bodyweight", type=float, required=True)
    parser.add_argument("--sex", choices=list(SEXES), required=True)
    parser.add_argument("--unit", choices=list(WEIGHT_UNITS), default="lbs")
    parser.add_argument("--weeks", type=int, default=4)
    args = parser.parse_args(argv)

    print("🔄 Strength Report — Starting...")
    print(f"   {datetime.now().isoformat()}")

    try:
        table = load_benchmark_file(BENCHMARK_FILE) if BENCHMARK_FILE else get_benchmark_table(BENCHMARK_VERSION)
        print(f"   Benchmarks: {table.version} ({len(table)} curves)")

        print("\n📥 Fetching workouts from Hevy...")
        workouts = fetch_all_workouts()
        print(f"   Found {len(workouts)} workouts")

        profile = Profile(bodyweight_value=args.bodyweight, sex=args.sex, unit=args.unit)
        report = build_report(workouts, profile, table, weeks=args.weeks)
    except Exception as e:
        print(f"\n❌ Report FAILED: {e}")
        return 1

    print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
