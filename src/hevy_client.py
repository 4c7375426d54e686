"""
Strength Engine — Hevy API Client

Workout-history adapter: fetches workouts from Hevy and converts them into
the engine's inputs (tagged ExerciseLogs and LiftObservations). Tracking
type is decided here, once: from EXERCISE_DB when the exercise is known,
otherwise from which fields the Hevy sets carry.
"""
import re
import time
from datetime import datetime

import pandas as pd
import requests

from src.config import HEVY_API_KEY, HEVY_TEMPLATE_MAP, get_tracking_type
from src.percentile import LiftObservation, estimate_one_rep_max, to_lbs
from src.workout_stats import CardioSet, ExerciseLog, TimedSet, WeightSet, stats_for

BASE_URL = "https://api.hevyapp.com/v1"
HEADERS = {"accept": "application/json", "api-key": HEVY_API_KEY}

# Rate limiting: Hevy API has undocumented limits
RATE_LIMIT_DELAY = 0.35  # seconds between requests
MAX_RETRIES = 3
RETRY_BACKOFF = 2  # exponential backoff multiplier

WORKING_SET_TYPES = ("normal", "failure", "dropset", None)


def _get(endpoint: str, params: dict = None) -> dict:
    """GET request to Hevy API with retry and rate limiting."""
    time.sleep(RATE_LIMIT_DELAY)
    for attempt in range(1, MAX_RETRIES + 1):
        try:
            r = requests.get(
                f"{BASE_URL}{endpoint}", headers=HEADERS,
                params=params or {}, timeout=15,
            )
            if r.status_code == 429:
                wait = RETRY_BACKOFF ** attempt
                print(f"  ⏳ Hevy rate limit, retrying in {wait}s (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(wait)
                continue
            r.raise_for_status()
            return r.json()
        except requests.exceptions.Timeout:
            if attempt < MAX_RETRIES:
                print(f"  ⏳ Hevy timeout, retrying (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
        except requests.exceptions.HTTPError:
            if attempt < MAX_RETRIES and r.status_code >= 500:
                print(f"  ⏳ Hevy {r.status_code}, retrying (attempt {attempt}/{MAX_RETRIES})")
                time.sleep(RETRY_BACKOFF ** attempt)
            else:
                raise
    raise requests.exceptions.RetryError(f"Hevy API failed after {MAX_RETRIES} attempts")


def fetch_all_workouts() -> list[dict]:
    """Fetch all workouts from Hevy, paginated."""
    all_workouts = []
    page = 1
    while True:
        data = _get("/workouts", {"page": page, "pageSize": 10})
        wks = data.get("workouts", [])
        if not wks:
            break
        all_workouts.extend(wks)
        if page >= data.get("page_count", 1):
            break
        page += 1
    return all_workouts


# ═════════════════════════════════════════════════════════════════════
# CONVERSION — Hevy JSON → engine inputs
# ═════════════════════════════════════════════════════════════════════

def slugify_title(title: str) -> str:
    """"Squat (Barbell)" -> "squat-barbell"."""
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower())
    return slug.strip("-")


def resolve_exercise_id(template_id: str, title: str) -> str:
    """Known Hevy template first, title slug as fallback."""
    if template_id and template_id in HEVY_TEMPLATE_MAP:
        return HEVY_TEMPLATE_MAP[template_id]
    return slugify_title(title)


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _infer_tracking_type(sets: list[dict]) -> str:
    if any(s.get("weight_kg") or s.get("reps") for s in sets):
        return "reps"
    if any(s.get("distance_meters") for s in sets):
        return "cardio"
    if any(s.get("duration_seconds") for s in sets):
        return "timed"
    return "reps"


def _working_sets(sets: list[dict]) -> list[dict]:
    return [s for s in sets if s.get("type") in WORKING_SET_TYPES]


def to_exercise_logs(workout: dict) -> list[ExerciseLog]:
    """Tag every working set of a Hevy workout. Warmup sets are skipped."""
    logs = []
    for ex in workout.get("exercises", []):
        exercise_id = resolve_exercise_id(ex.get("exercise_template_id", ""), ex["title"])
        sets = _working_sets(ex.get("sets", []))
        tracking = get_tracking_type(exercise_id) or _infer_tracking_type(sets)

        if tracking == "cardio":
            tagged = [
                CardioSet(
                    distance_meters=s.get("distance_meters") or 0,
                    duration_seconds=s.get("duration_seconds") or 0,
                )
                for s in sets
            ]
        elif tracking == "timed":
            tagged = [TimedSet(duration_seconds=s.get("duration_seconds") or 0) for s in sets]
        else:
            tagged = [
                WeightSet(weight=s.get("weight_kg") or 0, reps=s.get("reps") or 0, unit="kg")
                for s in sets
            ]
        logs.append(ExerciseLog(exercise_id, tuple(tagged)))
    return logs


def to_dated_stats(workouts: list[dict]) -> list[tuple]:
    """[(workout date, WorkoutStats)] ready for rollups."""
    return [
        (_parse_time(w["start_time"]).date(), stats_for(to_exercise_logs(w)))
        for w in workouts
    ]


def to_lift_observations(workouts: list[dict], profile, formula: str = "epley") -> list[LiftObservation]:
    """
    One observation per weighted exercise per workout, from its best set
    (highest one-rep-max estimate under `formula`). Chronological order.
    """
    observations = []
    for w in workouts:
        ts = _parse_time(w["start_time"])
        for log in to_exercise_logs(w):
            weighted = [
                s for s in log.sets
                if isinstance(s, WeightSet) and s.weight > 0 and s.reps >= 1
            ]
            if not weighted:
                continue
            best = max(weighted, key=lambda s: estimate_one_rep_max(s.weight, s.reps, formula))
            observations.append(LiftObservation(
                exercise_id=log.exercise_id,
                weight_value=best.weight,
                unit=best.unit,
                reps=best.reps,
                bodyweight_value=profile.bodyweight_value,
                sex=profile.sex,
                timestamp=ts,
                bodyweight_unit=profile.unit,
            ))
    return sorted(observations, key=lambda o: o.timestamp)


def workouts_to_dataframe(workouts: list[dict], formula: str = "epley") -> pd.DataFrame:
    """
    Convert raw Hevy workouts to a flat pandas DataFrame.
    One row per exercise per workout.
    """
    rows = []
    for w in workouts:
        start = _parse_time(w["start_time"])
        end = _parse_time(w["end_time"])
        duration_min = round((end - start).total_seconds() / 60)

        for log in to_exercise_logs(w):
            stats = stats_for([log])
            e1rm = 0.0
            weighted = [s for s in log.sets if isinstance(s, WeightSet) and s.weight > 0 and s.reps >= 1]
            if weighted:
                e1rm = max(estimate_one_rep_max(to_lbs(s.weight, s.unit), s.reps, formula) for s in weighted)
            rows.append({
                "date": pd.Timestamp(start.date()),
                "hevy_id": w["id"],
                "workout_title": w["title"],
                "duration_min": duration_min,
                "exercise_id": log.exercise_id,
                "tracking_type": log.tracking_type.value if log.tracking_type else None,
                "n_sets": stats.total_sets,
                "total_reps": stats.total_reps,
                "volume_lbs": stats.total_volume_lbs,
                "distance_meters": stats.total_distance_meters,
                "cardio_seconds": stats.total_cardio_duration_seconds,
                "e1rm_lbs": round(e1rm, 1),
            })

    df = pd.DataFrame(rows)
    if not df.empty:
        df = df.sort_values(["date", "hevy_id"]).reset_index(drop=True)
    return df
