"""
Strength Engine — Configuration

Environment-driven defaults, unit constants and the exercise metadata DB.

Library functions never read this module implicitly: every setting below is
passed in explicitly by the engine facade or the CLI. Exercise ids are the
same slugs used by the benchmark datasets ("squat-barbell"), so a single id
joins percentiles, muscle groups and tracking types.
"""
import os

# ── API Keys ─────────────────────────────────────────────────────────
HEVY_API_KEY = os.environ.get("HEVY_API_KEY", "")

# ── Engine defaults ──────────────────────────────────────────────────
BENCHMARK_VERSION = os.environ.get("BENCHMARK_VERSION", "2024.1")
BENCHMARK_FILE = os.environ.get("BENCHMARK_FILE", "")  # optional JSON override
ONE_RM_FORMULA = os.environ.get("ONE_RM_FORMULA", "epley")
PERCENTILE_POLICY = os.environ.get("PERCENTILE_POLICY", "best")

# ── Units ────────────────────────────────────────────────────────────
KG_TO_LBS = 2.20462
CANONICAL_UNIT = "lbs"
WEIGHT_UNITS = ("lbs", "kg")
SEXES = ("male", "female")

MUSCLE_GROUPS = ("chest", "back", "shoulders", "arms", "legs", "glutes")

# ═════════════════════════════════════════════════════════════════════
# EXERCISE DATABASE — keyed by exercise id
#
# tracking_type decides how sets are tagged at ingestion ("reps",
# "cardio", "timed"). hevy_template_id is only present where the Hevy
# template is known; other exercises are matched by title slug.
# ═════════════════════════════════════════════════════════════════════

EXERCISE_DB = {
    # ── Main lifts ──────────────────────────────────────────────────
    "squat-barbell": {
        "name": "Squat (Barbell)",
        "muscles": ["legs", "glutes"],
        "tracking_type": "reps",
        "is_main_lift": True,
    },
    "bench-press-barbell": {
        "name": "Bench Press (Barbell)",
        "muscles": ["chest", "shoulders", "arms"],
        "tracking_type": "reps",
        "is_main_lift": True,
    },
    "deadlift-barbell": {
        "name": "Deadlift (Barbell)",
        "muscles": ["back", "legs", "glutes"],
        "tracking_type": "reps",
        "is_main_lift": True,
        "hevy_template_id": "C6272009",
    },
    "overhead-press-barbell": {
        "name": "Overhead Press (Barbell)",
        "muscles": ["shoulders", "arms"],
        "tracking_type": "reps",
        "is_main_lift": True,
        "hevy_template_id": "073032BB",
    },

    # ── Barbell accessories ─────────────────────────────────────────
    "incline-bench-press-barbell": {
        "name": "Incline Bench Press (Barbell)",
        "muscles": ["chest", "shoulders"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "50DFDFAB",
    },
    "front-squat-barbell": {
        "name": "Front Squat",
        "muscles": ["legs"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "5046D0A9",
    },
    "romanian-deadlift-barbell": {
        "name": "Romanian Deadlift (Barbell)",
        "muscles": ["back", "legs", "glutes"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "2B4B7310",
    },
    "row-barbell": {
        "name": "Pendlay Row (Barbell)",
        "muscles": ["back", "arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "018ADC12",
    },
    "hip-thrust-barbell": {
        "name": "Hip Thrust (Barbell)",
        "muscles": ["glutes", "legs"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "bicep-curl-barbell": {
        "name": "Bicep Curl (Barbell)",
        "muscles": ["arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },

    # ── Dumbbell / cable / machine ──────────────────────────────────
    "bench-press-dumbbells": {
        "name": "Bench Press (Dumbbell)",
        "muscles": ["chest", "shoulders", "arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "shoulder-press-dumbbells": {
        "name": "Overhead Press (Dumbbell)",
        "muscles": ["shoulders", "arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "6AC96645",
    },
    "bicep-curl-dumbbells": {
        "name": "Bicep Curl (Dumbbell)",
        "muscles": ["arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "lateral-raise-dumbbells": {
        "name": "Lateral Raise (Dumbbell)",
        "muscles": ["shoulders"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "row-dumbbells": {
        "name": "Dumbbell Row",
        "muscles": ["back", "arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "F1E57334",
    },
    "lat-pulldown-cables": {
        "name": "Lat Pulldown (Cable)",
        "muscles": ["back", "arms"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "row-cables": {
        "name": "Seated Cable Row - Bar Grip",
        "muscles": ["back"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "F1D60854",
    },
    "leg-press-machine": {
        "name": "Leg Press (Machine)",
        "muscles": ["legs", "glutes"],
        "tracking_type": "reps",
        "is_main_lift": False,
    },
    "leg-curl-machine": {
        "name": "Lying Leg Curl (Machine)",
        "muscles": ["legs"],
        "tracking_type": "reps",
        "is_main_lift": False,
        "hevy_template_id": "B8127AD1",
    },

    # ── Timed / cardio ──────────────────────────────────────────────
    "plank": {
        "name": "Plank",
        "muscles": [],
        "tracking_type": "timed",
        "is_main_lift": False,
    },
    "running": {
        "name": "Running",
        "muscles": ["legs"],
        "tracking_type": "cardio",
        "is_main_lift": False,
    },
    "rowing-machine": {
        "name": "Rowing Machine",
        "muscles": ["back", "legs"],
        "tracking_type": "cardio",
        "is_main_lift": False,
    },
    "cycling": {
        "name": "Cycling",
        "muscles": ["legs"],
        "tracking_type": "cardio",
        "is_main_lift": False,
    },
}


# ═════════════════════════════════════════════════════════════════════
# HELPER FUNCTIONS — derive lookups from EXERCISE_DB
# ═════════════════════════════════════════════════════════════════════

def get_muscle_groups(exercise_id: str) -> list[str]:
    """Primary muscle groups for an exercise, [] when unknown."""
    entry = EXERCISE_DB.get(exercise_id)
    return list(entry["muscles"]) if entry else []


def get_tracking_type(exercise_id: str) -> str | None:
    entry = EXERCISE_DB.get(exercise_id)
    return entry["tracking_type"] if entry else None


def get_main_lift_ids() -> set:
    """Get set of exercise ids flagged as main lifts."""
    return {eid for eid, e in EXERCISE_DB.items() if e.get("is_main_lift")}


def get_muscle_map() -> dict:
    """Get {exercise_id: [muscle groups]} for every exercise with muscles."""
    return {eid: get_muscle_groups(eid) for eid, e in EXERCISE_DB.items() if e["muscles"]}


def get_hevy_template_map() -> dict:
    """Get {hevy_template_id: exercise_id} for exercises with a known template."""
    return {
        e["hevy_template_id"]: eid
        for eid, e in EXERCISE_DB.items()
        if e.get("hevy_template_id")
    }


MAIN_LIFT_IDS = get_main_lift_ids()
HEVY_TEMPLATE_MAP = get_hevy_template_map()
