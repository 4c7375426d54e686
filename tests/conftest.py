"""Test configuration — ensure src modules are importable, shared fixtures."""
import sys
from pathlib import Path

import pytest

# Add project root to path so `from src.xxx import` works
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def table():
    """Bundled 2024.1 benchmark table."""
    from src.benchmarks import get_benchmark_table
    return get_benchmark_table("2024.1")


@pytest.fixture
def hevy_workouts():
    """Two Hevy workouts a week apart: lifting + a run, then lifting only."""
    return [
        {
            "id": "w1",
            "title": "Lower",
            "start_time": "2026-03-02T10:00:00Z",
            "end_time": "2026-03-02T11:00:00Z",
            "exercises": [
                {
                    "title": "Squat (Barbell)",
                    "exercise_template_id": "",
                    "sets": [
                        {"type": "warmup", "weight_kg": 60, "reps": 5},
                        {"type": "normal", "weight_kg": 140, "reps": 5},
                        {"type": "normal", "weight_kg": 150, "reps": 3},
                    ],
                },
                {
                    "title": "Deadlift (Barbell)",
                    "exercise_template_id": "C6272009",
                    "sets": [
                        {"type": "normal", "weight_kg": 180, "reps": 5},
                    ],
                },
                {
                    "title": "Running",
                    "exercise_template_id": "",
                    "sets": [
                        {"type": "normal", "weight_kg": None, "reps": None,
                         "distance_meters": 5000, "duration_seconds": 1500},
                    ],
                },
            ],
        },
        {
            "id": "w2",
            "title": "Upper",
            "start_time": "2026-03-09T18:00:00Z",
            "end_time": "2026-03-09T19:10:00Z",
            "exercises": [
                {
                    "title": "Bench Press (Barbell)",
                    "exercise_template_id": "",
                    "sets": [
                        {"type": "normal", "weight_kg": 100, "reps": 5},
                        {"type": "normal", "weight_kg": 100, "reps": 4},
                    ],
                },
            ],
        },
    ]
