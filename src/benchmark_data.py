"""
Strength Engine — Bundled benchmark datasets

Strength standards as bodyweight multiples at fixed population percentiles.
Drug-tested, unequipped powerlifting competition data for the barbell lifts
(van den Hoek et al. 2024, 809,986 entries); accessory movements are
estimated from strengthlevel.com distributions.

Each tuple holds the ratios at ANCHOR_PERCENTILES, in order. Datasets are
read-only: publish a new version instead of editing one in place.
"""

ANCHOR_PERCENTILES = (10, 25, 50, 75, 90)

# ── 2024.1 ───────────────────────────────────────────────────────────
_MALE_2024_1 = {
    "squat-barbell":               (0.75, 1.25, 1.5, 2.2, 2.8),
    "bench-press-barbell":         (0.671, 0.75, 1.201, 1.532, 2.169),
    "deadlift-barbell":            (1.069, 1.415, 1.832, 2.504, 3.227),
    "overhead-press-barbell":      (0.414, 0.580, 0.783, 1.018, 1.463),
    "incline-bench-press-barbell": (0.5, 0.75, 1.0, 1.50, 1.75),
    "front-squat-barbell":         (0.75, 1.0, 1.25, 1.75, 2.25),
    "romanian-deadlift-barbell":   (0.75, 1.00, 1.50, 2.00, 2.75),
    "row-barbell":                 (0.5, 0.75, 1.0, 1.50, 1.75),
    "hip-thrust-barbell":          (0.5, 1.0, 1.75, 2.50, 3.50),
    "bicep-curl-barbell":          (0.108, 0.213, 0.362, 0.550, 0.884),
    "bench-press-dumbbells":       (0.225, 0.348, 0.507, 0.695, 0.904),
    "shoulder-press-dumbbells":    (0.15, 0.25, 0.40, 0.60, 0.75),
    "bicep-curl-dumbbells":        (0.091, 0.175, 0.292, 0.439, 0.699),
    "lateral-raise-dumbbells":     (0.05, 0.10, 0.20, 0.30, 0.45),
    "row-dumbbells":               (0.20, 0.35, 0.55, 0.80, 1.05),
    "lat-pulldown-cables":         (0.5, 0.75, 1.0, 1.50, 1.75),
    "row-cables":                  (0.50, 0.75, 1.00, 1.50, 2.00),
    "leg-press-machine":           (1.0, 1.75, 2.75, 4.0, 5.25),
    "leg-curl-machine":            (0.50, 0.75, 1.00, 1.50, 2.00),
}

_FEMALE_2024_1 = {
    "squat-barbell":               (0.5, 0.75, 1.25, 1.50, 2.00),
    "bench-press-barbell":         (0.25, 0.5, 0.8, 1.0, 1.50),
    "deadlift-barbell":            (0.594, 0.887, 1.261, 1.698, 2.504),
    "overhead-press-barbell":      (0.204, 0.328, 0.490, 0.686, 1.040),
    "incline-bench-press-barbell": (0.2, 0.4, 0.65, 1.00, 1.40),
    "front-squat-barbell":         (0.50, 0.75, 1.0, 1.25, 1.50),
    "romanian-deadlift-barbell":   (0.50, 0.75, 1.00, 1.50, 1.75),
    "row-barbell":                 (0.25, 0.4, 0.65, 0.9, 1.2),
    "hip-thrust-barbell":          (0.50, 1.00, 1.5, 2.25, 3.00),
    "bicep-curl-barbell":          (0.108, 0.213, 0.362, 0.550, 0.884),
    "bench-press-dumbbells":       (0.095, 0.183, 0.305, 0.461, 0.641),
    "shoulder-press-dumbbells":    (0.10, 0.15, 0.25, 0.35, 0.50),
    "bicep-curl-dumbbells":        (0.058, 0.116, 0.200, 0.306, 0.494),
    "lateral-raise-dumbbells":     (0.05, 0.10, 0.15, 0.20, 0.30),
    "row-dumbbells":               (0.10, 0.20, 0.35, 0.50, 0.65),
    "lat-pulldown-cables":         (0.3, 0.45, 0.70, 0.95, 1.30),
    "row-cables":                  (0.30, 0.50, 0.75, 1.00, 1.35),
    "leg-press-machine":           (0.5, 1.25, 2.0, 3.25, 4.5),
    "leg-curl-machine":            (0.25, 0.45, 0.75, 1.05, 1.45),
}

BENCHMARK_DATASETS = {
    "2024.1": {
        "version": "2024.1",
        "source": "van den Hoek et al. 2024; strengthlevel.com",
        "anchor_percentiles": ANCHOR_PERCENTILES,
        "standards": {
            "male": _MALE_2024_1,
            "female": _FEMALE_2024_1,
        },
    },
}
