from __future__ import annotations

from levefit.economy.goal_progress.types import GoalBand

METRIC_CAPSULE = "capsule"
METRIC_HYDRATION = "hydration"
METRIC_EXERCISE = "exercise"
METRIC_RECIPE = "recipe"
METRIC_DETOX = "detox"

METRICS = (METRIC_CAPSULE, METRIC_HYDRATION, METRIC_EXERCISE, METRIC_RECIPE, METRIC_DETOX)

# Thresholds are cumulative: band N measures progress from band N-1's threshold.
GOAL_BANDS: tuple[GoalBand, ...] = (
    GoalBand(
        index=1,
        points=30,
        thresholds={METRIC_CAPSULE: 5, METRIC_HYDRATION: 5, METRIC_EXERCISE: 3},
    ),
    GoalBand(
        index=2,
        points=25,
        thresholds={
            METRIC_CAPSULE: 12,
            METRIC_HYDRATION: 12,
            METRIC_EXERCISE: 6,
            METRIC_RECIPE: 7,
            METRIC_DETOX: 5,
        },
    ),
    GoalBand(
        index=3,
        points=45,
        thresholds={
            METRIC_CAPSULE: 25,
            METRIC_HYDRATION: 25,
            METRIC_EXERCISE: 10,
            METRIC_RECIPE: 15,
            METRIC_DETOX: 10,
        },
    ),
)

FINAL_TARGETS: dict[str, int] = dict(GOAL_BANDS[-1].thresholds)
MAX_PROGRESS = 100
