from __future__ import annotations

from itertools import product

from levefit.economy.goal_progress.rules import calculate_goal_progress
from levefit.economy.goal_progress.types import GoalProgressCounts


def test_empty_counts_have_zero_progress() -> None:
    result = calculate_goal_progress(GoalProgressCounts())

    assert result.total == 0
    assert result.current_band == 1
    assert len(result.bands) == 1


def test_completed_first_week_scores_thirty_and_opens_next_band() -> None:
    result = calculate_goal_progress(GoalProgressCounts(capsule=5, hydration=5, exercise=3))

    assert result.total == 30
    assert result.current_band == 2
    assert result.bands[0].complete is True
    assert result.bands[1].earned == 0


def test_first_two_bands_complete_score_at_least_fifty_five() -> None:
    result = calculate_goal_progress(
        GoalProgressCounts(capsule=12, hydration=12, exercise=6, recipe=7, detox=5)
    )

    assert result.total >= 55
    assert result.current_band == 3


def test_later_metrics_do_not_count_before_first_band_is_done() -> None:
    result = calculate_goal_progress(
        GoalProgressCounts(capsule=5, hydration=5, exercise=2, recipe=15, detox=10)
    )

    assert result.total < 30
    assert result.current_band == 1


def test_all_final_targets_reach_one_hundred() -> None:
    result = calculate_goal_progress(
        GoalProgressCounts(capsule=25, hydration=25, exercise=10, recipe=15, detox=10)
    )

    assert result.total == 100
    assert all(band.complete for band in result.bands)


def test_overshooting_targets_is_capped() -> None:
    result = calculate_goal_progress(
        GoalProgressCounts(capsule=90, hydration=90, exercise=90, recipe=90, detox=90)
    )

    assert result.total == 100


def test_progress_is_monotonic_in_each_counter() -> None:
    steps = (0, 3, 5, 9, 12, 20, 25)
    for capsule, hydration in product(steps, steps):
        base = GoalProgressCounts(capsule=capsule, hydration=hydration, exercise=6, recipe=7, detox=5)
        more_capsules = GoalProgressCounts(
            capsule=capsule + 1, hydration=hydration, exercise=6, recipe=7, detox=5
        )
        assert calculate_goal_progress(more_capsules).total >= calculate_goal_progress(base).total
