from __future__ import annotations

from levefit.economy.goal_progress.constants import GOAL_BANDS, MAX_PROGRESS
from levefit.economy.goal_progress.types import (
    BandProgress,
    GoalBand,
    GoalProgressCounts,
    GoalProgressResult,
)


def _clamp_ratio(value: float) -> float:
    return min(1.0, max(0.0, value))


def band_ratios(
    band: GoalBand,
    counts: dict[str, int],
    previous_thresholds: dict[str, int],
) -> dict[str, float]:
    ratios: dict[str, float] = {}
    for metric, threshold in band.thresholds.items():
        floor = previous_thresholds.get(metric, 0)
        span = threshold - floor
        ratios[metric] = _clamp_ratio((counts.get(metric, 0) - floor) / span)
    return ratios


def calculate_goal_progress(counts: GoalProgressCounts) -> GoalProgressResult:
    """Scores habit counters into a gated 0..100 percentage.

    Bands are evaluated in order. A band fully met adds its whole budget and
    opens the next one; the first band that is not fully met adds its partial
    value and ends the evaluation, so later bands never count before earlier
    ones are done.
    """
    raw_counts = counts.as_dict()
    previous_thresholds: dict[str, int] = {}
    bands: list[BandProgress] = []
    total = 0.0
    current_band = GOAL_BANDS[-1].index

    for band in GOAL_BANDS:
        ratios = band_ratios(band, raw_counts, previous_thresholds)
        complete = all(ratio >= 1.0 for ratio in ratios.values())
        earned = band.points * (sum(ratios.values()) / len(ratios))
        bands.append(
            BandProgress(
                index=band.index,
                points=band.points,
                ratios=ratios,
                earned=round(earned, 2),
                complete=complete,
            )
        )
        total += earned
        if not complete:
            current_band = band.index
            break
        previous_thresholds = band.thresholds

    return GoalProgressResult(
        total=min(MAX_PROGRESS, round(total)),
        current_band=current_band,
        bands=bands,
    )
