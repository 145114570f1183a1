from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class GoalBand:
    index: int
    points: int
    thresholds: dict[str, int]


@dataclass(frozen=True, slots=True)
class GoalProgressCounts:
    capsule: int = 0
    hydration: int = 0
    exercise: int = 0
    recipe: int = 0
    detox: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "capsule": self.capsule,
            "hydration": self.hydration,
            "exercise": self.exercise,
            "recipe": self.recipe,
            "detox": self.detox,
        }


@dataclass(frozen=True, slots=True)
class BandProgress:
    index: int
    points: int
    ratios: dict[str, float]
    earned: float
    complete: bool


@dataclass(frozen=True, slots=True)
class GoalProgressResult:
    total: int
    current_band: int
    bands: list[BandProgress] = field(default_factory=list)
