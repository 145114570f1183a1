from __future__ import annotations

DEFAULT_WATER_GOAL_ML = 2000
WATER_STREAK_MAX_DAYS = 365
MAX_WATER_INTAKE_ML_PER_ENTRY = 5000

DEFAULT_KIT_DURATION_DAYS = 30
KIT_DURATION_DAYS: dict[str, int] = {
    "1_pote": 30,
    "2_potes": 60,
    "3_potes": 90,
    "5_potes": 150,
}

IMC_UNDERWEIGHT_BELOW = 18.5
IMC_NORMAL_BELOW = 25.0
IMC_OVERWEIGHT_BELOW = 30.0

IMC_CATEGORY_UNDERWEIGHT = "underweight"
IMC_CATEGORY_NORMAL = "normal"
IMC_CATEGORY_OVERWEIGHT = "overweight"
IMC_CATEGORY_OBESE = "obese"

COMPLETED_ITEM_KINDS = ("exercise", "recipe", "detox")
