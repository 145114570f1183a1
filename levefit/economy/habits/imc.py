from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from levefit.economy.habits.constants import (
    IMC_CATEGORY_NORMAL,
    IMC_CATEGORY_OBESE,
    IMC_CATEGORY_OVERWEIGHT,
    IMC_CATEGORY_UNDERWEIGHT,
    IMC_NORMAL_BELOW,
    IMC_OVERWEIGHT_BELOW,
    IMC_UNDERWEIGHT_BELOW,
)
from levefit.economy.habits.errors import InvalidMeasurementError


def calculate_imc(weight_kg: Decimal, height_cm: Decimal) -> Decimal:
    """Body-mass index from kilograms and centimetres, rounded to one decimal."""
    if weight_kg <= 0 or height_cm <= 0:
        raise InvalidMeasurementError("weight and height must be positive")
    height_m = Decimal(height_cm) / Decimal(100)
    imc = Decimal(weight_kg) / (height_m * height_m)
    return imc.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def classify_imc(imc: Decimal | float) -> str:
    value = float(imc)
    if value < IMC_UNDERWEIGHT_BELOW:
        return IMC_CATEGORY_UNDERWEIGHT
    if value < IMC_NORMAL_BELOW:
        return IMC_CATEGORY_NORMAL
    if value < IMC_OVERWEIGHT_BELOW:
        return IMC_CATEGORY_OVERWEIGHT
    return IMC_CATEGORY_OBESE
