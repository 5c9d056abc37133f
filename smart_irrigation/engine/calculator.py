"""
Irrigation recommendation calculator.

Converts a crop/soil record and a soil-moisture reading into the water amount,
run time and need flag shown to the grower. The rule is fixed arithmetic,
carried out in 32-bit floats:

    daily need   = adjusted water per season / 30
    water (mm)   = daily need * (100 - moisture) / 100
    minutes      = int(water * frequency multiplier)
    needs water  = moisture < 70

Moisture is not clamped to [0, 100]; readings outside that range give
out-of-range results rather than errors.
"""

import math

import numpy as np

from smart_irrigation.data.schema import (
    DAYS_PER_SEASON,
    IRRIGATION_THRESHOLD_PCT,
    CropSoilRecord,
    IrrigationRecommendation,
)

INT32_MAX = 2 ** 31 - 1
INT32_MIN = -(2 ** 31)

_HUNDRED = np.float32(100.0)
_DAYS = np.float32(DAYS_PER_SEASON)
_THRESHOLD = np.float32(IRRIGATION_THRESHOLD_PCT)


def _to_minutes(value: np.float32) -> int:
    """Truncate toward zero; NaN -> 0 and out-of-range values saturate to int32."""
    if math.isnan(value):
        return 0
    if value >= INT32_MAX:
        return INT32_MAX
    if value <= INT32_MIN:
        return INT32_MIN
    return int(value)


def calculate(record: CropSoilRecord, current_moisture_percent: float) -> IrrigationRecommendation:
    """
    Compute the irrigation recommendation for a record at a moisture level.

    Args:
        record: Crop/soil record supplying seasonal water and multiplier.
        current_moisture_percent: Soil moisture reading, nominally 0-100.

    Returns:
        IrrigationRecommendation
    """
    # inf/nan inputs propagate instead of warning
    with np.errstate(all="ignore"):
        moisture = np.float32(current_moisture_percent)
        adjusted_water = np.float32(record.adjusted_water_mm_per_season)
        multiplier = np.float32(record.irrigation_frequency_multiplier)

        moisture_deficit = _HUNDRED - moisture
        daily_base_water_need = adjusted_water / _DAYS
        adjusted_water_need = daily_base_water_need * (moisture_deficit / _HUNDRED)
        irrigation_minutes = _to_minutes(adjusted_water_need * multiplier)

    return IrrigationRecommendation(
        recommended_water_mm=float(adjusted_water_need),
        irrigation_duration_minutes=irrigation_minutes,
        needs_irrigation=bool(moisture < _THRESHOLD),
    )
