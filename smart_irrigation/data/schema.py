"""
Canonical schema definitions for the crop/soil irrigation dataset:
column layout, parsing defaults and the record/recommendation types.
"""

import math
from dataclasses import dataclass, asdict
from typing import Dict, List


# ---------- Source file column layout ----------
SOURCE_COLUMNS = [
    "Crop Name", "Category", "Soil Type",
    "Base Water (mm/season)", "Adjusted Water (mm/season)",
    "Irrigation Frequency Multiplier", "Source",
]

# Canonical (snake_case) names, in the same order as SOURCE_COLUMNS
CANONICAL_COLUMNS = [
    "crop_name", "category", "soil_type",
    "base_water_mm_per_season", "adjusted_water_mm_per_season",
    "irrigation_frequency_multiplier", "source",
]

SOURCE_TO_CANONICAL = dict(zip(SOURCE_COLUMNS, CANONICAL_COLUMNS))

# Rows with fewer fields are dropped; the trailing `source` column is optional
MIN_FIELDS = 6

NUMERIC_COLUMNS = [
    "base_water_mm_per_season",
    "adjusted_water_mm_per_season",
    "irrigation_frequency_multiplier",
]

# Value used when a numeric field fails to parse
NUMERIC_DEFAULTS: Dict[str, float] = {
    "base_water_mm_per_season": 0.0,
    "adjusted_water_mm_per_season": 0.0,
    "irrigation_frequency_multiplier": 1.0,
}


# ---------- Recommendation constants ----------
DAYS_PER_SEASON = 30.0
IRRIGATION_THRESHOLD_PCT = 70.0
MOISTURE_RANGE = (0.0, 100.0)


@dataclass(frozen=True)
class CropSoilRecord:
    """Seasonal water requirement of one crop grown in one soil type."""
    crop_name: str
    category: str
    soil_type: str
    base_water_mm_per_season: float
    adjusted_water_mm_per_season: float
    irrigation_frequency_multiplier: float
    source: str = ""

    @property
    def key(self) -> tuple:
        return (self.crop_name, self.soil_type)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class IrrigationRecommendation:
    """Irrigation advice derived from a record and a moisture reading."""
    recommended_water_mm: float
    irrigation_duration_minutes: int
    needs_irrigation: bool

    def to_dict(self) -> dict:
        return asdict(self)


def parse_float(value: str, default: float) -> float:
    """
    Parse a numeric field, returning `default` when it is not a finite number.

    Digit separators ("1_000") and the nan/inf spellings are not accepted.
    """
    try:
        if "_" in value:
            return default
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def split_row(line: str) -> List[str]:
    """Split a raw source line on commas and strip every field."""
    return [field.strip() for field in line.split(",")]


def record_from_fields(fields: List[str]) -> CropSoilRecord:
    """
    Build a record from already split fields.

    Args:
        fields: At least MIN_FIELDS stripped strings in SOURCE_COLUMNS order.

    Returns:
        CropSoilRecord with unparseable numbers replaced by NUMERIC_DEFAULTS.
    """
    return CropSoilRecord(
        crop_name=fields[0],
        category=fields[1],
        soil_type=fields[2],
        base_water_mm_per_season=parse_float(
            fields[3], NUMERIC_DEFAULTS["base_water_mm_per_season"]),
        adjusted_water_mm_per_season=parse_float(
            fields[4], NUMERIC_DEFAULTS["adjusted_water_mm_per_season"]),
        irrigation_frequency_multiplier=parse_float(
            fields[5], NUMERIC_DEFAULTS["irrigation_frequency_multiplier"]),
        source=fields[6] if len(fields) > 6 else "",
    )
