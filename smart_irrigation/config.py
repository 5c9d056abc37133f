"""
Runtime configuration, read from environment variables with defaults
matching the bundled dataset.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from smart_irrigation.data.schema import parse_float

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
DEFAULT_DATA_PATH = DATA_DIR / "smart_irrigation_crop_soil_dataset.csv"

# Default selection shown before the user picks anything
DEFAULT_CROP = "Money Plant"
DEFAULT_SOIL_TYPE = "General Gardening Soil"
DEFAULT_MOISTURE_PCT = 50.0

ENV_DATA_PATH = "SMART_IRRIGATION_DATA"
ENV_DEFAULT_CROP = "SMART_IRRIGATION_DEFAULT_CROP"
ENV_DEFAULT_SOIL = "SMART_IRRIGATION_DEFAULT_SOIL"
ENV_DEFAULT_MOISTURE = "SMART_IRRIGATION_DEFAULT_MOISTURE"


@dataclass(frozen=True)
class Settings:
    """Resolved engine settings."""
    data_path: Path = DEFAULT_DATA_PATH
    default_crop: str = DEFAULT_CROP
    default_soil_type: str = DEFAULT_SOIL_TYPE
    default_moisture_pct: float = DEFAULT_MOISTURE_PCT


def load_settings(environ=None) -> Settings:
    """Build Settings from `environ` (defaults to os.environ)."""
    env = os.environ if environ is None else environ
    return Settings(
        data_path=Path(env.get(ENV_DATA_PATH, str(DEFAULT_DATA_PATH))),
        default_crop=env.get(ENV_DEFAULT_CROP, DEFAULT_CROP),
        default_soil_type=env.get(ENV_DEFAULT_SOIL, DEFAULT_SOIL_TYPE),
        default_moisture_pct=parse_float(
            env.get(ENV_DEFAULT_MOISTURE, ""), DEFAULT_MOISTURE_PCT),
    )
