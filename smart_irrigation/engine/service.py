"""
Dataset handle: the single entry point collaborators (HTTP service, scripts,
sessions) use to list choices, look up records and get recommendations.

A handle wraps one loaded Dataset and is passed explicitly to whatever needs
it; there is no module-level repository.
"""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Union

from smart_irrigation.config import Settings, load_settings
from smart_irrigation.data.dataset import Dataset
from smart_irrigation.data.loader import load_file
from smart_irrigation.data.schema import CropSoilRecord, IrrigationRecommendation
from smart_irrigation.engine.calculator import calculate

logger = logging.getLogger(__name__)


class DatasetHandle:
    """
    Read-only view over a loaded crop/soil dataset.

    Usage:
        handle = initialize()
        record = handle.lookup("Money Plant", "General Gardening Soil")
        if record is not None:
            rec = handle.recommend(record, 42.0)
    """

    def __init__(self, dataset: Dataset, settings: Optional[Settings] = None,
                 source: Optional[Path] = None):
        self.dataset = dataset
        self.settings = settings or Settings()
        self.source = source

    def __repr__(self) -> str:
        return f"DatasetHandle(source={self.source}, {self.dataset!r})"

    @property
    def record_count(self) -> int:
        return len(self.dataset)

    def list_crop_names(self) -> List[str]:
        return self.dataset.unique_crops

    def list_soil_types(self) -> List[str]:
        return self.dataset.unique_soil_types

    def list_categories(self) -> List[str]:
        return self.dataset.categories

    def list_crops_in_category(self, category: str) -> List[str]:
        return self.dataset.get_crops_for_category(category)

    def lookup(self, crop_name: str, soil_type: str) -> Optional[CropSoilRecord]:
        return self.dataset.get_crop_data(crop_name, soil_type)

    def recommend(self, record: CropSoilRecord, moisture_percent: float) -> IrrigationRecommendation:
        return calculate(record, moisture_percent)

    def default_record(self) -> Optional[CropSoilRecord]:
        """Record for the configured default crop and soil type, if present."""
        return self.lookup(self.settings.default_crop, self.settings.default_soil_type)


def initialize(source: Union[str, Path, None] = None,
               settings: Optional[Settings] = None) -> DatasetHandle:
    """
    Load the dataset and return a handle over it.

    Args:
        source: Dataset path. Defaults to settings.data_path.
        settings: Engine settings. Defaults to load_settings().

    Returns:
        DatasetHandle

    Raises:
        DataUnavailable: if the source cannot be read.
    """
    if settings is None:
        settings = load_settings()
    path = Path(source) if source is not None else settings.data_path

    dataset = load_file(path)
    handle = DatasetHandle(dataset, settings=settings, source=path)

    default = handle.default_record()
    if default is None:
        logger.warning(
            "Default crop data not found: %s with %s",
            settings.default_crop, settings.default_soil_type,
        )
    else:
        logger.debug("Default crop data loaded: %s with %s",
                     default.crop_name, default.soil_type)
    return handle


async def initialize_async(source: Union[str, Path, None] = None,
                           settings: Optional[Settings] = None) -> DatasetHandle:
    """Run initialize() in a worker thread so the event loop stays free."""
    return await asyncio.to_thread(initialize, source, settings)
