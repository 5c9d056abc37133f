"""
Selection session: tracks the crop, soil type and moisture a user has chosen
and keeps the matching recommendation current.
"""

import logging
from typing import List, Optional

from smart_irrigation.config import DEFAULT_MOISTURE_PCT
from smart_irrigation.data.schema import CropSoilRecord, IrrigationRecommendation
from smart_irrigation.engine.service import DatasetHandle

logger = logging.getLogger(__name__)

STATE_LOADING = "loading"
STATE_READY = "ready"
STATE_ERROR = "error"


class IrrigationSession:
    """
    Holds user selections and the recommendation derived from them.

    The session starts in the loading state. bind() moves it to ready when
    the handle offers both crops and soil types, otherwise to error.
    Every selection change recomputes the recommendation; a missing
    selection or a lookup miss clears it.
    """

    def __init__(self, moisture_pct: float = DEFAULT_MOISTURE_PCT):
        self.handle: Optional[DatasetHandle] = None
        self.state = STATE_LOADING
        self.error_message: Optional[str] = None
        self.categories: List[str] = []
        self.crops: List[str] = []
        self.soil_types: List[str] = []

        self.selected_category = ""
        self.selected_crop = ""
        self.selected_soil_type = ""
        self.moisture_pct = moisture_pct

        self.current_record: Optional[CropSoilRecord] = None
        self.recommendation: Optional[IrrigationRecommendation] = None

    def bind(self, handle: Optional[DatasetHandle]) -> "IrrigationSession":
        """Attach a loaded handle, or None if loading failed."""
        self.handle = handle
        self.categories, self.crops, self.soil_types = [], [], []
        self.selected_category = ""
        self.current_record = None
        self.recommendation = None

        if handle is not None:
            self.categories = handle.list_categories()
            self.crops = handle.list_crop_names()
            self.soil_types = handle.list_soil_types()

        if self.crops and self.soil_types:
            self.state = STATE_READY
            self.error_message = None
        else:
            self.state = STATE_ERROR
            self.error_message = "Failed to load crop data"
            logger.warning("Session has no crop data to offer")
        return self

    @property
    def is_ready(self) -> bool:
        return self.state == STATE_READY

    def select_category(self, category: str) -> Optional[IrrigationRecommendation]:
        """
        Narrow the crop list to one category ("" shows every crop).

        A selected crop outside the new list is cleared.
        """
        if not self.is_ready:
            return None
        self.selected_category = category
        if category:
            self.crops = self.handle.list_crops_in_category(category)
        else:
            self.crops = self.handle.list_crop_names()
        if self.selected_crop not in self.crops:
            self.selected_crop = ""
        return self._update()

    def select_crop(self, crop: str) -> Optional[IrrigationRecommendation]:
        self.selected_crop = crop
        return self._update()

    def select_soil_type(self, soil_type: str) -> Optional[IrrigationRecommendation]:
        self.selected_soil_type = soil_type
        return self._update()

    def set_moisture(self, moisture_pct: float) -> Optional[IrrigationRecommendation]:
        self.moisture_pct = moisture_pct
        return self._update()

    def _update(self) -> Optional[IrrigationRecommendation]:
        if not self.is_ready:
            return None

        record = None
        if self.selected_crop and self.selected_soil_type:
            record = self.handle.lookup(self.selected_crop, self.selected_soil_type)

        if record is None:
            self.current_record = None
            self.recommendation = None
        else:
            self.current_record = record
            self.recommendation = self.handle.recommend(record, self.moisture_pct)
        return self.recommendation
