"""
Pydantic request/response schemas for the irrigation FastAPI service.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class RecommendationRequest(BaseModel):
    """Input schema for /recommend endpoint."""
    crop: str = Field(..., min_length=1, description="Crop name, e.g. 'Money Plant'")
    soil_type: str = Field(..., min_length=1, description="Soil type, e.g. 'General Gardening Soil'")
    moisture_pct: float = Field(..., ge=0, le=100, description="Current soil moisture (%)")

    model_config = {"json_schema_extra": {
        "examples": [{
            "crop": "Money Plant",
            "soil_type": "General Gardening Soil",
            "moisture_pct": 50.0,
        }]
    }}


class CropRecord(BaseModel):
    """Seasonal water data for one crop/soil combination."""
    crop_name: str
    category: str
    soil_type: str
    base_water_mm_per_season: float
    adjusted_water_mm_per_season: float
    irrigation_frequency_multiplier: float
    source: str = ""


class Recommendation(BaseModel):
    """Irrigation recommendation result."""
    recommended_water_mm: float
    irrigation_duration_minutes: int
    needs_irrigation: bool


class RecommendationResponse(BaseModel):
    """Output schema for /recommend endpoint."""
    recommendation: Recommendation
    crop_data: CropRecord
    moisture_pct: float


class NameList(BaseModel):
    """A sorted list of selector values."""
    items: List[str]
    count: int


class DefaultsResponse(BaseModel):
    """Default selection offered before the user chooses."""
    crop: str
    soil_type: str
    moisture_pct: float
    available: bool


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    data_loaded: bool
    record_count: int
    version: str
    detail: Optional[str] = None
