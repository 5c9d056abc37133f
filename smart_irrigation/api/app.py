"""
FastAPI application exposing the irrigation engine.

Endpoints:
    GET  /health                        - Health check
    GET  /crops                         - Sorted crop names
    GET  /soil-types                    - Sorted soil types
    GET  /categories                    - Sorted categories
    GET  /categories/{category}/crops   - Crops in one category
    GET  /crop-data                     - Record for a crop/soil pair
    GET  /defaults                      - Default crop/soil/moisture selection
    POST /recommend                     - Irrigation recommendation
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from smart_irrigation import __version__
from smart_irrigation.api.schemas import (
    RecommendationRequest, RecommendationResponse, Recommendation,
    CropRecord, NameList, DefaultsResponse, HealthResponse,
)
from smart_irrigation.config import load_settings
from smart_irrigation.engine.service import DatasetHandle, initialize_async
from smart_irrigation.exceptions import DataUnavailable

logger = logging.getLogger(__name__)

# ---- App setup ----
app = FastAPI(
    title="Smart Irrigation API",
    description="Seasonal crop water lookup and soil-moisture irrigation advice",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Loaded dataset ----
dataset_handle: DatasetHandle = None
load_error: str = None


async def load_dataset():
    """Load the dataset once; on failure record the error and serve 503s."""
    global dataset_handle, load_error

    settings = load_settings()
    try:
        dataset_handle = await initialize_async(settings=settings)
        load_error = None
        logger.info("Dataset loaded from %s (%d records)",
                    settings.data_path, dataset_handle.record_count)
    except DataUnavailable as e:
        dataset_handle = None
        load_error = str(e)
        logger.error("Dataset unavailable: %s", e)


@app.on_event("startup")
async def startup_event():
    await load_dataset()


def _require_handle() -> DatasetHandle:
    if dataset_handle is None:
        raise HTTPException(status_code=503, detail=load_error or "Crop data not loaded")
    return dataset_handle


def _names(items) -> NameList:
    return NameList(items=items, count=len(items))


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    loaded = dataset_handle is not None
    return HealthResponse(
        status="healthy" if loaded else "unavailable",
        data_loaded=loaded,
        record_count=dataset_handle.record_count if loaded else 0,
        version=__version__,
        detail=None if loaded else load_error,
    )


@app.get("/crops", response_model=NameList)
async def list_crops():
    return _names(_require_handle().list_crop_names())


@app.get("/soil-types", response_model=NameList)
async def list_soil_types():
    return _names(_require_handle().list_soil_types())


@app.get("/categories", response_model=NameList)
async def list_categories():
    return _names(_require_handle().list_categories())


@app.get("/categories/{category}/crops", response_model=NameList)
async def list_crops_in_category(category: str):
    """Crops in a category; an unknown category gives an empty list."""
    return _names(_require_handle().list_crops_in_category(category))


@app.get("/crop-data", response_model=CropRecord)
async def get_crop_data(crop: str, soil_type: str):
    record = _require_handle().lookup(crop, soil_type)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail=f"No data for crop '{crop}' in soil '{soil_type}'",
        )
    return CropRecord(**record.to_dict())


@app.get("/defaults", response_model=DefaultsResponse)
async def get_defaults():
    handle = _require_handle()
    settings = handle.settings
    return DefaultsResponse(
        crop=settings.default_crop,
        soil_type=settings.default_soil_type,
        moisture_pct=settings.default_moisture_pct,
        available=handle.default_record() is not None,
    )


@app.post("/recommend", response_model=RecommendationResponse)
async def recommend(request: RecommendationRequest):
    """
    Look up the crop/soil record and compute the irrigation recommendation
    for the submitted moisture reading.
    """
    handle = _require_handle()
    record = handle.lookup(request.crop, request.soil_type)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail=f"No data for crop '{request.crop}' in soil '{request.soil_type}'",
        )

    result = handle.recommend(record, request.moisture_pct)
    return RecommendationResponse(
        recommendation=Recommendation(**result.to_dict()),
        crop_data=CropRecord(**record.to_dict()),
        moisture_pct=request.moisture_pct,
    )


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=8000)
