"""Tests for settings, the dataset handle and the selection session."""

import sys
import asyncio
import logging
import pytest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from smart_irrigation.config import (
    Settings, load_settings, DEFAULT_DATA_PATH, DEFAULT_CROP,
    DEFAULT_SOIL_TYPE, DEFAULT_MOISTURE_PCT,
)
from smart_irrigation.data.dataset import Dataset
from smart_irrigation.data.loader import load
from smart_irrigation.data.schema import SOURCE_COLUMNS
from smart_irrigation.engine.service import DatasetHandle, initialize, initialize_async
from smart_irrigation.engine.session import (
    IrrigationSession, STATE_LOADING, STATE_READY, STATE_ERROR,
)
from smart_irrigation.exceptions import DataUnavailable

SAMPLE_LINES = [
    ",".join(SOURCE_COLUMNS),
    "Money Plant,Houseplant,General Gardening Soil,180,198,1.0,RHS",
    "Tomato,Vegetable,Loamy Soil,300,300,1.5,FAO 56",
    "Basil,Herb,Potting Mix,250,238,1.1,RHS",
    "Mint,Herb,General Gardening Soil,300,330,1.3,RHS",
]


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "crops.csv"
    path.write_text("\n".join(SAMPLE_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def handle():
    return DatasetHandle(load(SAMPLE_LINES))


class TestSettings:
    def test_defaults(self):
        settings = load_settings({})
        assert settings.data_path == DEFAULT_DATA_PATH
        assert settings.default_crop == DEFAULT_CROP == "Money Plant"
        assert settings.default_soil_type == DEFAULT_SOIL_TYPE == "General Gardening Soil"
        assert settings.default_moisture_pct == DEFAULT_MOISTURE_PCT == 50.0

    def test_environment_overrides(self):
        settings = load_settings({
            "SMART_IRRIGATION_DATA": "/srv/crops.csv",
            "SMART_IRRIGATION_DEFAULT_CROP": "Basil",
            "SMART_IRRIGATION_DEFAULT_SOIL": "Potting Mix",
            "SMART_IRRIGATION_DEFAULT_MOISTURE": "35",
        })
        assert settings.data_path == Path("/srv/crops.csv")
        assert settings.default_crop == "Basil"
        assert settings.default_soil_type == "Potting Mix"
        assert settings.default_moisture_pct == 35.0

    def test_bad_moisture_falls_back(self):
        settings = load_settings({"SMART_IRRIGATION_DEFAULT_MOISTURE": "wet"})
        assert settings.default_moisture_pct == DEFAULT_MOISTURE_PCT


class TestDatasetHandle:
    def test_listings(self, handle):
        assert handle.list_crop_names() == ["Basil", "Mint", "Money Plant", "Tomato"]
        assert handle.list_soil_types() == ["General Gardening Soil", "Loamy Soil", "Potting Mix"]
        assert handle.list_categories() == ["Herb", "Houseplant", "Vegetable"]
        assert handle.list_crops_in_category("Herb") == ["Basil", "Mint"]
        assert handle.list_crops_in_category("Fruit") == []

    def test_lookup_and_recommend(self, handle):
        record = handle.lookup("Tomato", "Loamy Soil")
        assert record is not None
        rec = handle.recommend(record, 50)
        assert rec.recommended_water_mm == 5.0
        assert rec.irrigation_duration_minutes == 7
        assert rec.needs_irrigation is True

    def test_lookup_miss(self, handle):
        assert handle.lookup("Tomato", "Potting Mix") is None

    def test_default_record(self, handle):
        record = handle.default_record()
        assert record.crop_name == "Money Plant"
        assert record.soil_type == "General Gardening Soil"

    def test_record_count(self, handle):
        assert handle.record_count == 4


class TestInitialize:
    def test_initialize_from_path(self, csv_path):
        handle = initialize(csv_path, settings=Settings())
        assert handle.source == csv_path
        assert handle.record_count == 4

    def test_initialize_uses_settings_path(self, csv_path):
        handle = initialize(settings=Settings(data_path=csv_path))
        assert handle.record_count == 4

    def test_initialize_bundled_dataset(self):
        handle = initialize(settings=load_settings({}))
        assert handle.record_count > 0
        assert handle.default_record() is not None

    def test_initialize_missing_source(self, tmp_path):
        with pytest.raises(DataUnavailable):
            initialize(tmp_path / "nope.csv", settings=Settings())

    def test_missing_default_logs_warning(self, csv_path, caplog):
        settings = Settings(default_crop="Cactus")
        with caplog.at_level(logging.WARNING, logger="smart_irrigation.engine.service"):
            initialize(csv_path, settings=settings)
        assert "Default crop data not found" in caplog.text

    def test_initialize_async(self, csv_path):
        handle = asyncio.run(initialize_async(csv_path, Settings()))
        assert isinstance(handle, DatasetHandle)
        assert handle.list_crop_names() == ["Basil", "Mint", "Money Plant", "Tomato"]

    def test_initialize_async_failure(self, tmp_path):
        with pytest.raises(DataUnavailable):
            asyncio.run(initialize_async(tmp_path / "nope.csv", Settings()))


class TestSession:
    def test_starts_loading(self):
        session = IrrigationSession()
        assert session.state == STATE_LOADING
        assert session.moisture_pct == 50.0
        # no updates before data is bound
        assert session.select_crop("Tomato") is None

    def test_bind_ready(self, handle):
        session = IrrigationSession().bind(handle)
        assert session.state == STATE_READY
        assert session.crops == handle.list_crop_names()
        assert session.soil_types == handle.list_soil_types()
        assert session.recommendation is None

    def test_bind_failed_load(self):
        session = IrrigationSession().bind(None)
        assert session.state == STATE_ERROR
        assert session.error_message == "Failed to load crop data"

    def test_bind_empty_dataset(self):
        session = IrrigationSession().bind(DatasetHandle(Dataset()))
        assert session.state == STATE_ERROR

    def test_recommendation_after_both_selections(self, handle):
        session = IrrigationSession().bind(handle)
        assert session.select_crop("Tomato") is None
        rec = session.select_soil_type("Loamy Soil")
        assert rec is not None
        assert rec.irrigation_duration_minutes == 7
        assert session.current_record.crop_name == "Tomato"

    def test_moisture_change_recomputes(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_crop("Tomato")
        session.select_soil_type("Loamy Soil")
        rec = session.set_moisture(100)
        assert rec.recommended_water_mm == 0.0
        assert rec.needs_irrigation is False

    def test_lookup_miss_clears(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_crop("Tomato")
        session.select_soil_type("Loamy Soil")
        assert session.select_soil_type("Potting Mix") is None
        assert session.recommendation is None
        assert session.current_record is None

    def test_rebind_failed_load_resets(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_crop("Tomato")
        session.select_soil_type("Loamy Soil")
        session.bind(None)
        assert session.state == STATE_ERROR
        assert session.crops == []
        assert session.soil_types == []
        assert session.categories == []
        assert session.recommendation is None
        assert session.current_record is None
        # selections after a failed rebind are ignored, not errors
        assert session.select_crop("Tomato") is None
        assert session.select_soil_type("Loamy Soil") is None

    def test_rebind_new_handle(self, handle):
        session = IrrigationSession().bind(DatasetHandle(Dataset()))
        assert session.state == STATE_ERROR
        session.bind(handle)
        assert session.state == STATE_READY
        assert session.error_message is None


class TestSessionCategories:
    def test_categories_listed(self, handle):
        session = IrrigationSession().bind(handle)
        assert session.categories == ["Herb", "Houseplant", "Vegetable"]
        assert session.selected_category == ""

    def test_select_category_narrows_crops(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_category("Herb")
        assert session.selected_category == "Herb"
        assert session.crops == ["Basil", "Mint"]

    def test_select_category_clears_crop_outside(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_crop("Tomato")
        session.select_soil_type("Loamy Soil")
        assert session.recommendation is not None
        assert session.select_category("Herb") is None
        assert session.selected_crop == ""
        assert session.recommendation is None

    def test_select_category_keeps_crop_inside(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_crop("Basil")
        session.select_soil_type("Potting Mix")
        rec = session.select_category("Herb")
        assert rec is not None
        assert session.current_record.crop_name == "Basil"

    def test_empty_category_restores_all_crops(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_category("Herb")
        session.select_category("")
        assert session.crops == handle.list_crop_names()

    def test_unknown_category_empty(self, handle):
        session = IrrigationSession().bind(handle)
        session.select_category("Fruit")
        assert session.crops == []

    def test_select_category_before_bind(self):
        assert IrrigationSession().select_category("Herb") is None
