"""
One-command irrigation advice: pick a crop and soil, give a moisture reading.

Usage:
    python scripts/recommend.py
    python scripts/recommend.py --crop Tomato --soil "Loamy Soil" --moisture 40
    python scripts/recommend.py --category Herb
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from smart_irrigation.config import load_settings
from smart_irrigation.engine.service import initialize
from smart_irrigation.exceptions import DataUnavailable


def print_banner():
    print("=" * 60)
    print("   SMART IRRIGATION")
    print("   Pick a crop and soil -> Get irrigation advice")
    print("=" * 60)
    print()


def print_choices(handle, category=None):
    """List the crops (optionally one category) and soil types on offer."""
    print("-" * 60)
    if category:
        crops = handle.list_crops_in_category(category)
        print(f"  CROPS IN '{category}'")
    else:
        crops = handle.list_crop_names()
        print("  CROPS")
    print("-" * 60)
    for crop in crops or ["(none)"]:
        print(f"  {crop}")

    print()
    print("-" * 60)
    print("  SOIL TYPES")
    print("-" * 60)
    for soil in handle.list_soil_types():
        print(f"  {soil}")
    print()


def print_recommendation(record, moisture, recommendation):
    """Pretty-print the record and the recommendation."""
    print("-" * 60)
    print("  CROP DATA")
    print("-" * 60)
    print(f"  Crop        : {record.crop_name} ({record.category})")
    print(f"  Soil        : {record.soil_type}")
    print(f"  Base water  : {record.base_water_mm_per_season:g} mm/season")
    print(f"  Adjusted    : {record.adjusted_water_mm_per_season:g} mm/season")
    print(f"  Multiplier  : {record.irrigation_frequency_multiplier:g}")
    if record.source:
        print(f"  Source      : {record.source}")

    print()
    print("=" * 60)
    print(f"  RECOMMENDATION AT {moisture:g}% SOIL MOISTURE")
    print("=" * 60)
    if recommendation.needs_irrigation:
        print("  Irrigation needed")
    else:
        print("  No irrigation needed")
    print(f"  Water       : {recommendation.recommended_water_mm:.2f} mm")
    print(f"  Duration    : {recommendation.irrigation_duration_minutes} min")
    print()


def main():
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Irrigation recommendation by crop and soil")
    parser.add_argument("--data", default=str(settings.data_path),
                        help="Path to the crop/soil dataset CSV")
    parser.add_argument("--crop", "-c", default=None)
    parser.add_argument("--soil", "-s", default=None)
    parser.add_argument("--moisture", "-m", type=float,
                        default=settings.default_moisture_pct,
                        help="Current soil moisture in percent")
    parser.add_argument("--category", default=None,
                        help="List the crops of one category")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    print_banner()

    try:
        handle = initialize(args.data, settings=settings)
    except DataUnavailable as e:
        print(f"[ERROR] {e}")
        return 1
    print(f"[OK] Loaded {handle.record_count} crop/soil records.\n")

    if not args.crop or not args.soil:
        print_choices(handle, args.category)
        return 0

    record = handle.lookup(args.crop, args.soil)
    if record is None:
        print(f"[ERROR] No data for '{args.crop}' in '{args.soil}'.")
        print("Run without --crop/--soil to list the available choices.\n")
        return 1

    print_recommendation(record, args.moisture, handle.recommend(record, args.moisture))
    return 0


if __name__ == "__main__":
    sys.exit(main())
