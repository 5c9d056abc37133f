"""
Run the data validation suite over the crop/soil dataset.

Usage:
    python scripts/validate_dataset.py [--data data/smart_irrigation_crop_soil_dataset.csv]
                                       [--output validation_report.json]
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from smart_irrigation.config import load_settings
from smart_irrigation.data.loader import load_file
from smart_irrigation.data.validation import DataValidationSuite, save_report
from smart_irrigation.exceptions import DataUnavailable


def validate_data(data_path: str, output_path: str = None, settings=None) -> dict:
    """Load data and run full validation suite."""
    settings = settings or load_settings()
    print("=" * 60)
    print("DATA VALIDATION SUITE")
    print("=" * 60)

    dataset = load_file(data_path)
    print(f"Loaded {len(dataset)} records from {data_path}")

    suite = DataValidationSuite(
        dataset,
        default_crop=settings.default_crop,
        default_soil_type=settings.default_soil_type,
    )
    report = suite.report()

    for check in report["checks"]:
        status = "✓" if check["passed"] else "✗"
        sev = check["severity"].upper()
        print(f"  [{status}] [{sev:8s}] {check['name']}: {check['details']}")

    summary = report["summary"]
    print(f"\nOverall: {summary['passed']}/{summary['total_checks']} passed, "
          f"{summary['critical_failures']} critical failures, "
          f"{summary['warnings']} warnings")
    print(f"Status: {summary['overall_status']}")

    if output_path:
        save_report(report, output_path)
        print(f"Report saved to {output_path}")

    print("=" * 60)
    return report


def main():
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Run data validation")
    parser.add_argument("--data", default=str(settings.data_path))
    parser.add_argument("--output", default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    try:
        report = validate_data(args.data, args.output, settings=settings)
    except DataUnavailable as e:
        print(f"[ERROR] {e}")
        return 2
    return 0 if report["summary"]["overall_status"] == "PASS" else 1


if __name__ == "__main__":
    sys.exit(main())
