"""
Data validation suite for the crop/soil dataset, with pass/fail reporting
per check. Loading never rejects rows for quality reasons; this suite is how
bad rows are found.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd

from smart_irrigation.config import DEFAULT_CROP, DEFAULT_SOIL_TYPE
from smart_irrigation.data.dataset import Dataset

SEVERITY_CRITICAL = "critical"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

# A failed critical check marks the dataset unusable for recommendations
BLOCKING_SEVERITIES = (SEVERITY_CRITICAL,)


@dataclass
class ValidationResult:
    """Outcome of one dataset check."""
    name: str
    passed: bool
    severity: str = SEVERITY_CRITICAL
    details: str = ""
    stats: dict = field(default_factory=dict)

    @property
    def blocking(self) -> bool:
        return not self.passed and self.severity in BLOCKING_SEVERITIES

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "passed": self.passed,
            "severity": self.severity,
            "details": self.details,
            "stats": self.stats,
        }


class DataValidationSuite:
    """
    Quality checks over a loaded Dataset: emptiness, value ranges, duplicate
    (crop, soil) keys, blank labels and presence of the default selection.
    """

    def __init__(self, dataset: Dataset, default_crop: str = DEFAULT_CROP,
                 default_soil_type: str = DEFAULT_SOIL_TYPE):
        self.dataset = dataset
        self.df: pd.DataFrame = dataset.to_frame()
        self.default_crop = default_crop
        self.default_soil_type = default_soil_type
        self.results: List[ValidationResult] = []

    def check_not_empty(self) -> "DataValidationSuite":
        n = len(self.df)
        self.results.append(ValidationResult(
            name="dataset_not_empty",
            passed=n > 0,
            severity=SEVERITY_CRITICAL,
            details=f"{n} records loaded" if n else "No records loaded",
            stats={"n_records": n},
        ))
        return self

    def check_water_non_negative(self) -> "DataValidationSuite":
        """Seasonal water amounts must be finite and >= 0."""
        violations = {}
        for col in ("base_water_mm_per_season", "adjusted_water_mm_per_season"):
            vals = self.df[col].astype(float).to_numpy()
            bad = int(np.sum(~np.isfinite(vals) | (vals < 0)))
            if bad:
                violations[col] = bad
        self.results.append(ValidationResult(
            name="water_values_non_negative",
            passed=len(violations) == 0,
            severity=SEVERITY_CRITICAL,
            details=f"Invalid water values in {list(violations)}" if violations else "All water values valid",
            stats={"violations": violations},
        ))
        return self

    def check_multiplier_positive(self) -> "DataValidationSuite":
        vals = self.df["irrigation_frequency_multiplier"].astype(float).to_numpy()
        bad = int(np.sum(~np.isfinite(vals) | (vals <= 0)))
        self.results.append(ValidationResult(
            name="frequency_multiplier_positive",
            passed=bad == 0,
            severity=SEVERITY_WARNING,
            details=f"{bad} non-positive multipliers" if bad else "All multipliers positive",
            stats={"n_invalid": bad},
        ))
        return self

    def check_no_duplicate_keys(self) -> "DataValidationSuite":
        """Duplicate (crop_name, soil_type) pairs resolve to the first row."""
        duplicates = self.dataset.duplicate_keys()
        n_dup = int(self.df.duplicated(subset=["crop_name", "soil_type"]).sum())
        self.results.append(ValidationResult(
            name="no_duplicate_keys",
            passed=n_dup == 0,
            severity=SEVERITY_WARNING,
            details=f"{n_dup} duplicate crop/soil rows" if n_dup else "No duplicates",
            stats={"n_duplicates": n_dup,
                   "keys": [list(k) for k in duplicates]},
        ))
        return self

    def check_adjusted_not_below_base(self) -> "DataValidationSuite":
        below = self.df["adjusted_water_mm_per_season"] < self.df["base_water_mm_per_season"]
        n_below = int(below.sum())
        self.results.append(ValidationResult(
            name="adjusted_not_below_base",
            passed=n_below == 0,
            severity=SEVERITY_INFO,
            details=f"{n_below} rows with adjusted < base water" if n_below else "Adjusted water >= base water",
            stats={"n_below": n_below},
        ))
        return self

    def check_labels_populated(self) -> "DataValidationSuite":
        """Crop, category and soil labels should not be blank."""
        blank = {}
        for col in ("crop_name", "category", "soil_type"):
            n = int((self.df[col].astype(str).str.len() == 0).sum())
            if n:
                blank[col] = n
        self.results.append(ValidationResult(
            name="categories_populated",
            passed=len(blank) == 0,
            severity=SEVERITY_WARNING,
            details=f"Blank labels: {blank}" if blank else "All labels populated",
            stats={"blank_labels": blank},
        ))
        return self

    def check_default_selection(self) -> "DataValidationSuite":
        found = self.dataset.get_crop_data(self.default_crop, self.default_soil_type) is not None
        self.results.append(ValidationResult(
            name="default_selection_present",
            passed=found,
            severity=SEVERITY_WARNING,
            details=(f"{self.default_crop} / {self.default_soil_type} "
                     f"{'found' if found else 'missing'}"),
        ))
        return self

    def run_all(self) -> List[ValidationResult]:
        """Run all validation checks."""
        self.check_not_empty()
        if len(self.df):
            (
                self.check_water_non_negative()
                .check_multiplier_positive()
                .check_no_duplicate_keys()
                .check_adjusted_not_below_base()
                .check_labels_populated()
            )
        self.check_default_selection()
        return self.results

    def report(self) -> dict:
        """
        Summarise the checks run so far (running them all if none have been).

        The dataset FAILs only when a blocking check fails; warning and info
        failures are counted but leave it usable.
        """
        if not self.results:
            self.run_all()

        failed = Counter(r.severity for r in self.results if not r.passed)
        blocking = [r.name for r in self.results if r.blocking]

        return {
            "summary": {
                "total_checks": len(self.results),
                "passed": len(self.results) - sum(failed.values()),
                "critical_failures": failed[SEVERITY_CRITICAL],
                "warnings": failed[SEVERITY_WARNING],
                "notices": failed[SEVERITY_INFO],
                "blocking_checks": blocking,
                "overall_status": "FAIL" if blocking else "PASS",
            },
            "checks": [r.to_dict() for r in self.results],
        }


def save_report(report: dict, output_path: str):
    with open(output_path, "w") as f:
        json.dump(report, f, indent=2)
