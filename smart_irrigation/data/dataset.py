"""
In-memory crop/soil dataset and the indices derived from it.

The dataset is built once from loaded records and never changes afterwards,
so every index is computed at construction and shared by all readers.
"""

from typing import Dict, Iterable, Iterator, List, Optional

import pandas as pd

from smart_irrigation.data.schema import CANONICAL_COLUMNS, CropSoilRecord


class Dataset:
    """
    Ordered, immutable collection of CropSoilRecord.

    Usage:
        dataset = Dataset(records)
        dataset.unique_crops            # ['Basil', 'Money Plant', ...]
        dataset.get_crop_data("Basil", "Loamy Soil")
    """

    def __init__(self, records: Iterable[CropSoilRecord] = ()):
        self._records = tuple(records)

        first_by_key: Dict[tuple, CropSoilRecord] = {}
        by_category: Dict[str, set] = {}
        for record in self._records:
            # First occurrence in load order wins for duplicate keys
            first_by_key.setdefault(record.key, record)
            by_category.setdefault(record.category, set()).add(record.crop_name)

        self._by_key = first_by_key
        self._unique_crops = sorted({r.crop_name for r in self._records})
        self._unique_soil_types = sorted({r.soil_type for r in self._records})
        self._crops_by_category = {
            category: sorted(crops) for category, crops in by_category.items()
        }
        self._categories = sorted(self._crops_by_category)

    # ---- Sequence protocol ----

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CropSoilRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> CropSoilRecord:
        return self._records[index]

    def __bool__(self) -> bool:
        return bool(self._records)

    def __repr__(self) -> str:
        return (
            f"Dataset(records={len(self._records)}, "
            f"crops={len(self._unique_crops)}, "
            f"soil_types={len(self._unique_soil_types)})"
        )

    @property
    def records(self) -> tuple:
        return self._records

    # ---- Derived indices ----

    @property
    def unique_crops(self) -> List[str]:
        """Distinct crop names, sorted ascending."""
        return list(self._unique_crops)

    @property
    def unique_soil_types(self) -> List[str]:
        """Distinct soil types, sorted ascending."""
        return list(self._unique_soil_types)

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def crops_by_category(self) -> Dict[str, List[str]]:
        """Category -> sorted distinct crop names in that category."""
        return {c: list(crops) for c, crops in self._crops_by_category.items()}

    # ---- Lookups ----

    def get_crop_data(self, crop_name: str, soil_type: str) -> Optional[CropSoilRecord]:
        """
        Find the record for a crop grown in a soil type.

        Matching is exact and case-sensitive. When the source holds several
        rows for the same pair, the first one loaded is returned.

        Returns:
            The matching CropSoilRecord, or None if there is none.
        """
        return self._by_key.get((crop_name, soil_type))

    def get_crops_for_category(self, category: str) -> List[str]:
        """Sorted distinct crop names in `category`; empty if unknown."""
        return list(self._crops_by_category.get(category, []))

    def duplicate_keys(self) -> List[tuple]:
        """(crop_name, soil_type) pairs that occur more than once, in load order."""
        seen, duplicates = set(), []
        for record in self._records:
            if record.key in seen and record.key not in duplicates:
                duplicates.append(record.key)
            seen.add(record.key)
        return duplicates

    def to_frame(self) -> pd.DataFrame:
        """Return the records as a DataFrame with canonical column names."""
        return pd.DataFrame(
            [r.to_dict() for r in self._records], columns=CANONICAL_COLUMNS,
        )


def get_crop_data(dataset: Dataset, crop_name: str, soil_type: str) -> Optional[CropSoilRecord]:
    return dataset.get_crop_data(crop_name, soil_type)


def get_crops_for_category(dataset: Dataset, category: str) -> List[str]:
    return dataset.get_crops_for_category(category)
