"""
Dataset loader: parses the comma-separated crop/soil source into a Dataset.

Parsing is lenient: a row with too few fields is dropped and an unparseable
number takes its column default. Only an unreadable source is an error.
"""

import logging
from pathlib import Path
from typing import Iterable, Union

from smart_irrigation.data.dataset import Dataset
from smart_irrigation.data.schema import MIN_FIELDS, record_from_fields, split_row
from smart_irrigation.exceptions import DataUnavailable

logger = logging.getLogger(__name__)


def load(lines: Iterable[str]) -> Dataset:
    """
    Parse source lines into a Dataset.

    Args:
        lines: Text lines; the first one is a header and is skipped.

    Returns:
        Dataset holding the parsed records in source order.
    """
    records = []
    dropped = 0
    for line_no, line in enumerate(lines, start=1):
        if line_no == 1:
            continue
        fields = split_row(line.rstrip("\r\n"))
        if len(fields) < MIN_FIELDS:
            dropped += 1
            logger.debug("Dropping line %d: %d fields (need %d)",
                         line_no, len(fields), MIN_FIELDS)
            continue
        records.append(record_from_fields(fields))

    logger.info("Loaded %d crop data entries (%d lines dropped)", len(records), dropped)
    return Dataset(records)


def load_file(path: Union[str, Path], encoding: str = "utf-8") -> Dataset:
    """
    Read and parse a dataset file.

    Raises:
        DataUnavailable: if the file cannot be opened, read or decoded.
    """
    path = Path(path)
    try:
        with open(path, encoding=encoding) as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Error loading crop data from %s: %s", path, e)
        raise DataUnavailable(path, str(e)) from e

    logger.debug("Read %d lines from %s", len(lines), path)
    return load(lines)
