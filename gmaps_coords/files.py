"""
Input and output files.

GeoJSON is read and written in full. CSV is read row by row; lines with
comments must be removed from the export beforehand.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from gmaps_coords.exceptions import InputFileError, OutputNotWritableError
from gmaps_coords.models import FeatureCollection

logger = logging.getLogger(__name__)


def is_csv(path: Path) -> bool:
    """CSV by extension; anything else is treated as GeoJSON."""
    return path.suffix.lower() == ".csv"


def ensure_writable(path: Path) -> None:
    """
    Check the output can be written before spending time on lookups.
    Creates the file if needed but never truncates an existing one.
    """
    try:
        with path.open("a", encoding="utf-8"):
            pass
    except OSError as e:
        raise OutputNotWritableError(f"Cannot write to output file {path}: {e}") from e


def read_feature_collection(path: Path) -> FeatureCollection:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InputFileError(f"Failed to read {path}: {e}") from e

    try:
        collection = FeatureCollection.model_validate_json(text)
    except ValidationError as e:
        raise InputFileError(f"Failed to parse {path} as GeoJSON: {e}") from e

    logger.info("Read %d features from %s", len(collection.features), path)
    return collection


def read_csv_rows(path: Path) -> Iterator[dict]:
    """
    Yield each CSV row as a dict keyed by the header.

    Bytes that are not UTF-8 are kept as surrogate escapes so that one bad
    row is rejected on its own when parsed instead of ending the whole file.
    """
    try:
        with path.open("r", encoding="utf-8-sig", errors="surrogateescape", newline="") as f:
            reader = csv.DictReader(f)
            for row in reader:
                yield row
    except (OSError, csv.Error) as e:
        raise InputFileError(f"Failed to read CSV file {path}: {e}") from e


def write_feature_collection(path: Path, collection: FeatureCollection) -> None:
    payload = collection.model_dump(mode="json")
    try:
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False)
    except OSError as e:
        raise OutputNotWritableError(f"Failed to write output file {path}: {e}") from e
    logger.info("Wrote %d features to %s", len(collection.features), path)
