"""
Record reconciliation: decide which records need coordinates, resolve them
one at a time, and assemble the output collection.

A failure on one record is logged and that record is dropped (or kept
unchanged); it never aborts the batch.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from gmaps_coords.exceptions import RecordParseError, ResolutionError
from gmaps_coords.features import assemble_feature
from gmaps_coords.models import Feature, FeatureCollection, PlaceRecord
from gmaps_coords.resolver import CoordinateResolver

logger = logging.getLogger(__name__)


@dataclass
class ReconcileStats:
    total: int = 0
    resolved: int = 0
    failed: int = 0
    # Already located, or no URL to look up
    skipped: int = 0
    # Rows that could not be parsed
    invalid: int = 0

    def as_dict(self) -> dict:
        return asdict(self)


def parse_place_record(row: Mapping[str, Any]) -> PlaceRecord:
    """Validate one CSV row. Raises RecordParseError if it is not a place."""
    # DictReader puts surplus fields under None and pads short rows with None
    if None in row:
        raise RecordParseError(f"Row has more fields than the header: {row[None]!r}")
    missing = [column for column, value in row.items() if value is None]
    if missing:
        raise RecordParseError(f"Row has fewer fields than the header, missing {missing}")

    for column, value in row.items():
        if isinstance(value, str) and not _is_valid_utf8(value):
            raise RecordParseError(f"Column {column!r} is not valid UTF-8: {value!r}")

    try:
        return PlaceRecord.model_validate(dict(row))
    except ValidationError as e:
        raise RecordParseError(str(e)) from e


def _is_valid_utf8(value: str) -> bool:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class RecordReconciler:
    """
    Runs a batch of records through a CoordinateResolver.

    ``only_changed_places`` applies to GeoJSON updates: when set, only
    features whose coordinates were filled in are kept.
    """

    def __init__(self, resolver: CoordinateResolver, only_changed_places: bool = False) -> None:
        self.resolver = resolver
        self.only_changed_places = only_changed_places
        self.stats = ReconcileStats()

    async def update_features(self, collection: FeatureCollection) -> FeatureCollection:
        """Fill in coordinates for features sitting at (0, 0) with a place URL."""
        self.stats = ReconcileStats()
        new_features: list[Feature] = []

        for feature in collection.features:
            self.stats.total += 1

            if not feature.needs_coordinates:
                self.stats.skipped += 1
                if not self.only_changed_places:
                    new_features.append(feature)
                continue

            url = feature.google_maps_url
            try:
                coords = await self.resolver.resolve(url)
            except ResolutionError as e:
                self.stats.failed += 1
                logger.warning("Failed to retrieve coordinates for record %s with error %s. "
                               "Continuing.", url, e)
                if not self.only_changed_places:
                    new_features.append(feature)
                continue

            updated = feature.model_copy(deep=True)
            updated.geometry.coordinates = list(coords)
            new_features.append(updated)
            self.stats.resolved += 1

        logger.info("GeoJSON update complete: %s", self.stats.as_dict())
        result = collection.model_copy()
        result.features = new_features
        return result

    async def build_features(self, rows: Iterable[Mapping[str, Any]]) -> FeatureCollection:
        """Build point features for CSV rows, in input order."""
        self.stats = ReconcileStats()
        features: list[Feature] = []

        for row_number, row in enumerate(rows, start=1):
            self.stats.total += 1
            try:
                record = parse_place_record(row)
            except RecordParseError as e:
                self.stats.invalid += 1
                logger.warning("Failed to parse CSV record %d with error %s. Continuing.",
                               row_number, e)
                continue

            try:
                coords = await self.resolver.resolve(record.url)
            except ResolutionError as e:
                self.stats.failed += 1
                logger.warning("Failed to retrieve coordinates for record %r (%s) with error %s. "
                               "Continuing.", record.title, record.url, e)
                continue

            features.append(assemble_feature(record, coords))
            self.stats.resolved += 1

        logger.info("CSV conversion complete: %s", self.stats.as_dict())
        return FeatureCollection(features=features)
