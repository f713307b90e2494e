"""Build GeoJSON features for resolved places."""

from __future__ import annotations

from gmaps_coords.models import Coordinate, Feature, Geometry, PlaceRecord


def assemble_feature(record: PlaceRecord, coordinate: Coordinate) -> Feature:
    """Point feature at ``coordinate`` (lng, lat) carrying the record's metadata."""
    properties: dict = {
        "name": record.title,
        "google_maps_url": record.url,
    }
    if record.note is not None:
        properties["note"] = record.note
    if record.comment is not None:
        properties["comment"] = record.comment

    return Feature(
        geometry=Geometry(type="Point", coordinates=list(coordinate)),
        properties=properties,
    )
