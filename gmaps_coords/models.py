"""
Pydantic models used across the package for validation and serialization.
These are pure data objects with no I/O.

GeoJSON models keep unknown members (ids, bboxes, foreign members, extra
properties) so that updating a collection round-trips everything except the
coordinates that were filled in.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_serializer

# (longitude, latitude), GeoJSON axis order
Coordinate = tuple[float, float]

# Coordinates of "null island", used by exports to mark a missing location
MISSING_COORDINATE: Coordinate = (0.0, 0.0)


# ── Tabular input ─────────────────────────────────────────────────────

class PlaceRecord(BaseModel):
    """A place row as exported from a saved-places list (CSV)."""
    title: str = Field(..., alias="Title")
    url: str = Field(..., alias="URL")
    note: Optional[str] = Field(None, alias="Note")
    comment: Optional[str] = Field(None, alias="Comment")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("note", "comment", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        """Empty CSV cells mean the column has no value for this place."""
        if v == "":
            return None
        return v


# ── GeoJSON ───────────────────────────────────────────────────────────

class Geometry(BaseModel):
    type: str
    # Absent on GeometryCollection; only serialized when it was given
    coordinates: Any = None

    model_config = ConfigDict(extra="allow")

    @model_serializer(mode="wrap")
    def _drop_unset_coordinates(self, handler):
        data = handler(self)
        if "coordinates" not in self.model_fields_set:
            data.pop("coordinates", None)
        return data

    @property
    def is_point(self) -> bool:
        return self.type == "Point"


class Feature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: Optional[Geometry] = None
    properties: Optional[dict[str, Any]] = None

    model_config = ConfigDict(extra="allow")

    @property
    def point_coordinates(self) -> Optional[Coordinate]:
        """(lng, lat) of a point geometry, or None for anything else."""
        if self.geometry is None or not self.geometry.is_point:
            return None
        coords = self.geometry.coordinates
        if not isinstance(coords, (list, tuple)) or len(coords) < 2:
            return None
        lng, lat = coords[0], coords[1]
        if not isinstance(lng, (int, float)) or not isinstance(lat, (int, float)):
            return None
        return (float(lng), float(lat))

    @property
    def google_maps_url(self) -> Optional[str]:
        url = (self.properties or {}).get("google_maps_url")
        return url if isinstance(url, str) else None

    @property
    def needs_coordinates(self) -> bool:
        """True for a point at null island that carries a place URL."""
        return (
            self.point_coordinates == MISSING_COORDINATE
            and self.google_maps_url is not None
        )


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")
