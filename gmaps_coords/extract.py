"""
Coordinate extraction from map URLs.

Both supported URL shapes carry a "lat,lng" pair after a literal anchor:
  - ``q=-25.0,160.0``  a coordinate query in the URL the user saved
  - ``@-33.8,151.2``   the view centre the map writes after rendering
"""

from __future__ import annotations

import re
from typing import Optional

from gmaps_coords.exceptions import CoordinateParseError
from gmaps_coords.models import Coordinate

# A latitude,longitude pair, e.g. "-25.0,160.0"
LATLNG_PATTERN = r"(-?\d+(?:\.\d+)?),(-?\d+(?:\.\d+)?)"


def coordinate_pattern(anchor: str) -> re.Pattern[str]:
    """Compile the lat,lng pattern preceded by a literal ``anchor``."""
    return re.compile(re.escape(anchor) + LATLNG_PATTERN)


DIRECT_QUERY_PATTERN = coordinate_pattern("q=")
VIEW_CENTER_PATTERN = coordinate_pattern("@")


def extract_coordinates(pattern: re.Pattern[str], text: str) -> Optional[Coordinate]:
    """
    Return the first coordinate matched in ``text`` as (lng, lat).

    Groups are captured as (lat, lng) and swapped to GeoJSON order.
    Later matches in the same text are ignored. Returns None if nothing matches.
    """
    match = pattern.search(text)
    if match is None:
        return None

    lat_text, lng_text = match.group(1), match.group(2)
    try:
        lat = float(lat_text)
        lng = float(lng_text)
    except ValueError as e:
        raise CoordinateParseError(
            f"Invalid coordinates {lat_text!r},{lng_text!r} in {text!r}"
        ) from e
    return (lng, lat)
