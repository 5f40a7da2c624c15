from __future__ import annotations

import math
import re

from tourism_engine.models import DISTRICT_CENTROIDS, GeoPoint, TouristSite

# Leading decimal literal, read the way a browser's parseFloat reads form input.
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_coordinate(raw: str | None) -> float:
    """Parse a coordinate string, returning 0.0 when nothing usable is there.

    Zero doubles as the "unset" sentinel, so ``"0"``, ``""``, ``None`` and
    garbage all come back as 0.0 and never raise.
    """
    if not raw:
        return 0.0
    match = _LEADING_NUMBER.match(raw)
    if match is None:
        return 0.0
    value = float(match.group(1))
    if not math.isfinite(value):
        return 0.0
    return value


def explicit_location(site: TouristSite) -> GeoPoint | None:
    lat = parse_coordinate(site.latitude)
    lng = parse_coordinate(site.longitude)
    if lat and lng:
        return GeoPoint(lat=lat, lng=lng)
    return None


def resolve_site_location(site: TouristSite) -> GeoPoint | None:
    """Explicit coordinates first, then the district centroid, else no location."""
    point = explicit_location(site)
    if point is not None:
        return point
    return DISTRICT_CENTROIDS.get(site.district)
