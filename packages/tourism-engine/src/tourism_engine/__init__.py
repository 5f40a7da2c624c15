"""Aggregation and map-marker core for tourism site records."""

from tourism_engine.aggregate import (
    DashboardStats,
    UnknownDistrictError,
    aggregate,
    filter_sites,
    group_sites_by_type,
    normalize_district_filter,
)
from tourism_engine.coordinates import parse_coordinate, resolve_site_location
from tourism_engine.map_sync import (
    Bounds,
    InMemoryMapSurface,
    MapState,
    MapSurface,
    MapSynchronizer,
    Marker,
    TileLayer,
    Viewport,
    marker_color,
)
from tourism_engine.models import (
    ALL_DISTRICTS,
    DISTRICT_CENTROIDS,
    DISTRICTS,
    RISK_TYPES,
    TOURISM_TYPES,
    DisasterRisk,
    GeoPoint,
    TouristSite,
    TourismType,
)

__all__ = [
    "ALL_DISTRICTS",
    "Bounds",
    "DISTRICTS",
    "DISTRICT_CENTROIDS",
    "DashboardStats",
    "DisasterRisk",
    "GeoPoint",
    "InMemoryMapSurface",
    "MapState",
    "MapSurface",
    "MapSynchronizer",
    "Marker",
    "RISK_TYPES",
    "TOURISM_TYPES",
    "TileLayer",
    "TouristSite",
    "TourismType",
    "UnknownDistrictError",
    "Viewport",
    "aggregate",
    "filter_sites",
    "group_sites_by_type",
    "marker_color",
    "normalize_district_filter",
    "parse_coordinate",
    "resolve_site_location",
]
