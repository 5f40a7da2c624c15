from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from tourism_engine.aggregate import DashboardStats
from tourism_engine.coordinates import resolve_site_location
from tourism_engine.map_sync import marker_color
from tourism_engine.models import TouristSite, TourismType

SAFE_BADGE = "Aman"


def risk_badges(site: TouristSite) -> list[str]:
    if site.is_safe:
        return [SAFE_BADGE]
    return [risk.value for risk in site.risks]


def site_row(site: TouristSite) -> dict[str, Any]:
    location = resolve_site_location(site)
    return {
        "id": site.id,
        "name": site.name,
        "village": site.village,
        "district": site.district,
        "type": site.type.value,
        "capacity": site.capacity,
        "risks": [risk.value for risk in site.risks],
        "risk_badges": risk_badges(site),
        "latitude": site.latitude,
        "longitude": site.longitude,
        "location": None if location is None else {"lat": location.lat, "lng": location.lng},
    }


def stats_payload(stats: DashboardStats) -> dict[str, Any]:
    return {
        "district_filter": stats.district_filter,
        "total_count": stats.total_count,
        "total_capacity": stats.total_capacity,
        "counts_by_type": [
            {"type": site_type.value, "color": marker_color(site_type), "count": count}
            for site_type, count in stats.counts_by_type.items()
        ],
        "counts_by_district": [
            {"district": district, "count": count} for district, count in stats.counts_by_district.items()
        ],
    }


def type_details_payload(grouped: dict[TourismType, list[TouristSite]]) -> list[dict[str, Any]]:
    return [
        {
            "type": site_type.value,
            "count": len(sites),
            "sites": [{"id": site.id, "name": site.name, "district": site.district} for site in sites],
        }
        for site_type, sites in grouped.items()
    ]


def table_rows(sites: Iterable[TouristSite]) -> list[dict[str, Any]]:
    return [site_row(site) for site in sites]
