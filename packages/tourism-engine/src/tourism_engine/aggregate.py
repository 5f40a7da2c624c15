from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from tourism_engine.models import ALL_DISTRICTS, DISTRICTS, TOURISM_TYPES, TouristSite, TourismType, is_known_district


class UnknownDistrictError(ValueError):
    def __init__(self, district: str) -> None:
        super().__init__(f"unknown district: {district}")
        self.district = district


@dataclass(frozen=True)
class DashboardStats:
    district_filter: str
    total_count: int
    total_capacity: int
    counts_by_type: dict[TourismType, int]
    counts_by_district: dict[str, int]


def normalize_district_filter(district_filter: str | None) -> str:
    if district_filter is None or district_filter == ALL_DISTRICTS:
        return ALL_DISTRICTS
    if not is_known_district(district_filter):
        raise UnknownDistrictError(district_filter)
    return district_filter


def filter_sites(records: Iterable[TouristSite], district_filter: str | None = None) -> list[TouristSite]:
    selected = normalize_district_filter(district_filter)
    if selected == ALL_DISTRICTS:
        return list(records)
    return [site for site in records if site.district == selected]


def aggregate(records: Sequence[TouristSite], district_filter: str | None = None) -> DashboardStats:
    """Dashboard figures for the sites visible under ``district_filter``.

    Every figure comes from the filtered subset. With the ``"all"`` filter the
    district breakdown lists all 19 districts in order, zeros included; with a
    single district it holds just that district.
    """
    selected = normalize_district_filter(district_filter)
    visible = filter_sites(records, selected)

    counts_by_type = {site_type: 0 for site_type in TOURISM_TYPES}
    shown_districts = DISTRICTS if selected == ALL_DISTRICTS else (selected,)
    counts_by_district = {district: 0 for district in shown_districts}
    total_capacity = 0
    for site in visible:
        counts_by_type[site.type] += 1
        if site.district in counts_by_district:
            counts_by_district[site.district] += 1
        total_capacity += site.capacity

    return DashboardStats(
        district_filter=selected,
        total_count=len(visible),
        total_capacity=total_capacity,
        counts_by_type=counts_by_type,
        counts_by_district=counts_by_district,
    )


def group_sites_by_type(records: Iterable[TouristSite]) -> dict[TourismType, list[TouristSite]]:
    grouped: dict[TourismType, list[TouristSite]] = {site_type: [] for site_type in TOURISM_TYPES}
    for site in records:
        grouped[site.type].append(site)
    return grouped
