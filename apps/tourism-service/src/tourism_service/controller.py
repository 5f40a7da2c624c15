from __future__ import annotations

import logging
from typing import Any

from tourism_engine.aggregate import aggregate, filter_sites, group_sites_by_type, normalize_district_filter
from tourism_engine.map_sync import InMemoryMapSurface, MapSynchronizer
from tourism_engine.models import ALL_DISTRICTS, TouristSite

from tourism_service.errors import SiteNotFoundError
from tourism_service.observability import ServiceMetrics
from tourism_service.schemas import SiteCreateRequest
from tourism_service.store import SiteStore
from tourism_service.views import stats_payload, table_rows, type_details_payload

logger = logging.getLogger(__name__)


class TourismController:
    """Single owner of the site list and the active district filter.

    Every change hands a fresh snapshot to the aggregator and the map
    synchronizer; nothing derived is cached between changes.
    """

    def __init__(
        self,
        store: SiteStore,
        synchronizer: MapSynchronizer,
        surface: InMemoryMapSurface,
        metrics: ServiceMetrics | None = None,
    ) -> None:
        self._store = store
        self._synchronizer = synchronizer
        self._surface = surface
        self._metrics = metrics
        self._district_filter = ALL_DISTRICTS
        self._ready = False

    @property
    def district_filter(self) -> str:
        return self._district_filter

    async def ensure_ready(self) -> None:
        if self._ready:
            return
        await self._store.load()
        self._synchronizer.mount()
        self._ready = True
        self._after_change()

    async def shutdown(self) -> None:
        self._synchronizer.unmount()
        await self._store.close()
        self._ready = False

    def all_sites(self) -> tuple[TouristSite, ...]:
        return self._store.snapshot()

    def visible_sites(self) -> list[TouristSite]:
        return filter_sites(self._store.snapshot(), self._district_filter)

    async def add_site(self, form: SiteCreateRequest) -> TouristSite:
        site = TouristSite(
            id=self._store.next_site_id(),
            name=form.name,
            village=form.village,
            district=form.district,
            type=form.type,
            capacity=form.capacity,
            risks=form.risks,
            latitude=form.latitude,
            longitude=form.longitude,
        )
        await self._store.add(site)
        logger.info("site_created", extra={"site_id": site.id, "district": site.district})
        if self._metrics:
            self._metrics.record_site_event("created")
        self._after_change()
        return site

    async def delete_site(self, site_id: str, *, confirmed: bool) -> bool:
        if not confirmed:
            return False
        removed = await self._store.remove(site_id)
        if removed is None:
            raise SiteNotFoundError(site_id)
        logger.info("site_deleted", extra={"site_id": site_id, "district": removed.district})
        if self._metrics:
            self._metrics.record_site_event("deleted")
        self._after_change()
        return True

    def set_district_filter(self, district: str | None) -> str:
        self._district_filter = normalize_district_filter(district)
        self._after_change()
        return self._district_filter

    def dashboard(self) -> dict[str, Any]:
        sites = self._store.snapshot()
        visible = filter_sites(sites, self._district_filter)
        return {
            "stats": stats_payload(aggregate(sites, self._district_filter)),
            "type_details": type_details_payload(group_sites_by_type(visible)),
            "sites": table_rows(visible),
            "map": self._surface.snapshot(),
        }

    def map_snapshot(self) -> dict[str, Any]:
        return self._surface.snapshot()

    def _after_change(self) -> None:
        self._synchronizer.sync(self.visible_sites())
        if self._metrics:
            self._metrics.set_site_count(len(self._store))
