from __future__ import annotations

import json
import logging
from typing import Any

from devkit.kv import KeyValueSlot
from devkit.timezone import epoch_millis

from tourism_engine.models import TouristSite, TourismType, coerce_capacity, unique_risks
from tourism_service.errors import DuplicateSiteError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "grobogan_tourism_data"


def _serialize(site: TouristSite) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": site.id,
        "name": site.name,
        "village": site.village,
        "district": site.district,
        "type": site.type.value,
        "capacity": site.capacity,
        "risks": [risk.value for risk in site.risks],
    }
    if site.latitude is not None:
        payload["latitude"] = site.latitude
    if site.longitude is not None:
        payload["longitude"] = site.longitude
    return payload


def _optional_text(value: Any) -> str | None:
    return None if value is None else str(value)


def _deserialize(payload: dict[str, Any]) -> TouristSite:
    return TouristSite(
        id=str(payload["id"]),
        name=str(payload["name"]),
        village=str(payload["village"]),
        district=str(payload["district"]),
        type=TourismType(payload["type"]),
        capacity=coerce_capacity(payload.get("capacity")),
        risks=unique_risks(payload.get("risks") or ()),
        latitude=_optional_text(payload.get("latitude")),
        longitude=_optional_text(payload.get("longitude")),
    )


class SiteStore:
    """Ordered site list, newest first, mirrored to one key of a key-value slot.

    Every change rewrites the whole list under the key. A failed write is
    logged and the in-memory list keeps the change. Unreadable stored content
    loads as an empty list; a slot that cannot be reached fails the load, so
    nothing is written over the saved list.
    """

    def __init__(self, slot: KeyValueSlot, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._slot = slot
        self._key = key
        self._sites: tuple[TouristSite, ...] = ()

    def snapshot(self) -> tuple[TouristSite, ...]:
        return self._sites

    def __len__(self) -> int:
        return len(self._sites)

    def get(self, site_id: str) -> TouristSite | None:
        return next((site for site in self._sites if site.id == site_id), None)

    async def load(self) -> tuple[TouristSite, ...]:
        try:
            raw = await self._slot.get(self._key)
            stored = json.loads(raw) if raw else []
            if not isinstance(stored, list):
                raise ValueError("stored sites are not a list")
        except ValueError:
            logger.exception("site_store_load_failed", extra={"key": self._key})
            stored = []

        sites: list[TouristSite] = []
        seen: set[str] = set()
        for index, item in enumerate(stored):
            try:
                site = _deserialize(item)
            except (KeyError, TypeError, ValueError):
                logger.warning("site_store_entry_skipped", extra={"key": self._key, "index": index})
                continue
            if site.id in seen:
                logger.warning("site_store_duplicate_id_skipped", extra={"key": self._key, "site_id": site.id})
                continue
            seen.add(site.id)
            sites.append(site)
        self._sites = tuple(sites)
        logger.info("site_store_loaded", extra={"key": self._key, "site_count": len(self._sites)})
        return self._sites

    def next_site_id(self) -> str:
        candidate = epoch_millis()
        taken = {site.id for site in self._sites}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    async def add(self, site: TouristSite) -> TouristSite:
        if self.get(site.id) is not None:
            raise DuplicateSiteError(f"site id already exists: {site.id}")
        self._sites = (site, *self._sites)
        await self._persist()
        return site

    async def remove(self, site_id: str) -> TouristSite | None:
        removed = self.get(site_id)
        if removed is None:
            return None
        self._sites = tuple(site for site in self._sites if site.id != site_id)
        await self._persist()
        return removed

    async def close(self) -> None:
        await self._slot.close()

    async def _persist(self) -> None:
        body = json.dumps([_serialize(site) for site in self._sites], ensure_ascii=False)
        try:
            await self._slot.set(self._key, body)
        except Exception:
            logger.exception("site_store_persist_failed", extra={"key": self._key, "site_count": len(self._sites)})
