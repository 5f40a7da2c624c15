from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any

from shared.security import sanitize_html_text

from tourism_engine.coordinates import resolve_site_location
from tourism_engine.models import GeoPoint, TouristSite, TourismType

logger = logging.getLogger(__name__)

DEFAULT_CENTER = GeoPoint(lat=-7.0867, lng=110.9157)  # Purwodadi
DEFAULT_ZOOM = 10
FIT_PADDING: tuple[int, int] = (50, 50)

MARKER_COLORS: dict[TourismType, str] = {
    TourismType.NATURE: "green",
    TourismType.WATER: "blue",
    TourismType.RELIGIOUS: "violet",
}


def marker_color(site_type: TourismType) -> str:
    return MARKER_COLORS[site_type]


@dataclass(frozen=True)
class TileLayer:
    url_template: str
    attribution: str


@dataclass(frozen=True)
class Marker:
    site_id: str
    position: GeoPoint
    color: str
    popup_html: str


@dataclass(frozen=True)
class Bounds:
    south_west: GeoPoint
    north_east: GeoPoint

    @classmethod
    def around(cls, points: Iterable[GeoPoint]) -> Bounds:
        points = list(points)
        if not points:
            raise ValueError("bounds need at least one point")
        lats = [point.lat for point in points]
        lngs = [point.lng for point in points]
        return cls(
            south_west=GeoPoint(lat=min(lats), lng=min(lngs)),
            north_east=GeoPoint(lat=max(lats), lng=max(lngs)),
        )


@dataclass(frozen=True)
class Viewport:
    """Either a bounds fit (with padding) or a plain center and zoom."""

    bounds: Bounds | None = None
    padding: tuple[int, int] | None = None
    center: GeoPoint | None = None
    zoom: int | None = None


def build_marker(site: TouristSite) -> Marker | None:
    position = resolve_site_location(site)
    if position is None:
        return None
    popup_html = (
        '<div class="text-center">'
        f"<strong>{sanitize_html_text(site.name)}</strong><br/>"
        f"<span>{sanitize_html_text(site.district)}</span><br/>"
        f"<span>{sanitize_html_text(site.type.value)}</span>"
        "</div>"
    )
    return Marker(site_id=site.id, position=position, color=marker_color(site.type), popup_html=popup_html)


class MapSurface(ABC):
    """The widget markers are drawn on; Leaflet's map object in the browser."""

    @abstractmethod
    def add_base_layer(self, layer: TileLayer) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_base_layer(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def add_marker(self, marker: Marker) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_marker(self, marker: Marker) -> None:
        raise NotImplementedError

    @abstractmethod
    def fit_bounds(self, bounds: Bounds, padding: tuple[int, int]) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_view(self, center: GeoPoint, zoom: int) -> None:
        raise NotImplementedError


class InMemoryMapSurface(MapSurface):
    """Records what was drawn so it can be replayed onto a client-side map."""

    def __init__(self) -> None:
        self.base_layer: TileLayer | None = None
        self.markers: list[Marker] = []
        self.viewport: Viewport | None = None

    def add_base_layer(self, layer: TileLayer) -> None:
        self.base_layer = layer

    def remove_base_layer(self) -> None:
        self.base_layer = None

    def add_marker(self, marker: Marker) -> None:
        self.markers.append(marker)

    def remove_marker(self, marker: Marker) -> None:
        self.markers.remove(marker)

    def fit_bounds(self, bounds: Bounds, padding: tuple[int, int]) -> None:
        self.viewport = Viewport(bounds=bounds, padding=padding)

    def set_view(self, center: GeoPoint, zoom: int) -> None:
        self.viewport = Viewport(center=center, zoom=zoom)

    def snapshot(self) -> dict[str, Any]:
        viewport = self.viewport
        view: dict[str, Any] | None = None
        if viewport is not None and viewport.bounds is not None:
            view = {
                "kind": "bounds",
                "bounds": [
                    [viewport.bounds.south_west.lat, viewport.bounds.south_west.lng],
                    [viewport.bounds.north_east.lat, viewport.bounds.north_east.lng],
                ],
                "padding": list(viewport.padding or FIT_PADDING),
            }
        elif viewport is not None and viewport.center is not None:
            view = {
                "kind": "center",
                "center": [viewport.center.lat, viewport.center.lng],
                "zoom": viewport.zoom,
            }
        layer = self.base_layer
        return {
            "tile_layer": (
                {"url_template": layer.url_template, "attribution": layer.attribution} if layer else None
            ),
            "markers": [
                {
                    "site_id": marker.site_id,
                    "lat": marker.position.lat,
                    "lng": marker.position.lng,
                    "color": marker.color,
                    "popup_html": marker.popup_html,
                }
                for marker in self.markers
            ],
            "viewport": view,
        }


class MapState(str, Enum):
    UNMOUNTED = "unmounted"
    MOUNTED = "mounted"


class MapSynchronizer:
    """Keeps one marker per visible site on a map surface.

    Every ``sync`` clears the markers it placed before and draws the new set,
    then fits the viewport to them (or falls back to the default view). Calls
    made while unmounted do nothing.
    """

    def __init__(
        self,
        surface: MapSurface,
        tile_layer: TileLayer,
        *,
        default_center: GeoPoint = DEFAULT_CENTER,
        default_zoom: int = DEFAULT_ZOOM,
        padding: tuple[int, int] = FIT_PADDING,
    ) -> None:
        self._surface = surface
        self._tile_layer = tile_layer
        self._default_center = default_center
        self._default_zoom = default_zoom
        self._padding = padding
        self._markers: list[Marker] = []
        self._state = MapState.UNMOUNTED

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def markers(self) -> tuple[Marker, ...]:
        return tuple(self._markers)

    def mount(self) -> None:
        if self._state is MapState.MOUNTED:
            return
        self._surface.set_view(self._default_center, self._default_zoom)
        self._surface.add_base_layer(self._tile_layer)
        self._state = MapState.MOUNTED

    def sync(self, records: Iterable[TouristSite]) -> int:
        if self._state is not MapState.MOUNTED:
            return 0
        self._clear_markers()
        for site in records:
            marker = build_marker(site)
            if marker is None:
                continue
            self._surface.add_marker(marker)
            self._markers.append(marker)

        if self._markers:
            bounds = Bounds.around(marker.position for marker in self._markers)
            self._surface.fit_bounds(bounds, self._padding)
        else:
            self._surface.set_view(self._default_center, self._default_zoom)
        logger.debug("map_synced", extra={"marker_count": len(self._markers)})
        return len(self._markers)

    def unmount(self) -> None:
        if self._state is MapState.UNMOUNTED:
            return
        self._clear_markers()
        self._surface.remove_base_layer()
        self._state = MapState.UNMOUNTED

    def _clear_markers(self) -> None:
        for marker in self._markers:
            self._surface.remove_marker(marker)
        self._markers = []
