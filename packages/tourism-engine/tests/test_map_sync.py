from tourism_engine.map_sync import (
    DEFAULT_CENTER,
    DEFAULT_ZOOM,
    FIT_PADDING,
    InMemoryMapSurface,
    MapState,
    MapSynchronizer,
    TileLayer,
    marker_color,
)
from tourism_engine.models import DISTRICT_CENTROIDS, GeoPoint, TouristSite, TourismType

TILES = TileLayer(url_template="https://tiles.example/{z}/{x}/{y}.png", attribution="tiles")


def _site(site_id: str, **overrides) -> TouristSite:
    fields = {
        "id": site_id,
        "name": f"Site {site_id}",
        "village": "Desa",
        "district": "Purwodadi",
        "type": TourismType.NATURE,
    }
    fields.update(overrides)
    return TouristSite(**fields)


def _mounted() -> tuple[MapSynchronizer, InMemoryMapSurface]:
    surface = InMemoryMapSurface()
    synchronizer = MapSynchronizer(surface, TILES)
    synchronizer.mount()
    return synchronizer, surface


def test_mount_adds_base_layer_and_default_view_once() -> None:
    synchronizer, surface = _mounted()
    synchronizer.mount()

    assert synchronizer.state is MapState.MOUNTED
    assert surface.base_layer == TILES
    assert surface.viewport.center == DEFAULT_CENTER
    assert surface.viewport.zoom == DEFAULT_ZOOM


def test_sync_while_unmounted_is_noop() -> None:
    surface = InMemoryMapSurface()
    synchronizer = MapSynchronizer(surface, TILES)

    assert synchronizer.sync([_site("1")]) == 0
    assert surface.markers == []
    assert surface.viewport is None


def test_sync_replaces_previous_markers() -> None:
    synchronizer, surface = _mounted()
    synchronizer.sync([_site("1"), _site("2", district="Toroh")])
    synchronizer.sync([_site("3", district="Gubug")])

    assert [marker.site_id for marker in surface.markers] == ["3"]
    assert surface.markers[0].position == DISTRICT_CENTROIDS["Gubug"]


def test_sync_skips_unlocatable_sites_and_fits_bounds() -> None:
    synchronizer, surface = _mounted()
    count = synchronizer.sync(
        [
            _site("1", latitude="-7.09", longitude="110.92"),
            _site("2", district="Kradenan"),
            _site("3", district="Atlantis"),
        ]
    )

    assert count == 2
    viewport = surface.viewport
    assert viewport.padding == FIT_PADDING
    assert viewport.bounds.south_west == GeoPoint(lat=-7.1581, lng=110.92)
    assert viewport.bounds.north_east == GeoPoint(lat=-7.09, lng=111.1378)


def test_sync_is_idempotent() -> None:
    sites = [_site("1"), _site("2", district="Wirosari")]
    synchronizer, surface = _mounted()
    synchronizer.sync(sites)
    once = surface.snapshot()
    synchronizer.sync(sites)

    assert surface.snapshot() == once
    assert len(surface.markers) == 2


def test_empty_sync_resets_view() -> None:
    synchronizer, surface = _mounted()
    synchronizer.sync([_site("1", district="Kradenan")])
    synchronizer.sync([])

    assert surface.markers == []
    assert surface.viewport.center == DEFAULT_CENTER
    assert surface.snapshot()["viewport"] == {"kind": "center", "center": [-7.0867, 110.9157], "zoom": 10}


def test_unmount_releases_markers_and_layer() -> None:
    synchronizer, surface = _mounted()
    synchronizer.sync([_site("1")])
    synchronizer.unmount()

    assert synchronizer.state is MapState.UNMOUNTED
    assert surface.markers == []
    assert surface.base_layer is None
    assert synchronizer.sync([_site("2")]) == 0


def test_marker_color_is_total_over_types() -> None:
    assert {site_type: marker_color(site_type) for site_type in TourismType} == {
        TourismType.NATURE: "green",
        TourismType.WATER: "blue",
        TourismType.RELIGIOUS: "violet",
    }


def test_popup_escapes_site_name() -> None:
    synchronizer, surface = _mounted()
    synchronizer.sync([_site("1", name="<script>x</script>")])

    assert "<script>" not in surface.markers[0].popup_html
    assert "&lt;script&gt;" in surface.markers[0].popup_html
