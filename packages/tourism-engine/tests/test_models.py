import pytest

from tourism_engine.models import (
    DISTRICT_CENTROIDS,
    DISTRICTS,
    DisasterRisk,
    TourismType,
    coerce_capacity,
    unique_risks,
)


def test_district_table_covers_every_district() -> None:
    assert len(DISTRICTS) == 19
    assert set(DISTRICT_CENTROIDS) == set(DISTRICTS)


def test_enums_accept_label_and_english_alias() -> None:
    assert TourismType("Wisata Alam") is TourismType.NATURE
    assert TourismType("NatureTourism") is TourismType.NATURE
    assert DisasterRisk("Flood") is DisasterRisk.FLOOD
    assert DisasterRisk("Tanah Longsor") is DisasterRisk.LANDSLIDE


def test_enum_rejects_unknown_value() -> None:
    with pytest.raises(ValueError):
        TourismType("Wisata Kuliner")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(500, 500), ("250", 250), ("12.7", 12), ("abc", 0), ("", 0), (None, 0), (-5, 0), ("nan", 0)],
)
def test_coerce_capacity(raw: object, expected: int) -> None:
    assert coerce_capacity(raw) == expected


def test_unique_risks_drops_duplicates_in_first_seen_order() -> None:
    assert unique_risks(["Banjir", "Laka Air", "Flood"]) == (DisasterRisk.FLOOD, DisasterRisk.WATER_ACCIDENT)
    assert unique_risks([]) == ()
