from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
import math


class _AliasedEnum(str, Enum):
    """String enum that also accepts its English alias on lookup."""

    def __new__(cls, value: str, alias: str):
        member = str.__new__(cls, value)
        member._value_ = value
        member.alias = alias
        return member

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str):
            for member in cls:
                if member.alias == value:
                    return member
        return None


class TourismType(_AliasedEnum):
    NATURE = ("Wisata Alam", "NatureTourism")
    WATER = ("Wisata Air", "WaterTourism")
    RELIGIOUS = ("Wisata Religi", "ReligiousTourism")


class DisasterRisk(_AliasedEnum):
    WATER_ACCIDENT = ("Laka Air", "WaterAccident")
    FLOOD = ("Banjir", "Flood")
    LANDSLIDE = ("Tanah Longsor", "Landslide")


TOURISM_TYPES: tuple[TourismType, ...] = tuple(TourismType)
RISK_TYPES: tuple[DisasterRisk, ...] = tuple(DisasterRisk)

ALL_DISTRICTS = "all"

# The 19 kecamatan of Grobogan Regency.
DISTRICTS: tuple[str, ...] = (
    "Brati",
    "Gabus",
    "Geyer",
    "Godong",
    "Grobogan",
    "Gubug",
    "Karangrayung",
    "Kedungjati",
    "Klambu",
    "Kradenan",
    "Ngaringan",
    "Penawangan",
    "Pulokulon",
    "Purwodadi",
    "Tanggungharjo",
    "Tawangharjo",
    "Tegowanu",
    "Toroh",
    "Wirosari",
)

DEFAULT_DISTRICT = DISTRICTS[0]
DEFAULT_TYPE = TourismType.NATURE


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


# Approximate center of each district, used when a site has no usable coordinates.
DISTRICT_CENTROIDS: dict[str, GeoPoint] = {
    "Brati": GeoPoint(lat=-7.0289, lng=110.8654),
    "Gabus": GeoPoint(lat=-7.1643, lng=111.0505),
    "Geyer": GeoPoint(lat=-7.2188, lng=110.9009),
    "Godong": GeoPoint(lat=-7.0326, lng=110.7107),
    "Grobogan": GeoPoint(lat=-6.9959, lng=110.9329),
    "Gubug": GeoPoint(lat=-7.0604, lng=110.6409),
    "Karangrayung": GeoPoint(lat=-7.1158, lng=110.7483),
    "Kedungjati": GeoPoint(lat=-7.1654, lng=110.6132),
    "Klambu": GeoPoint(lat=-7.0097, lng=110.8351),
    "Kradenan": GeoPoint(lat=-7.1581, lng=111.1378),
    "Ngaringan": GeoPoint(lat=-7.0543, lng=111.1098),
    "Penawangan": GeoPoint(lat=-7.0818, lng=110.8251),
    "Pulokulon": GeoPoint(lat=-7.1264, lng=111.0028),
    "Purwodadi": GeoPoint(lat=-7.0867, lng=110.9157),
    "Tanggungharjo": GeoPoint(lat=-7.0945, lng=110.5835),
    "Tawangharjo": GeoPoint(lat=-7.0583, lng=110.9856),
    "Tegowanu": GeoPoint(lat=-7.0645, lng=110.5401),
    "Toroh": GeoPoint(lat=-7.1353, lng=110.8927),
    "Wirosari": GeoPoint(lat=-7.0955, lng=111.0660),
}


def is_known_district(name: str) -> bool:
    return name in DISTRICT_CENTROIDS


@dataclass(frozen=True)
class TouristSite:
    id: str
    name: str
    village: str
    district: str
    type: TourismType
    capacity: int = 0
    risks: tuple[DisasterRisk, ...] = field(default_factory=tuple)
    latitude: str | None = None
    longitude: str | None = None

    @property
    def is_safe(self) -> bool:
        return not self.risks


def coerce_capacity(raw: object) -> int:
    """Whole, non-negative head count; anything unparseable counts as 0."""
    if isinstance(raw, bool):
        return 0
    try:
        value = float(raw) if isinstance(raw, (int, float)) else float(str(raw).strip())
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)


def unique_risks(values: Iterable[DisasterRisk | str]) -> tuple[DisasterRisk, ...]:
    risks: list[DisasterRisk] = []
    for value in values:
        risk = DisasterRisk(value)
        if risk not in risks:
            risks.append(risk)
    return tuple(risks)
