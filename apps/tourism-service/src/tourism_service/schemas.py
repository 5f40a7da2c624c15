from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from shared.security import clean_free_text

from tourism_engine.aggregate import normalize_district_filter
from tourism_engine.models import (
    ALL_DISTRICTS,
    DEFAULT_DISTRICT,
    DEFAULT_TYPE,
    DisasterRisk,
    TourismType,
    coerce_capacity,
    is_known_district,
    unique_risks,
)


MAX_TEXT_LENGTH = 200


class SiteCreateRequest(BaseModel):
    """Fields of the data-entry form, coerced the way the form treats them."""

    name: str
    village: str
    district: str = DEFAULT_DISTRICT
    type: TourismType = DEFAULT_TYPE
    capacity: int = 0
    risks: tuple[DisasterRisk, ...] = ()
    latitude: str | None = None
    longitude: str | None = None

    @field_validator("name", "village", mode="before")
    @classmethod
    def _require_text(cls, value: Any) -> str:
        cleaned = clean_free_text(value, max_length=None) if isinstance(value, str) else ""
        if not cleaned:
            raise ValueError("name and village are required")
        if len(cleaned) > MAX_TEXT_LENGTH:
            raise ValueError(f"name and village must be at most {MAX_TEXT_LENGTH} characters")
        return cleaned

    @field_validator("district", mode="before")
    @classmethod
    def _known_district(cls, value: Any) -> str:
        if value is None or value == "":
            return DEFAULT_DISTRICT
        if not isinstance(value, str) or not is_known_district(value):
            raise ValueError(f"unknown district: {value}")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _tourism_type(cls, value: Any) -> TourismType:
        if value is None or value == "":
            return DEFAULT_TYPE
        return TourismType(value)

    @field_validator("capacity", mode="before")
    @classmethod
    def _capacity(cls, value: Any) -> int:
        return coerce_capacity(value)

    @field_validator("risks", mode="before")
    @classmethod
    def _risks(cls, value: Any) -> tuple[DisasterRisk, ...]:
        if value is None:
            return ()
        return unique_risks(value)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        return str(value).strip()


class DistrictFilterRequest(BaseModel):
    district: str | None = Field(default=ALL_DISTRICTS)

    @field_validator("district")
    @classmethod
    def _known_filter(cls, value: str | None) -> str:
        return normalize_district_filter(value)
