from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from devkit.timezone import configure_wib_timezone

DEFAULT_TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
DEFAULT_TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
)


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    LOG_LEVEL: str = "INFO"
    STORAGE_PATH: str | None = "data/tourism_sites.json"
    STORAGE_KEY: str = "grobogan_tourism_data"
    REDIS_URL: str | None = None
    MAP_TILE_URL: str = DEFAULT_TILE_URL
    MAP_TILE_ATTRIBUTION: str = DEFAULT_TILE_ATTRIBUTION


def load_settings(service_name: str) -> ServiceSettings:
    configure_wib_timezone()
    return ServiceSettings(SERVICE_NAME=service_name)
