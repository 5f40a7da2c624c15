from __future__ import annotations

from dataclasses import dataclass


class TourismError(Exception):
    """Base tourism service exception."""


class SiteNotFoundError(TourismError):
    def __init__(self, site_id: str) -> None:
        super().__init__(f"site not found: {site_id}")
        self.site_id = site_id


class DuplicateSiteError(TourismError):
    """Raised when a site id is already taken in the store."""


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
