from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from tourism_service.controller import TourismController
from tourism_service.dependencies import get_controller
from tourism_service.errors import ApiError, SiteNotFoundError
from tourism_service.response import success_response
from tourism_service.schemas import SiteCreateRequest
from tourism_service.views import site_row, table_rows

router = APIRouter(prefix="/v1/sites", tags=["sites"])


@router.get("")
async def list_sites(controller: TourismController = Depends(get_controller)) -> dict:
    sites = controller.visible_sites()
    return success_response(
        table_rows(sites),
        meta={"district_filter": controller.district_filter, "count": len(sites)},
    )


@router.post("", status_code=201)
async def create_site(
    body: SiteCreateRequest,
    controller: TourismController = Depends(get_controller),
) -> dict:
    site = await controller.add_site(body)
    return success_response(site_row(site), meta={})


@router.delete("/{site_id}")
async def delete_site(
    site_id: str,
    confirm: bool = Query(default=False),
    controller: TourismController = Depends(get_controller),
) -> dict:
    try:
        deleted = await controller.delete_site(site_id, confirmed=confirm)
    except SiteNotFoundError as exc:
        raise ApiError("NOT_FOUND", str(exc), 404) from exc
    return success_response({"id": site_id, "deleted": deleted}, meta={})
