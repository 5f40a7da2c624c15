from __future__ import annotations

from fastapi import APIRouter, Depends

from tourism_engine.models import DISTRICT_CENTROIDS, DISTRICTS, RISK_TYPES, TOURISM_TYPES
from tourism_engine.map_sync import marker_color

from tourism_service.controller import TourismController
from tourism_service.dependencies import get_controller
from tourism_service.response import success_response
from tourism_service.schemas import DistrictFilterRequest

router = APIRouter(prefix="/v1", tags=["dashboard"])


@router.get("/reference")
async def reference(controller: TourismController = Depends(get_controller)) -> dict:
    return success_response(
        {
            "districts": [
                {"name": name, "lat": DISTRICT_CENTROIDS[name].lat, "lng": DISTRICT_CENTROIDS[name].lng}
                for name in DISTRICTS
            ],
            "types": [
                {"value": site_type.value, "alias": site_type.alias, "color": marker_color(site_type)}
                for site_type in TOURISM_TYPES
            ],
            "risks": [{"value": risk.value, "alias": risk.alias} for risk in RISK_TYPES],
            "tile_layer": controller.map_snapshot()["tile_layer"],
        },
        meta={},
    )


@router.get("/dashboard")
async def dashboard(controller: TourismController = Depends(get_controller)) -> dict:
    return success_response(controller.dashboard(), meta={"district_filter": controller.district_filter})


@router.get("/dashboard/filter")
async def get_filter(controller: TourismController = Depends(get_controller)) -> dict:
    return success_response({"district": controller.district_filter}, meta={})


@router.put("/dashboard/filter")
async def set_filter(
    body: DistrictFilterRequest,
    controller: TourismController = Depends(get_controller),
) -> dict:
    return success_response({"district": controller.set_district_filter(body.district)}, meta={})


@router.get("/map")
async def map_snapshot(controller: TourismController = Depends(get_controller)) -> dict:
    return success_response(controller.map_snapshot(), meta={"district_filter": controller.district_filter})
