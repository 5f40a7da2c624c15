from __future__ import annotations

from fastapi import Request

from tourism_service.controller import TourismController


async def get_controller(request: Request) -> TourismController:
    controller: TourismController = request.app.state.controller
    await controller.ensure_ready()
    return controller
