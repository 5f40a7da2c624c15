from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from devkit.config import ServiceSettings, load_settings
from devkit.kv import KeyValueSlot, create_key_value_slot
from devkit.observability import configure_logging, configure_otel, configure_probe_access_log_filter
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse, Response

from tourism_engine.aggregate import UnknownDistrictError
from tourism_engine.map_sync import InMemoryMapSurface, MapSynchronizer, TileLayer

from tourism_service.controller import TourismController
from tourism_service.errors import ApiError, TourismError
from tourism_service.middleware import ObservabilityMiddleware
from tourism_service.observability import PrometheusServiceMetrics
from tourism_service.page import DASHBOARD_PAGE
from tourism_service.response import error_response, success_response
from tourism_service.routers.dashboard import router as dashboard_router
from tourism_service.routers.sites import router as sites_router
from tourism_service.store import SiteStore


def create_app(settings: ServiceSettings | None = None, slot: KeyValueSlot | None = None) -> FastAPI:
    settings = settings or load_settings("tourism-service")
    configure_logging(settings.SERVICE_NAME, settings.LOG_LEVEL)
    configure_otel(settings.SERVICE_NAME)
    configure_probe_access_log_filter()

    metrics = PrometheusServiceMetrics()
    store = SiteStore(
        slot or create_key_value_slot(settings.REDIS_URL, settings.STORAGE_PATH),
        key=settings.STORAGE_KEY,
    )
    surface = InMemoryMapSurface()
    synchronizer = MapSynchronizer(
        surface,
        TileLayer(url_template=settings.MAP_TILE_URL, attribution=settings.MAP_TILE_ATTRIBUTION),
    )
    controller = TourismController(store, synchronizer, surface, metrics=metrics)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await controller.ensure_ready()
        yield
        await controller.shutdown()

    app = FastAPI(title="Grobogan Tourism Service", version="0.1.0", lifespan=lifespan)
    app.state.controller = controller
    app.state.metrics = metrics
    app.add_middleware(ObservabilityMiddleware, metrics=metrics)
    app.include_router(sites_router)
    app.include_router(dashboard_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> dict:
        return success_response({"status": "ready"}, meta={})

    @app.get("/metrics")
    async def metrics_endpoint() -> Response:
        return Response(content=metrics.render(), media_type="text/plain; version=0.0.4")

    @app.get("/", response_class=HTMLResponse)
    async def dashboard_page() -> str:
        return DASHBOARD_PAGE

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_response(exc.code, exc.message))

    @app.exception_handler(UnknownDistrictError)
    async def handle_unknown_district(_: Request, exc: UnknownDistrictError) -> JSONResponse:
        return JSONResponse(status_code=422, content=error_response("VALIDATION_ERROR", str(exc)))

    @app.exception_handler(TourismError)
    async def handle_tourism_error(_: Request, exc: TourismError) -> JSONResponse:
        return JSONResponse(status_code=409, content=error_response("CONFLICT", str(exc)))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        message = "; ".join(err["msg"] for err in exc.errors())
        return JSONResponse(
            status_code=422,
            content=error_response("VALIDATION_ERROR", message),
        )

    return app


app = create_app()
