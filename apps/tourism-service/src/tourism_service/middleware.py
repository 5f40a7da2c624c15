from __future__ import annotations

from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from tourism_service.observability import RequestMetric, ServiceMetrics


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class ObservabilityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, metrics: ServiceMetrics) -> None:
        super().__init__(app)
        self._metrics = metrics
        self._tracer = trace.get_tracer("tourism-service")

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get("x-trace-id") or str(uuid4())
        started = perf_counter()
        with self._tracer.start_as_current_span("http.request") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("trace.id", trace_id)
            try:
                response = await call_next(request)
            except Exception:
                span.set_attribute("http.status_code", 500)
                self._observe(request, 500, started)
                raise
            span.set_attribute("http.route", _route_path(request))
            span.set_attribute("http.status_code", response.status_code)

        response.headers["x-trace-id"] = trace_id
        self._observe(request, response.status_code, started)
        return response

    def _observe(self, request: Request, status_code: int, started: float) -> None:
        self._metrics.observe_request(
            RequestMetric(
                method=request.method,
                path=_route_path(request),
                status_code=status_code,
                duration_ms=(perf_counter() - started) * 1000.0,
            )
        )
