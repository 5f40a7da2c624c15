from fastapi.testclient import TestClient

from devkit.config import ServiceSettings
from devkit.kv import InMemoryKeyValueSlot
from tourism_service.app import create_app
from tourism_service.response import error_response, success_response


def _app():
    settings = ServiceSettings(SERVICE_NAME="tourism-service", STORAGE_PATH=None)
    return create_app(settings=settings, slot=InMemoryKeyValueSlot())


def test_success_response_shape() -> None:
    payload = success_response({"id": "1"}, {"count": 1})
    assert payload == {"success": True, "data": {"id": "1"}, "meta": {"count": 1}}


def test_error_response_shape() -> None:
    payload = error_response("NOT_FOUND", "missing")
    assert payload["success"] is False
    assert payload["error"] == {"code": "NOT_FOUND", "message": "missing"}


def test_trace_header_is_propagated() -> None:
    client = TestClient(_app())

    response = client.get("/healthz", headers={"x-trace-id": "trace-abc"})

    assert response.status_code == 200
    assert response.headers["x-trace-id"] == "trace-abc"


def test_trace_header_is_generated_when_missing() -> None:
    client = TestClient(_app())

    response = client.get("/readyz")

    assert response.json()["data"]["status"] == "ready"
    assert response.headers["x-trace-id"]


def test_prometheus_metrics_expose_request_latency() -> None:
    app = _app()
    client = TestClient(app)

    client.get("/healthz")
    body = client.get("/metrics").text

    assert 'tourism_http_requests_total{method="GET",path="/healthz",status_code="200"} 1.0' in body
    assert "tourism_http_request_duration_ms" in body
