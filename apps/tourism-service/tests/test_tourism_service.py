from __future__ import annotations

import json

from fastapi.testclient import TestClient

from devkit.config import ServiceSettings
from devkit.kv import InMemoryKeyValueSlot
from tourism_service.app import create_app

KEY = "grobogan_tourism_data"

BLEDUG_KUWU = {
    "name": "Bledug Kuwu",
    "village": "Kuwu",
    "district": "Kradenan",
    "type": "NatureTourism",
    "capacity": 500,
    "risks": [],
}


def _client(slot: InMemoryKeyValueSlot | None = None) -> TestClient:
    settings = ServiceSettings(SERVICE_NAME="tourism-service", STORAGE_PATH=None, STORAGE_KEY=KEY)
    return TestClient(create_app(settings=settings, slot=slot or InMemoryKeyValueSlot()))


def test_health_and_page() -> None:
    client = _client()
    assert client.get("/healthz").json()["data"]["status"] == "ok"
    page = client.get("/")
    assert page.status_code == 200
    assert "leaflet" in page.text


def test_submit_site_then_dashboard() -> None:
    slot = InMemoryKeyValueSlot()
    client = _client(slot)

    created = client.post("/v1/sites", json=BLEDUG_KUWU)
    assert created.status_code == 201
    assert created.json()["data"]["type"] == "Wisata Alam"

    body = client.get("/v1/dashboard").json()
    stats = body["data"]["stats"]
    assert body["success"] is True
    assert stats["district_filter"] == "all"
    assert stats["total_count"] == 1
    assert stats["total_capacity"] == 500
    assert {item["type"]: item["count"] for item in stats["counts_by_type"]}["Wisata Alam"] == 1
    assert len(stats["counts_by_district"]) == 19

    markers = body["data"]["map"]["markers"]
    assert len(markers) == 1
    assert markers[0]["color"] == "green"
    assert (markers[0]["lat"], markers[0]["lng"]) == (-7.1581, 111.1378)
    assert body["data"]["sites"][0]["risk_badges"] == ["Aman"]

    persisted = json.loads(slot._values[KEY])
    assert persisted[0]["name"] == "Bledug Kuwu"


def test_submit_requires_name_and_village() -> None:
    client = _client()
    response = client.post("/v1/sites", json={**BLEDUG_KUWU, "village": "   "})
    body = response.json()

    assert response.status_code == 422
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/v1/sites").json()["meta"]["count"] == 0


def test_submit_coerces_capacity_and_defaults() -> None:
    client = _client()
    response = client.post(
        "/v1/sites",
        json={"name": "Makam Ki Ageng Selo", "village": "Selo", "capacity": "banyak", "risks": ["Banjir", "Flood"]},
    )
    data = response.json()["data"]

    assert response.status_code == 201
    assert data["capacity"] == 0
    assert data["district"] == "Brati"
    assert data["type"] == "Wisata Alam"
    assert data["risks"] == ["Banjir"]
    assert data["risk_badges"] == ["Banjir"]


def test_submit_rejects_unknown_district() -> None:
    client = _client()
    response = client.post("/v1/sites", json={**BLEDUG_KUWU, "district": "Atlantis"})
    assert response.status_code == 422


def test_filter_round_trip_and_validation() -> None:
    client = _client()
    client.post("/v1/sites", json=BLEDUG_KUWU)
    client.post("/v1/sites", json={**BLEDUG_KUWU, "name": "Waduk Simo", "district": "Kradenan", "type": "Wisata Air"})
    client.post("/v1/sites", json={**BLEDUG_KUWU, "name": "Api Abadi Mrapen", "district": "Godong"})

    assert client.put("/v1/dashboard/filter", json={"district": "Kradenan"}).json()["data"]["district"] == "Kradenan"
    assert client.get("/v1/dashboard/filter").json()["data"]["district"] == "Kradenan"

    stats = client.get("/v1/dashboard").json()["data"]["stats"]
    assert stats["total_count"] == 2
    assert stats["counts_by_district"] == [{"district": "Kradenan", "count": 2}]
    assert len(client.get("/v1/map").json()["data"]["markers"]) == 2

    bad = client.put("/v1/dashboard/filter", json={"district": "Atlantis"})
    assert bad.status_code == 422
    assert client.get("/v1/dashboard/filter").json()["data"]["district"] == "Kradenan"


def test_delete_flow() -> None:
    client = _client()
    site_id = client.post("/v1/sites", json=BLEDUG_KUWU).json()["data"]["id"]

    declined = client.delete(f"/v1/sites/{site_id}")
    assert declined.status_code == 200
    assert declined.json()["data"]["deleted"] is False

    confirmed = client.delete(f"/v1/sites/{site_id}?confirm=true")
    assert confirmed.json()["data"]["deleted"] is True

    dashboard = client.get("/v1/dashboard").json()["data"]
    assert dashboard["stats"]["total_count"] == 0
    assert dashboard["stats"]["total_capacity"] == 0
    assert dashboard["map"]["markers"] == []

    missing = client.delete(f"/v1/sites/{site_id}?confirm=true")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "NOT_FOUND"


def test_startup_loads_persisted_sites() -> None:
    stored = [
        {
            "id": "1700000000000",
            "name": "Goa Lawa",
            "village": "Tlogotirto",
            "district": "Purwodadi",
            "type": "Wisata Alam",
            "capacity": 50,
            "risks": ["Tanah Longsor"],
            "latitude": "-7.09",
            "longitude": "110.92",
        }
    ]
    client = _client(InMemoryKeyValueSlot({KEY: json.dumps(stored)}))

    markers = client.get("/v1/map").json()["data"]["markers"]
    assert [(m["lat"], m["lng"]) for m in markers] == [(-7.09, 110.92)]
    rows = client.get("/v1/sites").json()["data"]
    assert rows[0]["risk_badges"] == ["Tanah Longsor"]


def test_reference_lists_enumerations() -> None:
    data = _client().get("/v1/reference").json()["data"]
    assert len(data["districts"]) == 19
    assert [item["value"] for item in data["types"]] == ["Wisata Alam", "Wisata Air", "Wisata Religi"]
    assert data["tile_layer"]["url_template"].startswith("https://")


def test_metrics_endpoint_counts_requests() -> None:
    client = _client()
    client.post("/v1/sites", json=BLEDUG_KUWU)
    body = client.get("/metrics").text

    assert "tourism_http_requests_total" in body
    assert 'tourism_site_events_total{event="created"} 1.0' in body
    assert "tourism_sites 1.0" in body


def test_submit_rejects_over_long_name() -> None:
    client = _client()
    response = client.post("/v1/sites", json={**BLEDUG_KUWU, "name": "x" * 201})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/v1/sites").json()["meta"]["count"] == 0

    accepted = client.post("/v1/sites", json={**BLEDUG_KUWU, "name": "  " + "x" * 200 + "  "})
    assert accepted.status_code == 201
    assert accepted.json()["data"]["name"] == "x" * 200


def test_null_filter_means_all_districts() -> None:
    client = _client()
    client.put("/v1/dashboard/filter", json={"district": "Toroh"})

    response = client.put("/v1/dashboard/filter", json={"district": None})

    assert response.status_code == 200
    assert response.json()["data"]["district"] == "all"


def test_page_binds_delete_buttons_by_data_attribute() -> None:
    page = _client().get("/").text

    assert 'data-id="${esc(s.id)}"' in page
    assert "button.dataset.id" in page
    assert "onclick=\"removeSite(" not in page
