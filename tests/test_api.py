# pytest tests/test_api.py -q

import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.services.ranking_service import RouteRankingService, get_ranking_service


def test_root(api_client):
    response = api_client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "operational"


def test_health(api_client):
    response = api_client.get("/api/routes/health")
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "healthy"
    assert data["incident_data_loaded"] is True
    assert data["incident_count"] == 8
    assert data["active_incident_count"] == 8

    assert api_client.get("/health").json() == {"api_status": "healthy", "service_status": "healthy"}


def test_rank_routes(api_client, osrm_response):
    response = api_client.post("/api/routes/rank", json=osrm_response)
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Found 3 routes"
    assert data["selected_index"] == 0
    assert [r["source_index"] for r in data["routes"]] == [1, 2, 0]
    assert data["routes"][0]["severity"] == "Safe"
    assert data["routes"][0]["style"]["selected"] is True
    assert data["routes"][0]["style"]["color"] == "#003d99"
    assert data["analysis"]["recommendation"]["recommended_route"] == 1
    assert len(data["route_geojson"]["features"]) == 5
    assert data["bounds"] == pytest.approx([-87.6359, 41.87, -87.6233, 41.895])


def test_rank_without_routes(api_client):
    response = api_client.post("/api/routes/rank", json={"code": "Ok", "routes": []})
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is False
    assert data["message"] == "Could not calculate routes. Try different addresses."
    assert data["routes"] == []


def test_rank_with_failed_routing_code(api_client, osrm_response):
    osrm_response["code"] = "NoRoute"
    response = api_client.post("/api/routes/rank", json=osrm_response)
    assert response.json()["success"] is False


def test_rank_validation_error(api_client):
    response = api_client.post("/api/routes/rank", json={"routes": [{"geometry": {"coordinates": [[1.0]]}}]})
    assert response.status_code == 422

    data = response.json()
    assert data["success"] is False
    assert data["error"] == "validation_error"
    assert data["details"]


def test_select_route(api_client, osrm_response):
    api_client.post("/api/routes/rank", json=osrm_response)

    response = api_client.post("/api/routes/select", json={"index": 2})
    assert response.status_code == 200
    data = response.json()
    assert data["selected_index"] == 2
    assert data["routes"][2]["style"]["selected"] is True
    assert data["routes"][0]["style"]["weight"] == 5


def test_select_out_of_range_keeps_state(api_client, osrm_response):
    api_client.post("/api/routes/rank", json=osrm_response)
    api_client.post("/api/routes/select", json={"index": 1})

    response = api_client.post("/api/routes/select", json={"index": 7})
    assert response.status_code == 400
    assert "out of range" in response.json()["detail"]

    assert api_client.get("/api/routes/selection").json()["selected_index"] == 1


def test_clear_routes(api_client, osrm_response):
    api_client.post("/api/routes/rank", json=osrm_response)

    data = api_client.delete("/api/routes").json()
    assert data["success"] is False
    assert data["selected_index"] is None
    assert data["count"] == 0

    response = api_client.post("/api/routes/select", json={"index": 0})
    assert response.status_code == 400


def test_list_incidents(api_client):
    data = api_client.get("/api/incidents").json()

    assert data["count"] == 7
    assert "OTHER" not in data["active_categories"]
    assert {p["color"] for p in data["points"]} >= {"#ff4444", "#9900ff"}


def test_toggle_category(api_client):
    data = api_client.put("/api/incidents/categories", json={"category": "theft", "enabled": False}).json()

    assert data["count"] == 5
    assert "THEFT" not in data["active_categories"]


def test_heatmap(api_client):
    points = api_client.get("/api/incidents/heatmap").json()["points"]

    assert len(points) == 7
    assert [41.879, -87.6265, 1.0] in points


def test_date_window(api_client):
    data = api_client.get("/api/incidents/date-window").json()
    assert data["available"]["start"].startswith("2021-01-05")
    assert data["applied"] == data["available"]

    response = api_client.post("/api/incidents/date-window",
                               json={"start": "2021-02-01T00:00:00", "end": "2021-02-28T23:59:59"})
    assert response.status_code == 200
    # ASSAULT, ROBBERY, HATE_CRIME, CRIMINAL_DAMAGE plus the undated BATTERY
    assert response.json()["active_incident_count"] == 5

    data = api_client.delete("/api/incidents/date-window").json()
    assert data["active_incident_count"] == 8


def test_date_window_start_after_end(api_client):
    response = api_client.post("/api/incidents/date-window",
                               json={"start": "2021-03-01T00:00:00", "end": "2021-01-01T00:00:00"})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_date_window_mixed_timezones(api_client):
    response = api_client.post("/api/incidents/date-window",
                               json={"start": "2021-01-01T00:00:00Z", "end": "2021-03-01T00:00:00"})
    assert response.status_code == 200

    data = response.json()
    assert data["applied"]["start"] == "2021-01-01T00:00:00"
    # Everything but the 2021-03-01 09:10 theft
    assert data["active_incident_count"] == 7


def test_date_window_mixed_timezones_start_after_end(api_client):
    response = api_client.post("/api/incidents/date-window",
                               json={"start": "2021-03-01T00:00:00Z", "end": "2021-01-01T00:00:00"})
    assert response.status_code == 422
    assert response.json()["error"] == "validation_error"


def test_date_window_offset_is_converted_to_utc(api_client):
    # 03:00+02:00 is 01:00 UTC, before the 01:40 assault on 2021-02-02
    response = api_client.post("/api/incidents/date-window",
                               json={"start": "2021-02-02T03:00:00+02:00", "end": "2021-02-02T23:59:59+02:00"})
    assert response.status_code == 200
    # The assault plus the undated battery
    assert response.json()["active_incident_count"] == 2


def test_openapi_documents_error_body(api_client):
    paths = api_client.get("/openapi.json").json()["paths"]
    error_ref = {"$ref": "#/components/schemas/ErrorResponse"}

    incidents = paths["/api/incidents"]["get"]["responses"]
    assert incidents["503"]["content"]["application/json"]["schema"] == error_ref

    rank = paths["/api/routes/rank"]["post"]["responses"]
    assert rank["422"]["content"]["application/json"]["schema"] == error_ref


def test_missing_incident_data():
    service = RouteRankingService(incidents=[])
    app.dependency_overrides[get_ranking_service] = lambda: service
    try:
        client = TestClient(app)

        response = client.get("/api/incidents")
        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "data_unavailable"
        assert data["message"] == "Failed to load crime data"

        assert client.get("/api/routes/health").json()["status"] == "degraded"
    finally:
        app.dependency_overrides.clear()


def test_ranking_works_without_incident_data(osrm_response):
    service = RouteRankingService(incidents=[])
    app.dependency_overrides[get_ranking_service] = lambda: service
    try:
        data = TestClient(app).post("/api/routes/rank", json=osrm_response).json()

        assert data["success"] is True
        assert [r["source_index"] for r in data["routes"]] == [0, 1, 2]
        assert all(r["score"] == 0.0 for r in data["routes"])
    finally:
        app.dependency_overrides.clear()
