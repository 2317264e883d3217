from datetime import timedelta
import logging

from fastapi.testclient import TestClient

from spotbnb.core.request_context import RequestLogFilter
from spotbnb.middleware.prometheus_middleware import normalize_path


class TestHealth:
    def test_health_reports_database(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "ok"
        assert body["service"] == "spotbnb-api"
        assert body["environment"] == "test"

    def test_request_id_is_echoed(self, client: TestClient):
        response = client.get("/health", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert response.headers["X-Process-Time"].endswith("ms")

    def test_request_id_is_generated(self, client: TestClient):
        response = client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 26


class TestMetrics:
    def test_metrics_exposition(self, client: TestClient):
        client.get("/api/spots")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "spotbnb_http_requests_total" in response.text
        assert 'endpoint="/api/spots"' in response.text

    def test_ids_are_collapsed_in_labels(self):
        assert normalize_path("/api/spots/01HZX3K9V6Y8Q2W4E5R7T9Y1V3/bookings") == "/api/spots/:id/bookings"
        assert normalize_path("/api/spots/42") == "/api/spots/:id"
        assert normalize_path("/api/bookings/current") == "/api/bookings/current"


class TestErrors:
    def test_unknown_route_uses_envelope(self, client: TestClient):
        response = client.get("/api/nowhere")

        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}


class TestRequestLogging:
    def test_service_logs_name_request_and_user(self, client: TestClient, spot, guest, guest_headers, today, caplog):
        caplog.handler.addFilter(RequestLogFilter())
        caplog.set_level(logging.INFO, logger="spotbnb.services.booking_service")
        payload = {
            "startDate": (today + timedelta(days=1)).isoformat(),
            "endDate": (today + timedelta(days=3)).isoformat(),
        }

        response = client.post(
            f"/api/spots/{spot.id}/bookings",
            json=payload,
            headers={**guest_headers, "X-Request-ID": "req-booking"},
        )

        assert response.status_code == 201
        [record] = [r for r in caplog.records if "created on spot" in r.getMessage()]
        assert record.request_id == "req-booking"
        assert record.user_id == guest.id
