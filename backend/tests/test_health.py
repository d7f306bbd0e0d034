from __future__ import annotations


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"


def test_unknown_route_uses_error_envelope(client) -> None:
    response = client.get("/api/v1/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Not Found"}


def test_detailed_health_pings_the_database(client, gateway) -> None:
    response = client.get("/health/detailed")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["checks"]["database"] == {"ok": True}
    assert body["checks"]["response_cache"] == {"ok": True, "entries": 0}
    assert gateway.calls == [("gateway", "ping")]


def test_detailed_health_reports_database_outage(client, gateway) -> None:
    gateway.fail("gateway", "ping")

    body = client.get("/health/detailed").json()

    assert body["status"] == "degraded"
    assert body["checks"]["database"] == {"ok": False, "message": "gateway.ping failed"}
