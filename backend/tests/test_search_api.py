from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tawjih.services.content_types import ContentKind


def test_empty_query_is_not_an_error_but_not_a_success(client, gateway) -> None:
    response = client.get("/api/v1/search?q=%20%20")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Search query is required"
    assert body["data"]["results"] == []
    assert body["data"]["totalPages"] == 0
    assert gateway.calls == []


def test_search_ranks_and_uses_camel_case(client, gateway) -> None:
    closing = datetime.now(timezone.utc) + timedelta(days=15)
    gateway.add_content(ContentKind.JOB, title_ar="مباراة الأساتذة", slug_ar="mubarat-asatida", closing_date=closing)
    gateway.add_content(ContentKind.GUIDANCE, title_ar="دليل", body_ar="كيف تستعد لمباراة الأساتذة")

    response = client.get("/api/v1/search", params={"q": "الأساتذة"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["query"] == "الأساتذة"
    assert data["total"] == 2
    assert data["totalPages"] == 1
    first = data["results"][0]
    assert first["type"] == "job"
    assert first["url"] == "/jobs/mubarat-asatida"
    assert "closingDate" in first
    assert "createdAt" in first
    assert data["results"][0]["score"] > data["results"][1]["score"]


def test_search_type_filter(client, gateway) -> None:
    gateway.add_content(ContentKind.JOB, title_ar="مباراة")
    gateway.add_content(ContentKind.EXAM, title_ar="مباراة")

    data = client.get("/api/v1/search", params={"q": "مباراة", "type": "exam"}).json()["data"]

    assert [result["type"] for result in data["results"]] == ["exam"]


def test_search_limit_is_bounded(client) -> None:
    response = client.get("/api/v1/search", params={"q": "مباراة", "limit": 0})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "limit"
