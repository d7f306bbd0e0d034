from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tawjih.services.content_types import ContentKind

NOW = datetime.now(timezone.utc)


def test_list_jobs_returns_published_newest_first(client, gateway) -> None:
    gateway.add_content(ContentKind.JOB, title_ar="مباراة أولى", created_at=NOW - timedelta(days=2))
    gateway.add_content(ContentKind.JOB, title_ar="مباراة ثانية", created_at=NOW)
    gateway.add_content(ContentKind.JOB, title_ar="مسودة", published=False)

    response = client.get("/api/v1/jobs")

    assert response.status_code == 200
    body = response.json()
    assert [item["title_ar"] for item in body["data"]] == ["مباراة ثانية", "مباراة أولى"]
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 2, "pages": 1}


def test_list_pagination_and_filters(client, gateway) -> None:
    for i in range(12):
        gateway.add_content(ContentKind.GUIDANCE, region="مراكش آسفي", created_at=NOW - timedelta(hours=i))
    gateway.add_content(ContentKind.GUIDANCE, region="طنجة تطوان الحسيمة", featured=True)

    second = client.get("/api/v1/guidance?page=2&limit=5&region=مراكش آسفي").json()
    featured = client.get("/api/v1/guidance?featured=true").json()

    assert len(second["data"]) == 5
    assert second["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}
    assert [item["region"] for item in featured["data"]] == ["طنجة تطوان الحسيمة"]


def test_exams_are_ordered_by_date_and_filter_by_level(client, gateway) -> None:
    gateway.add_content(ContentKind.EXAM, title_ar="امتحان لاحق", exam_date=NOW + timedelta(days=30))
    gateway.add_content(ContentKind.EXAM, title_ar="امتحان قريب", exam_date=NOW + timedelta(days=3))
    gateway.add_content(ContentKind.EXAM, title_ar="امتحان إعدادي", school_level="الثالثة إعدادي")

    ordered = client.get("/api/v1/exams").json()["data"]
    college = client.get("/api/v1/exams?school_level=الثالثة إعدادي").json()["data"]

    assert [item["title_ar"] for item in ordered][:2] == ["امتحان إعدادي", "امتحان قريب"]
    assert [item["title_ar"] for item in college] == ["امتحان إعدادي"]
    assert {"exam_date", "subject", "school_level"} <= set(college[0])


def test_limit_out_of_range_is_rejected(client) -> None:
    response = client.get("/api/v1/jobs?limit=101")

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "limit"


def test_detail_by_slug(client, gateway) -> None:
    gateway.add_content(
        ContentKind.JOB,
        slug_ar="mubarat-mohandisin",
        seo_meta={"title": "مباراة المهندسين", "description": None},
    )

    found = client.get("/api/v1/jobs/mubarat-mohandisin")
    missing = client.get("/api/v1/jobs/does-not-exist")

    assert found.status_code == 200
    assert found.json()["data"]["seo_meta"]["title"] == "مباراة المهندسين"
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Job competition not found"}


def test_unpublished_detail_is_hidden(client, gateway) -> None:
    gateway.add_content(ContentKind.GUIDANCE, slug_ar="draft-guide", published=False)

    assert client.get("/api/v1/guidance/draft-guide").status_code == 404


def test_detail_is_cached(client, gateway) -> None:
    gateway.add_content(ContentKind.JOB, slug_ar="cached-job")

    client.get("/api/v1/jobs/cached-job")
    client.get("/api/v1/jobs/cached-job")

    assert gateway.calls.count(("jobCompetition", "find_first")) == 1


def test_every_response_has_security_headers(client) -> None:
    response = client.get("/api/v1/jobs/missing")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "default-src 'self'" in response.headers["content-security-policy"]


# --- Admin edits by slug ---


def _job_payload(**overrides) -> dict:
    payload = {
        "title_ar": "مباراة توظيف متصرفين",
        "slug_ar": "mubarat-mutasarrifin",
        "body_ar": "تفاصيل مباراة توظيف المتصرفين من الدرجة الثالثة",
        "sector": "الإدارة",
        "region": "وطني",
        "published": True,
        "closing_date": (NOW + timedelta(days=10)).isoformat(),
    }
    payload.update(overrides)
    return payload


def test_create_requires_admin(client, gateway, user_headers) -> None:
    response = client.post("/api/v1/jobs", json=_job_payload(), headers=user_headers)

    assert response.status_code == 401
    assert gateway.mutations() == []


def test_admin_creates_job(client, gateway, admin_headers) -> None:
    response = client.post("/api/v1/jobs", json=_job_payload(), headers=admin_headers)

    assert response.status_code == 201
    assert response.headers["cache-control"].startswith("no-store")
    assert response.json()["data"]["slug_ar"] == "mubarat-mutasarrifin"
    assert client.get("/api/v1/jobs/mubarat-mutasarrifin").status_code == 200


def test_create_validates_lengths(client, admin_headers) -> None:
    response = client.post("/api/v1/jobs", json=_job_payload(title_ar="قصير"), headers=admin_headers)

    assert response.status_code == 400
    assert [error["field"] for error in response.json()["errors"]] == ["title_ar"]


def test_exam_create_needs_exam_date(client, admin_headers) -> None:
    response = client.post(
        "/api/v1/exams",
        json=_job_payload(slug_ar="imtihan-jihawi", subject="الفيزياء", school_level="الأولى باكالوريا"),
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert "exam_date" in [error["field"] for error in response.json()["errors"]]


def test_update_by_slug(client, gateway, admin_headers) -> None:
    record = gateway.add_content(ContentKind.GUIDANCE, slug_ar="old-guide-slug")

    response = client.put(
        "/api/v1/guidance/old-guide-slug",
        json={"title_ar": "دليل التسجيل الجامعي", "closing_date": NOW.isoformat()},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert record.title_ar == "دليل التسجيل الجامعي"
    assert not hasattr(record, "closing_date")


def test_update_missing_slug_is_404(client, admin_headers) -> None:
    response = client.put("/api/v1/exams/nope-nope", json={"subject": "التاريخ"}, headers=admin_headers)
    assert response.status_code == 404


def test_update_to_taken_slug_conflicts(client, gateway, admin_headers) -> None:
    gateway.add_content(ContentKind.JOB, slug_ar="first-slug")
    gateway.add_content(ContentKind.JOB, slug_ar="second-slug")

    response = client.put("/api/v1/jobs/first-slug", json={"slug_ar": "second-slug"}, headers=admin_headers)

    assert response.status_code == 409


def test_delete_by_slug_cleans_saved_jobs(client, gateway, admin_headers, user) -> None:
    job = gateway.add_content(ContentKind.JOB, slug_ar="to-be-removed")
    gateway.saved_jobs.add(user_id=user.id, job_id=job.id)

    response = client.delete("/api/v1/jobs/to-be-removed", headers=admin_headers)

    assert response.status_code == 200
    assert gateway.content(ContentKind.JOB).rows == []
    assert gateway.saved_jobs.rows == []
