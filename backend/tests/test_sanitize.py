from __future__ import annotations

import pytest

from tawjih.services.sanitize import parse_flag, sanitize_email, sanitize_html, sanitize_string, sanitize_url
from tawjih.services.uploads import UploadRejected, is_allowed, sanitize_filename, store_upload


def test_sanitize_string_keeps_arabic_and_strips_markup() -> None:
    assert sanitize_string("  مباراة   <script>توظيف</script> ") == "مباراة scriptتوظيفscript"


def test_sanitize_string_drops_disallowed_symbols_and_truncates() -> None:
    assert sanitize_string("تسجيل @ #2026!") == "تسجيل  2026!"
    assert sanitize_string("أبجد", 2) == "أب"


def test_sanitize_email_normalizes() -> None:
    assert sanitize_email("  Sara@Example.COM ") == "sara@example.com"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("example.ma/doc.pdf", "https://example.ma/doc.pdf"),
        ("http://example.ma", "http://example.ma"),
        ("https://", "https://"),
    ],
)
def test_sanitize_url(value: str, expected: str) -> None:
    assert sanitize_url(value) == expected


def test_sanitize_html_removes_active_content() -> None:
    html = (
        '<p onclick="steal()">نص</p><script>alert(1)</script>'
        '<iframe src="x"></iframe><a href="javascript:alert(1)">رابط</a>'
    )

    cleaned = sanitize_html(html)

    assert cleaned.startswith("<p>نص</p>")
    assert cleaned.endswith("<a>رابط</a>")
    assert "<script" not in cleaned
    assert "<iframe" not in cleaned


def test_sanitize_html_strips_unquoted_and_single_quoted_handlers() -> None:
    cleaned = sanitize_html("<img src=x onerror=alert(1)><p onclick='steal()'>نص</p><svg/onload=alert(1)>")

    assert "onerror" not in cleaned
    assert "onclick" not in cleaned
    assert "onload" not in cleaned
    assert "<svg" not in cleaned
    assert '<img src="x">' in cleaned
    assert "<p>نص</p>" in cleaned


def test_sanitize_html_keeps_safe_links() -> None:
    html = '<h2>المراجع</h2><a href="https://men.gov.ma" title="الوزارة" style="color:red">الموقع</a>'

    assert sanitize_html(html) == '<h2>المراجع</h2><a href="https://men.gov.ma" title="الوزارة">الموقع</a>'


@pytest.mark.parametrize(("value", "expected"), [(True, True), ("false", False), ("yes", None), (1, None)])
def test_parse_flag(value, expected) -> None:
    assert parse_flag(value) is expected


# --- Uploads ---


def test_sanitize_filename_neutralizes_paths() -> None:
    assert sanitize_filename("../../etc/logo.png") == "____etc_logo.png"
    assert sanitize_filename("إعلان مباراة.pdf") == "إعلان_مباراة.pdf"
    assert sanitize_filename(".env") == "env"


def test_is_allowed_checks_type_and_extension() -> None:
    assert is_allowed("application/pdf", "annonce.PDF")
    assert not is_allowed("application/pdf", "annonce.exe")
    assert not is_allowed("application/x-sh", "run.sh")
    assert not is_allowed(None, "logo.png")


def test_store_upload_writes_unique_file(tmp_path) -> None:
    name = store_upload(tmp_path / "uploads", "logo.png", "image/png", b"png-bytes")

    assert name.endswith("-logo.png")
    assert (tmp_path / "uploads" / name).read_bytes() == b"png-bytes"


def test_store_upload_rejects_before_touching_disk(tmp_path) -> None:
    with pytest.raises(UploadRejected):
        store_upload(tmp_path / "uploads", "virus.exe", "image/png", b"x")

    assert not (tmp_path / "uploads").exists()
