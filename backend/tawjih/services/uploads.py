"""Admin file uploads: type checks, filename sanitizing and storage on local disk."""

import logging
import re
import time
from pathlib import Path

logger = logging.getLogger(__name__)

ALLOWED_FILE_TYPES: dict[str, tuple[str, ...]] = {
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "image/webp": (".webp",),
    "application/pdf": (".pdf",),
    "text/plain": (".txt",),
    "application/msword": (".doc",),
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (".docx",),
}
MAX_FILENAME_LENGTH = 255

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._\-\u0600-\u06FF]")
_DOT_RUNS = re.compile(r"\.\.+")


class UploadRejected(ValueError):
    """The file failed a type or name check."""


def sanitize_filename(name: str) -> str:
    """Replace path separators and unexpected characters; never returns a dotfile."""
    cleaned = _UNSAFE_CHARS.sub("_", name)
    cleaned = _DOT_RUNS.sub("_", cleaned)
    return cleaned.strip(".")[:MAX_FILENAME_LENGTH]


def is_allowed(content_type: str | None, filename: str) -> bool:
    """MIME type must be whitelisted and agree with the file extension."""
    extensions = ALLOWED_FILE_TYPES.get(content_type or "")
    if not extensions:
        return False
    return Path(filename).suffix.lower() in extensions


def store_upload(directory: str | Path, filename: str, content_type: str | None, data: bytes) -> str:
    """Validate and write the file; returns the stored (unique) name."""
    if not is_allowed(content_type, filename):
        raise UploadRejected(
            "Invalid file type. Allowed types: images (jpg, png, webp), PDF, text, and document files"
        )
    safe_name = sanitize_filename(filename)
    if not safe_name:
        raise UploadRejected("Invalid filename")

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    unique_name = f"{int(time.time() * 1000)}-{safe_name}"
    (target_dir / unique_name).write_bytes(data)
    logger.info("Stored upload %s (%d bytes, %s)", unique_name, len(data), content_type)
    return unique_name
