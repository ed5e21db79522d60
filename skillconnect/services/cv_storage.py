"""
CV upload: size/type checks, then a write to the storage backend.
Checks run before the backend is touched, so rejected files never land in storage.
"""

import logging
import time
from pathlib import Path

from skillconnect.config import settings
from skillconnect.core.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

EXTENSIONS = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


class CVRejected(Exception):
    """Upload refused before storage; status_code is 413 (size) or 415 (type)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class LocalStorage:
    """Files under storage_dir/<bucket>/<key>, served at storage_public_url."""

    def __init__(self, root: str | None = None, public_url: str | None = None):
        self.root = Path(root or settings.storage_dir)
        self.public_url = (public_url or settings.storage_public_url).rstrip("/")

    def upload(self, bucket: str, key: str, data: bytes) -> str:
        target = self.root / bucket / key
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.exception("Storage write failed for %s/%s", bucket, key)
            raise ServiceError(ErrorKind.STORAGE, f"storage write failed: {e}") from e
        return f"{self.public_url}/{bucket}/{key}"


def allowed_types() -> set[str]:
    return {t.strip() for t in settings.cv_allowed_types.split(",") if t.strip()}


def validate_cv(content_type: str | None, size: int) -> None:
    max_bytes = settings.cv_max_upload_mb * 1024 * 1024
    if size > max_bytes:
        raise CVRejected(413, f"File size must be less than {settings.cv_max_upload_mb}MB")
    if (content_type or "") not in allowed_types():
        raise CVRejected(415, "Please upload a PDF or Word document")


def storage_key(user_id: str, content_type: str, now_ms: int | None = None) -> str:
    # Extension comes from the validated MIME type only; the client's filename never reaches the key
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{user_id}/{now_ms}.{EXTENSIONS.get(content_type, 'bin')}"


def store_cv(
    user_id: str,
    filename: str | None,
    content_type: str | None,
    data: bytes,
    storage: LocalStorage | None = None,
) -> tuple[str, str]:
    """Validate then store a CV. Returns (public_url, original_filename)."""
    validate_cv(content_type, len(data))
    storage = storage or LocalStorage()
    key = storage_key(user_id, content_type)
    url = storage.upload(settings.cv_bucket, key, data)
    logger.info("Stored CV for user=%s at %s (%d bytes)", user_id, key, len(data))
    return url, filename or Path(key).name
