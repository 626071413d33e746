# -*- coding: utf-8 -*-
"""
Screenshot files for tickets:
- validate_upload: type allow-list + size ceiling, before anything is written
- store_upload: write to default storage as `<field>-<epoch ms><ext>`
- remove_stored: best-effort unlink; failures are logged, never raised
"""
from __future__ import annotations
import logging
import os
import time
from typing import Iterable, List
from urllib.parse import urlparse

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

FIELD_NAME = "screenshot"
ALLOWED_TYPES = ("jpeg", "jpg", "png", "gif")
TYPE_ERROR = "Error: File upload only supports images (jpeg, jpg, png, gif)!"


def _matches_allowed(value: str) -> bool:
    value = (value or "").lower()
    return any(t in value for t in ALLOWED_TYPES)


def validate_upload(upload) -> None:
    if upload is None:
        raise ValidationError("No file uploaded.")

    ext = os.path.splitext(upload.name or "")[1].lower()
    if not (_matches_allowed(getattr(upload, "content_type", "")) and _matches_allowed(ext)):
        raise ValidationError(TYPE_ERROR)

    max_bytes = int(getattr(settings, "SCREENSHOT_MAX_BYTES", 10 * 1024 * 1024))
    if upload.size > max_bytes:
        raise ValidationError("File too large")


def store_upload(upload) -> str:
    """Persist the upload; returns the stored file name (storage may suffix it on collision)."""
    ext = os.path.splitext(upload.name or "")[1].lower()
    name = f"{FIELD_NAME}-{int(time.time() * 1000)}{ext}"
    stored = default_storage.save(name, upload)
    logger.info("[screenshots] Stored %s (%d bytes)", stored, upload.size)
    return stored


def public_url(stored_name: str, base_url: str) -> str:
    base = (getattr(settings, "PUBLIC_BASE_URL", "") or base_url or "").rstrip("/")
    return f"{base}{settings.MEDIA_URL}{stored_name}"


def stored_name_from_url(url: str) -> str:
    return os.path.basename(urlparse(url or "").path)


def remove_stored(names: Iterable[str]) -> List[str]:
    """Delete stored files; returns names actually removed."""
    removed = []
    for name in names:
        if not name:
            continue
        try:
            if default_storage.exists(name):
                default_storage.delete(name)
                removed.append(name)
        except Exception:
            logger.exception("[screenshots] Failed to delete screenshot file: %s", name)
    return removed


def cleanup_ticket_screenshots(urls: Iterable[str]) -> List[str]:
    return remove_stored(stored_name_from_url(u) for u in urls)
