# -*- coding: utf-8 -*-
from __future__ import annotations
import logging
from typing import Iterable

from django.conf import settings
from django.core.mail import EmailMessage

logger = logging.getLogger(__name__)


def _mask_email(email: str) -> str:
    """Keep only the first character of the local part in logs."""
    local, _, domain = (email or "").partition("@")
    if not domain:
        return "***"
    return f"{local[:1]}***@{domain}"


def _mk_subject(subject: str) -> str:
    prefix = getattr(settings, "EMAIL_SUBJECT_PREFIX", "")
    return f"{prefix}{subject}" if prefix else subject


def send_email_notification(
    *,
    subject: str,
    text_body: str,
    to_emails: Iterable[str],
) -> bool:
    """
    Send a mail through the configured Django backend.
    Returns True on success, False otherwise (the failure is logged).
    """
    tos = [e for e in (to_emails or []) if e]
    if not tos:
        logger.warning("[notify.email] No recipients; skip.")
        return False

    from_email = getattr(settings, "DEFAULT_FROM_EMAIL", None) or getattr(settings, "SERVER_EMAIL", None)
    if not from_email:
        logger.warning("[notify.email] DEFAULT_FROM_EMAIL / SERVER_EMAIL not set; skip.")
        return False

    try:
        msg = EmailMessage(
            subject=_mk_subject(subject),
            body=text_body,
            from_email=from_email,
            to=tos,
        )
        msg.send(fail_silently=False)
    except Exception:
        logger.exception("[notify.email] Send FAILED to %s", ", ".join(_mask_email(e) for e in tos))
        return False

    logger.info("[notify.email] Sent '%s' to %s", subject, ", ".join(_mask_email(e) for e in tos))
    return True
