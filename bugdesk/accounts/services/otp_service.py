# -*- coding: utf-8 -*-
"""
OTP-gated registration:
- send_otp: issue a 6-digit code (one live code per email) and mail it
- verify_otp_and_register: check code + expiry, create the user, issue a token
"""
from __future__ import annotations
import logging
import secrets
from datetime import timedelta
from typing import Tuple

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from accounts.models import OtpCode, User
from accounts.services.token_service import issue_token
from accounts.utils.notify import send_email_notification

logger = logging.getLogger(__name__)


def generate_code() -> str:
    return str(100000 + secrets.randbelow(900000))


def issue_otp(email: str) -> OtpCode:
    """Upsert the OTP row for this email; any previously issued code stops working."""
    email = User.objects.normalize_email(email).lower()
    otp, _ = OtpCode.objects.update_or_create(
        email=email,
        defaults={
            "code": generate_code(),
            "expires_at": timezone.now() + timedelta(minutes=settings.OTP_TTL_MINUTES),
        },
    )
    return otp


def send_otp(email: str) -> bool:
    otp = issue_otp(email)
    logger.info("[otp] Issued code for %s (expires %s)", otp.email, otp.expires_at.isoformat())
    return send_email_notification(
        subject="Your OTP Code",
        text_body=f"Your OTP code is {otp.code}. It expires in {settings.OTP_TTL_MINUTES} minutes.",
        to_emails=[otp.email],
    )


def check_otp(email: str, code: str) -> None:
    record = OtpCode.objects.filter(email=email).first()
    if record is None or not record.matches(code, timezone.now()):
        logger.warning("[otp] Invalid or expired OTP attempt for: %s", email)
        raise ValidationError("Invalid or expired OTP")


@transaction.atomic
def verify_otp_and_register(*, name: str, email: str, password: str, otp: str) -> Tuple[User, str]:
    email = User.objects.normalize_email(email).lower()
    check_otp(email, otp)

    if User.objects.filter(email__iexact=email).exists():
        logger.warning("[otp] Attempted registration with existing email: %s", email)
        raise ValidationError("User already exists")

    user = User.objects.create_user(email=email, password=password, name=name)
    logger.info("[otp] Registered user %s", user.id)
    return user, issue_token(user)
