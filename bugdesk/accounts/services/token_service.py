# accounts/services/token_service.py
import time
from typing import Any, Dict

import jwt
from django.conf import settings
from django.core.exceptions import ValidationError


def issue_token(user) -> str:
    """Signed bearer token carrying the user id; valid for JWT_TTL_DAYS."""
    now = int(time.time())
    payload = {
        "userId": str(user.id),
        "iat": now,
        "exp": now + int(settings.JWT_TTL_DAYS) * 24 * 60 * 60,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def decode_token(token: str) -> str:
    """
    Verify a bearer token and return the user id it carries.
    """
    if not token:
        raise ValidationError("No token provided")

    try:
        data: Dict[str, Any] = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except jwt.ExpiredSignatureError:
        raise ValidationError("Token expired")
    except jwt.InvalidTokenError:
        raise ValidationError("Invalid token")

    user_id = data.get("userId")
    if not user_id:
        raise ValidationError("Invalid token")
    return str(user_id)
