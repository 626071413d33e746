# accounts/services/auth_service.py
from typing import Tuple

from django.core.exceptions import ValidationError

from accounts.models import User
from accounts.services.token_service import issue_token


def login(*, email: str, password: str) -> Tuple[User, str]:
    user = User.objects.filter(email__iexact=(email or "").strip(), is_active=True).first()
    if user is None or not user.check_password(password):
        raise ValidationError("Invalid credentials")
    return user, issue_token(user)
