# ============================================
# accounts/authentication.py
# ============================================
import logging
import uuid

from django.core.exceptions import ValidationError
from rest_framework import authentication, exceptions

from accounts.models import User
from accounts.services.token_service import decode_token

logger = logging.getLogger(__name__)


class BearerTokenAuthentication(authentication.BaseAuthentication):
    """
    Authorization: Bearer <token>

    Resolves the signed user id to a live User row; every failure is a 401.
    """
    keyword = 'Bearer'

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).decode('latin-1').split()
        if not header or header[0].lower() != self.keyword.lower():
            return None
        if len(header) != 2:
            raise exceptions.AuthenticationFailed('No token provided')

        token = header[1]
        try:
            user_id = uuid.UUID(decode_token(token))
        except (ValidationError, ValueError) as exc:
            logger.info("[auth] Rejected bearer token: %s", exc)
            raise exceptions.AuthenticationFailed('Invalid token')

        user = User.objects.filter(id=user_id, is_active=True).first()
        if user is None:
            raise exceptions.AuthenticationFailed('User not found')
        return user, token

    def authenticate_header(self, request):
        return self.keyword
