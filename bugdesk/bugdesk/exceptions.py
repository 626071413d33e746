# ============================================
# bugdesk/exceptions.py
# ============================================
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated, NotFound, PermissionDenied
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _flatten(detail) -> str:
    """Collapse DRF error detail (str / list / dict) into one readable line."""
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            text = _flatten(value)
            parts.append(text if field in ("detail", "non_field_errors") else f"{field}: {text}")
        return "; ".join(parts)
    if isinstance(detail, (list, tuple)):
        return "; ".join(_flatten(item) for item in detail)
    return str(detail)


def api_exception_handler(exc, context):
    """
    Map service-layer exceptions to HTTP responses.

    Services raise Django's own ValidationError / PermissionDenied / Http404;
    each is mapped to its DRF counterpart so the message is kept.
    Anything DRF does not recognise is an upstream failure: logged, 500.
    """
    if isinstance(exc, DjangoValidationError):
        return Response({"detail": "; ".join(exc.messages)}, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, Http404):
        exc = NotFound(*exc.args)
    elif isinstance(exc, DjangoPermissionDenied):
        exc = PermissionDenied(*exc.args)

    if isinstance(exc, NotAuthenticated):
        exc = NotAuthenticated("No token provided")

    response = exception_handler(exc, context)
    if response is not None:
        response.data = {"detail": _flatten(response.data)}
        return response

    request = context.get("request")
    logger.exception(
        "[api] Unhandled error on %s %s",
        getattr(request, "method", "?"),
        getattr(request, "path", "?"),
    )
    return Response({"detail": "Server error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
