# views/utils.py
"""
Shared drf-spectacular helpers for the tracking APIViews.
"""
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, inline_serializer
from drf_spectacular.types import OpenApiTypes
from rest_framework import serializers

# ---- Reusable error schema
ErrorSerializer = inline_serializer(
    name="Error",
    fields={"detail": serializers.CharField()}
)

MessageSerializer = inline_serializer(
    name="TrackingMessage",
    fields={"message": serializers.CharField()}
)

# ---- Param helpers

def path_uuid(name: str, description: str):
    return OpenApiParameter(name, OpenApiTypes.UUID, OpenApiParameter.PATH, description=description)

# ---- Convenience for common responses

def std_errors(extra: dict | None = None):
    """Standard error response mapping you can merge into responses=..."""
    errs = {
        400: OpenApiResponse(ErrorSerializer, description="Bad Request"),
        401: OpenApiResponse(ErrorSerializer, description="Unauthorized"),
        403: OpenApiResponse(ErrorSerializer, description="Forbidden"),
        404: OpenApiResponse(ErrorSerializer, description="Not Found"),
    }
    if extra:
        errs.update(extra)
    return errs
