# ============================================
# tracking/validators.py
# ============================================
import uuid

from django.core.exceptions import ValidationError


def parse_id(value, label: str) -> uuid.UUID:
    """Well-formedness check for resource ids; 'label' names the resource in the error."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError(f"Invalid {label} ID format.")


def is_valid_id(value) -> bool:
    try:
        parse_id(value, 'resource')
    except ValidationError:
        return False
    return True
