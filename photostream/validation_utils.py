"""
Validation and identifier helpers for the photo feed service
"""
import secrets
import time
import uuid
from datetime import datetime, timezone
from typing import List, Dict, Any, Optional

from .constants import FeedConstants, IdentityConstants
from .exceptions import ValidationError


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> List[str]:
    """
    Validate that all required fields are present in the data.

    Args:
        data: Dictionary containing the data to validate
        required_fields: List of required field names

    Returns:
        List of missing field names (empty if all fields are present)
    """
    if not isinstance(data, dict):
        return required_fields

    missing_fields = []
    for field in required_fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing_fields.append(field)

    return missing_fields


def require_text(value: Any, field: str, max_length: Optional[int] = None) -> str:
    """
    Ensure a required string argument is present and non-empty

    Raises:
        ValidationError: If the value is missing, not a string, empty or too long
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required", field=field)

    if max_length and len(value) > max_length:
        raise ValidationError(
            f"{field} must be at most {max_length} characters",
            field=field
        )

    return value


def validate_page_size(page_size: Any, default: int, maximum: int) -> int:
    """
    Normalize a requested feed page size

    Args:
        page_size: Requested size (int, numeric string or None)
        default: Size used when nothing was requested
        maximum: Largest accepted size

    Returns:
        Page size as int

    Raises:
        ValidationError: If the size is not an integer in 1..maximum
    """
    if page_size is None or page_size == '':
        return default

    if isinstance(page_size, bool):
        raise ValidationError("page_size must be an integer", field='page_size')

    # int() would silently truncate 2.5 to 2
    if isinstance(page_size, float) and not page_size.is_integer():
        raise ValidationError("page_size must be an integer", field='page_size', value=str(page_size))

    try:
        size = int(page_size)
    except (TypeError, ValueError):
        raise ValidationError("page_size must be an integer", field='page_size', value=str(page_size))

    if size < 1 or size > maximum:
        raise ValidationError(
            f"page_size must be between 1 and {maximum}",
            field='page_size',
            value=str(page_size)
        )

    return size


def current_time_millis() -> int:
    """Milliseconds since epoch, the photo feed sort key"""
    return int(time.time() * 1000)


def generate_photo_id() -> str:
    """
    Generate unique photo ID

    Returns:
        Unique photo identifier
    """
    timestamp = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')
    unique_id = str(uuid.uuid4())[:8]
    return f"photo_{timestamp}_{unique_id}"


def generate_storage_key(prefix: str = FeedConstants.UPLOAD_PREFIX) -> str:
    """
    Generate a write-once blob key for a pending upload

    Returns:
        S3 object key
    """
    timestamp = datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')
    return f"{prefix}/{timestamp}_{uuid.uuid4().hex}"


def generate_user_id() -> str:
    """
    Generate an opaque client identity token (user_ + 9 base36 characters)

    The token is possession-based identity, not a credential.
    """
    random_part = ''.join(
        secrets.choice(IdentityConstants.USER_ID_ALPHABET)
        for _ in range(IdentityConstants.USER_ID_RANDOM_LENGTH)
    )
    return f"{IdentityConstants.USER_ID_PREFIX}{random_part}"


def default_username(user_id: str) -> str:
    """Display name used when a client never picked one"""
    suffix = user_id[-IdentityConstants.DEFAULT_USERNAME_SUFFIX_LENGTH:]
    return f"{IdentityConstants.DEFAULT_USERNAME_PREFIX}{suffix}"
