"""
Input validation and sanitization utilities.
"""

from typing import Any, Dict, Optional
from pydantic import ValidationError
from loguru import logger

from ..schemas.shelter_data import FilterCriteria


CRITERIA_FIELDS = tuple(FilterCriteria.model_fields.keys())


def sanitize_string(value: Any, max_length: int = 1000, strip: bool = True) -> str:
    """
    Sanitize free-text input.

    Args:
        value: Input value
        max_length: Maximum allowed length
        strip: Strip leading/trailing whitespace

    Returns:
        Sanitized string
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)

    # Remove null bytes
    value = value.replace("\x00", "")

    # Truncate to max length
    value = value[:max_length]

    if strip:
        value = value.strip()

    return value


def validate_criteria_field(name: str) -> bool:
    """
    Check that a filter form field name is known.

    Args:
        name: Field name sent by the filter form

    Returns:
        True if the field belongs to FilterCriteria
    """
    return name in CRITERIA_FIELDS


def validate_filter_criteria(
    data: Dict[str, Any]
) -> tuple[bool, Optional[str], Optional[FilterCriteria]]:
    """
    Validate filter form values.

    Args:
        data: Filter form values keyed by field name; None values mean 'any'

    Returns:
        Tuple of (is_valid, error_message, criteria)
    """
    try:
        unknown = [key for key in data if not validate_criteria_field(key)]
        if unknown:
            return False, f"Unknown filter fields: {', '.join(sorted(unknown))}", None

        # Values are matched verbatim, so surrounding whitespace is kept
        cleaned = {
            key: sanitize_string(value, 100, strip=False)
            for key, value in data.items()
        }

        criteria = FilterCriteria(**cleaned)
        return True, None, criteria

    except ValidationError as e:
        logger.warning(f"Filter criteria validation failed: {e}")
        return False, str(e), None
