"""Utility modules for PawShelters."""

from .api_clients import SupabaseClient, MockSupabaseClient, get_backend_client
from .validators import validate_filter_criteria, sanitize_string
from .helpers import build_default_detail, format_shelter_card

__all__ = [
    "SupabaseClient",
    "MockSupabaseClient",
    "get_backend_client",
    "validate_filter_criteria",
    "sanitize_string",
    "build_default_detail",
    "format_shelter_card",
]
