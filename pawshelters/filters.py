"""
Client-side filtering of the shelter list.
Pure functions, re-evaluated against the current list on every render.
"""

from typing import Iterable, List, Optional

from .schemas.shelter_data import EnrichedShelter, FilterCriteria


def shelter_matches(
    shelter: EnrichedShelter,
    query: str = "",
    criteria: Optional[FilterCriteria] = None,
) -> bool:
    """
    Check one shelter against the search query and filter criteria.

    The free-text query matches the shelter name or its location. Every other
    active criterion must hold as well. A shelter without a rating never passes
    an active rating filter. ``free_places`` is not applied.

    Args:
        shelter: Enriched shelter
        query: Free-text search query
        criteria: Filter form values

    Returns:
        True if the shelter should be displayed
    """
    criteria = criteria or FilterCriteria()
    details = shelter.shelter_details

    shelter_name = (details.shelter_name or "").lower()
    shelter_location = (details.location or "").lower()
    shelter_type = details.shelter_type or ""
    shelter_rating = details.rating

    needle = (query or "").lower()
    if needle not in shelter_name and needle not in shelter_location:
        return False

    if criteria.shelter_type and shelter_type != criteria.shelter_type:
        return False

    minimum_rating = criteria.minimum_rating()
    if minimum_rating is not None:
        if shelter_rating is None or not shelter_rating >= minimum_rating:
            return False

    if criteria.location and criteria.location.lower() not in shelter_location:
        return False

    return True


def filter_shelters(
    shelters: Iterable[EnrichedShelter],
    query: str = "",
    criteria: Optional[FilterCriteria] = None,
) -> List[EnrichedShelter]:
    """
    Filter shelters, keeping their original order.

    Args:
        shelters: Enriched shelters
        query: Free-text search query
        criteria: Filter form values

    Returns:
        Shelters that match every active criterion
    """
    return [
        shelter for shelter in shelters
        if shelter_matches(shelter, query, criteria)
    ]
