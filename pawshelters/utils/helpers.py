"""
Helper utilities for PawShelters.
"""

from typing import Optional, Dict, Any

from ..config import settings
from ..schemas.shelter_data import (
    ShelterProfile,
    ShelterDetail,
    EnrichedShelter,
    ShelterCard,
    SHELTER_TYPE_LABELS,
)


def build_default_detail(profile: ShelterProfile) -> ShelterDetail:
    """
    Synthesize the detail record shown for a shelter that has none.

    The default lives in memory only and is never written back.

    Args:
        profile: Shelter profile the default is derived from

    Returns:
        ShelterDetail filled from the profile
    """
    return ShelterDetail(
        profile_id=profile.id,
        shelter_name=profile.full_name,
        shelter_type=settings.default_shelter_type,
        location=profile.address or settings.unknown_location,
        description="",
        website="",
    )


def enrich_shelter(
    profile: ShelterProfile,
    detail: Optional[ShelterDetail],
    animals_count: int,
) -> EnrichedShelter:
    """
    Merge a profile with its detail record and animal count.

    Args:
        profile: Shelter profile
        detail: Detail record, or None when the shelter has none
        animals_count: Number of animals not yet adopted

    Returns:
        EnrichedShelter view model
    """
    return EnrichedShelter(
        **profile.model_dump(),
        shelter_details=detail or build_default_detail(profile),
        animals_count=max(int(animals_count or 0), 0),
    )


def missing_detail_fields(profile: ShelterProfile, detail: ShelterDetail) -> Dict[str, Any]:
    """
    Work out which required detail fields are blank and what they should be.

    Args:
        profile: Profile owning the detail record
        detail: Stored detail record

    Returns:
        Mapping of blank field names to replacement values (empty when complete)
    """
    defaults = build_default_detail(profile)
    patch = {}

    for field in ("shelter_name", "shelter_type", "location"):
        current = getattr(detail, field)
        replacement = getattr(defaults, field)
        if (current is None or not str(current).strip()) and replacement:
            patch[field] = replacement

    return patch


def parse_content_range(header: Optional[str]) -> int:
    """
    Read the total row count from a PostgREST Content-Range header.

    Args:
        header: Header value such as "0-24/25" or "*/0"

    Returns:
        Total number of rows

    Raises:
        ValueError: If the header carries no exact total
    """
    if not header or "/" not in header:
        raise ValueError(f"Missing row count in Content-Range: {header!r}")

    total = header.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        raise ValueError(f"Row count is not exact in Content-Range: {header!r}")

    return int(total)


def format_shelter_card(shelter: EnrichedShelter, description_length: int = 300) -> ShelterCard:
    """
    Format an EnrichedShelter into a ShelterCard for display.

    Args:
        shelter: Enriched shelter
        description_length: Maximum length of the description excerpt

    Returns:
        Simplified ShelterCard
    """
    details = shelter.shelter_details
    shelter_type = details.shelter_type or settings.default_shelter_type

    description = details.description or ""
    if len(description) > description_length:
        description = description[:description_length].rstrip() + "..."

    return ShelterCard(
        id=shelter.id,
        shelter_name=details.shelter_name or shelter.full_name or "",
        shelter_type=shelter_type,
        shelter_type_label=SHELTER_TYPE_LABELS.get(
            shelter_type, shelter_type.replace("_", " ").capitalize()
        ),
        location=details.location or settings.unknown_location,
        description=description,
        website=details.website or None,
        rating=details.rating,
        animals_count=shelter.animals_count,
        avatar_url=shelter.avatar_url,
    )


def summarize_shelters(shelters: list[EnrichedShelter]) -> Dict[str, Any]:
    """
    Build a short summary of a shelter list.

    Args:
        shelters: Enriched shelters

    Returns:
        Dictionary with counts
    """
    summary = {
        "shelters": len(shelters),
        "animals": sum(s.animals_count for s in shelters),
        "rated": sum(1 for s in shelters if s.shelter_details.rating is not None),
    }
    return summary
