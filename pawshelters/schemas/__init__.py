"""Data schemas and models for PawShelters."""

from .shelter_data import (
    ShelterProfile,
    ShelterDetail,
    EnrichedShelter,
    FilterCriteria,
    ShelterCard,
    ListState,
    Idle,
    Loading,
    Ready,
    Errored,
)

__all__ = [
    "ShelterProfile",
    "ShelterDetail",
    "EnrichedShelter",
    "FilterCriteria",
    "ShelterCard",
    "ListState",
    "Idle",
    "Loading",
    "Ready",
    "Errored",
]
