"""Specialized sub-agents for PawShelters."""

from .shelter_fetch_agent import ShelterFetchAgent
from .repair_agent import DetailRepairAgent

__all__ = [
    "ShelterFetchAgent",
    "DetailRepairAgent",
]
