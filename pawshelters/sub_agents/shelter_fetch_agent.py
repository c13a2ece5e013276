"""
Shelter Fetch Agent - Data Retrieval Specialist
Lists shelter profiles and enriches each one with its detail record and animal count.
"""

import asyncio
from typing import List, Optional
from loguru import logger

from ..config import settings
from ..schemas.shelter_data import ShelterProfile, EnrichedShelter
from ..utils.api_clients import get_backend_client
from ..utils.helpers import enrich_shelter


class ShelterFetchAgent:
    """
    Specialized agent for fetching and enriching shelters from the record store.
    """

    def __init__(self, client=None, concurrency: Optional[int] = None):
        """Initialize the shelter fetch agent."""
        self.client = client or get_backend_client()
        self.concurrency = concurrency or settings.fetch_concurrency

    async def fetch_shelters(self) -> List[EnrichedShelter]:
        """
        Fetch every shelter, newest first, with details and animal counts.

        Listing the profiles is the only step allowed to fail; its exception
        propagates to the caller. Per-shelter failures fall back to defaults.

        Returns:
            List of EnrichedShelter objects in profile order
        """
        profiles = await self.client.list_shelter_profiles()

        if not profiles:
            logger.info("No shelter profiles found")
            return []

        logger.info(
            f"Enriching {len(profiles)} shelters "
            f"(concurrency={self.concurrency})"
        )

        semaphore = asyncio.Semaphore(self.concurrency)

        async def enrich_bounded(profile: ShelterProfile) -> EnrichedShelter:
            async with semaphore:
                return await self.enrich_profile(profile)

        shelters = await asyncio.gather(
            *(enrich_bounded(profile) for profile in profiles)
        )
        return list(shelters)

    async def enrich_profile(self, profile: ShelterProfile) -> EnrichedShelter:
        """
        Enrich a single shelter profile.

        Args:
            profile: Shelter profile

        Returns:
            EnrichedShelter; on any lookup error, with a default detail
            record and zero animals
        """
        try:
            detail, animals_count = await asyncio.gather(
                self.client.get_shelter_detail(profile.id),
                self.client.count_available_animals(profile.id),
                return_exceptions=True,
            )

            for result in (detail, animals_count):
                if isinstance(result, Exception):
                    raise result

            return enrich_shelter(profile, detail, animals_count)

        except Exception as e:
            logger.error(f"Error fetching details for shelter {profile.id}: {e}")
            return enrich_shelter(profile, None, 0)
