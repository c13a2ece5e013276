"""
External API clients for PawShelters.
Handles communication with the Supabase (PostgREST) record store.
"""

from datetime import datetime
from typing import List, Dict, Any, Optional
import aiohttp
from loguru import logger

from ..config import settings
from ..schemas.shelter_data import ShelterProfile, ShelterDetail
from .helpers import parse_content_range


class SupabaseClient:
    """Client for the Supabase PostgREST API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        service_key: Optional[str] = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key or settings.supabase_anon_key
        self.service_key = service_key or settings.supabase_service_role_key

    def _table_url(self, table: str) -> str:
        """Get the REST endpoint for a table."""
        return f"{self.base_url}/rest/v1/{table}"

    def _get_headers(self, write: bool = False) -> Dict[str, str]:
        """Get API request headers with authentication."""
        key = self.service_key if write and self.service_key else self.api_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Content-Type": "application/json",
        }

    def _timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(total=settings.api_timeout)

    async def list_shelter_profiles(self) -> List[ShelterProfile]:
        """
        List every shelter profile, newest first.

        Returns:
            ShelterProfile objects ordered by created_at descending
        """
        api_url = self._table_url(settings.profiles_table)
        params = {
            "select": "*",
            "user_type": "eq.shelter",
            "order": "created_at.desc",
        }

        logger.debug(f"Supabase GET {api_url} with params: {params}")

        async with aiohttp.ClientSession() as session:
            async with session.get(
                api_url,
                headers=self._get_headers(),
                params=params,
                timeout=self._timeout(),
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Supabase API error listing profiles: {response.status}, "
                        f"response='{error_text}'"
                    )
                response.raise_for_status()

                rows = await response.json(content_type=None)
                return [ShelterProfile(**row) for row in rows or []]

    async def get_shelter_detail(self, profile_id: str) -> Optional[ShelterDetail]:
        """
        Get the detail record of one shelter.

        Args:
            profile_id: Profile ID of the shelter

        Returns:
            ShelterDetail, or None if the shelter has no detail record
        """
        api_url = self._table_url(settings.shelter_details_table)
        params = {"select": "*", "profile_id": f"eq.{profile_id}"}
        headers = self._get_headers()
        # Ask for a single object; PostgREST answers 406 unless exactly one row matches
        headers["Accept"] = "application/vnd.pgrst.object+json"

        async with aiohttp.ClientSession() as session:
            async with session.get(
                api_url,
                headers=headers,
                params=params,
                timeout=self._timeout(),
            ) as response:
                if response.status == 406:
                    logger.debug(f"No single detail record for shelter {profile_id}")
                    return None

                if response.status != 200:
                    error_text = await response.text()
                    logger.error(
                        f"Supabase API error for shelter {profile_id} details: "
                        f"{response.status}, response='{error_text}'"
                    )
                response.raise_for_status()

                row = await response.json(content_type=None)
                return ShelterDetail(**row) if row else None

    async def count_available_animals(self, shelter_id: str) -> int:
        """
        Count the animals of a shelter that are not adopted yet.

        Args:
            shelter_id: Profile ID of the shelter

        Returns:
            Exact number of non-adopted animals
        """
        api_url = self._table_url(settings.animals_table)
        params = {
            "select": "id",
            "shelter_id": f"eq.{shelter_id}",
            "is_adopted": "eq.false",
        }
        headers = self._get_headers()
        headers["Prefer"] = "count=exact"

        async with aiohttp.ClientSession() as session:
            async with session.head(
                api_url,
                headers=headers,
                params=params,
                timeout=self._timeout(),
            ) as response:
                if response.status >= 400:
                    logger.error(
                        f"Supabase API error counting animals for shelter {shelter_id}: "
                        f"{response.status}"
                    )
                response.raise_for_status()
                return parse_content_range(response.headers.get("Content-Range"))

    async def list_shelter_details(self) -> List[ShelterDetail]:
        """List every stored shelter detail record."""
        async with aiohttp.ClientSession() as session:
            async with session.get(
                self._table_url(settings.shelter_details_table),
                headers=self._get_headers(),
                params={"select": "*"},
                timeout=self._timeout(),
            ) as response:
                response.raise_for_status()
                rows = await response.json(content_type=None)
                return [ShelterDetail(**row) for row in rows or []]

    async def update_shelter_detail(self, profile_id: str, fields: Dict[str, Any]) -> None:
        """
        Patch fields of a stored shelter detail record.

        Args:
            profile_id: Profile ID of the shelter
            fields: Column values to write
        """
        headers = self._get_headers(write=True)
        headers["Prefer"] = "return=minimal"

        async with aiohttp.ClientSession() as session:
            async with session.patch(
                self._table_url(settings.shelter_details_table),
                headers=headers,
                params={"profile_id": f"eq.{profile_id}"},
                json=fields,
                timeout=self._timeout(),
            ) as response:
                if response.status >= 400:
                    error_text = await response.text()
                    logger.error(
                        f"Supabase API error updating shelter {profile_id} details: "
                        f"{response.status}, response='{error_text}'"
                    )
                response.raise_for_status()


class MockSupabaseClient:
    """In-memory stand-in for SupabaseClient, used when mock_apis is enabled."""

    def __init__(
        self,
        profiles: Optional[List[Dict[str, Any]]] = None,
        details: Optional[List[Dict[str, Any]]] = None,
        animals: Optional[List[Dict[str, Any]]] = None,
    ):
        mock_data = self._get_mock_data()
        self.profiles = mock_data["profiles"] if profiles is None else profiles
        self.details = mock_data["details"] if details is None else details
        self.animals = mock_data["animals"] if animals is None else animals

    async def list_shelter_profiles(self) -> List[ShelterProfile]:
        profiles = [
            ShelterProfile(**row)
            for row in self.profiles
            if row.get("user_type") == "shelter"
        ]
        return sorted(
            profiles,
            key=lambda p: p.created_at.timestamp() if p.created_at else float("-inf"),
            reverse=True,
        )

    async def get_shelter_detail(self, profile_id: str) -> Optional[ShelterDetail]:
        rows = [row for row in self.details if str(row.get("profile_id")) == str(profile_id)]
        # Mirror the single-object contract: anything but exactly one row is "none"
        if len(rows) != 1:
            return None
        return ShelterDetail(**rows[0])

    async def count_available_animals(self, shelter_id: str) -> int:
        return sum(
            1 for row in self.animals
            if str(row.get("shelter_id")) == str(shelter_id) and not row.get("is_adopted")
        )

    async def list_shelter_details(self) -> List[ShelterDetail]:
        return [ShelterDetail(**row) for row in self.details]

    async def update_shelter_detail(self, profile_id: str, fields: Dict[str, Any]) -> None:
        for row in self.details:
            if str(row.get("profile_id")) == str(profile_id):
                row.update(fields)

    def _get_mock_data(self) -> Dict[str, List[Dict[str, Any]]]:
        """Get mock shelter data for testing."""
        profiles = [
            {
                "id": "shelter_001",
                "full_name": "Oasis Animal Rescue",
                "address": "Kyiv, Khreshchatyk St 1",
                "user_type": "shelter",
                "created_at": datetime(2024, 3, 1, 9, 0).isoformat(),
                "email": "hello@oasis.example.org",
            },
            {
                "id": "shelter_002",
                "full_name": "Haven Paws",
                "address": "Lviv, Rynok Sq 5",
                "user_type": "shelter",
                "created_at": datetime(2024, 5, 12, 14, 30).isoformat(),
            },
            {
                "id": "shelter_003",
                "full_name": "Sea Breeze Vet",
                "address": None,
                "user_type": "shelter",
                "created_at": datetime(2024, 1, 20, 8, 15).isoformat(),
            },
            {
                "id": "adopter_001",
                "full_name": "Olena Adopter",
                "address": "Kyiv",
                "user_type": "adopter",
                "created_at": datetime(2024, 6, 1, 10, 0).isoformat(),
            },
        ]

        details = [
            {
                "profile_id": "shelter_001",
                "shelter_name": "Oasis",
                "shelter_type": "animal_shelter",
                "location": "Kyiv",
                "description": "Dogs and cats rescued from the streets of Kyiv.",
                "website": "https://oasis.example.org",
                "rating": 4,
            },
            {
                "profile_id": "shelter_002",
                "shelter_name": "Haven",
                "shelter_type": "volunteer_initiative",
                "location": "",
                "description": "Volunteer-run foster network.",
                "website": "",
                "rating": 2,
            },
        ]

        animals = [
            {"id": "animal_001", "shelter_id": "shelter_001", "is_adopted": False},
            {"id": "animal_002", "shelter_id": "shelter_001", "is_adopted": False},
            {"id": "animal_003", "shelter_id": "shelter_001", "is_adopted": True},
            {"id": "animal_004", "shelter_id": "shelter_002", "is_adopted": False},
        ]

        return {"profiles": profiles, "details": details, "animals": animals}


def get_backend_client():
    """Get the record store client for the current settings."""
    if settings.mock_apis:
        return MockSupabaseClient()
    return supabase_client


# Singleton instances
supabase_client = SupabaseClient()
