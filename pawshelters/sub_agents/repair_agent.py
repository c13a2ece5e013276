"""
Detail Repair Agent - Data Maintenance
Fills blank required fields of stored shelter detail records.
"""

from loguru import logger

from ..utils.api_clients import get_backend_client
from ..utils.helpers import missing_detail_fields


class DetailRepairAgent:
    """Best-effort repair of incomplete shelter detail records."""

    def __init__(self, client=None):
        self.client = client or get_backend_client()

    async def repair_incomplete_details(self) -> int:
        """
        Patch blank shelter_name, shelter_type and location columns.

        Only existing detail records are touched; shelters without a record
        keep being defaulted in memory. Errors propagate to the caller.

        Returns:
            Number of detail records patched
        """
        profiles = await self.client.list_shelter_profiles()
        details = await self.client.list_shelter_details()

        profiles_by_id = {profile.id: profile for profile in profiles}
        repaired = 0

        for detail in details:
            profile = profiles_by_id.get(detail.profile_id)
            if profile is None:
                continue

            patch = missing_detail_fields(profile, detail)
            if not patch:
                continue

            logger.info(f"Repairing details of shelter {profile.id}: {sorted(patch)}")
            await self.client.update_shelter_detail(profile.id, patch)
            repaired += 1

        logger.info(f"Shelter detail repair finished, {repaired} record(s) patched")
        return repaired
