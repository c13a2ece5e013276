"""
Unit tests for Detail Repair Agent.
"""

import pytest
from unittest.mock import AsyncMock

from pawshelters.sub_agents.repair_agent import DetailRepairAgent
from pawshelters.utils.api_clients import MockSupabaseClient


class TestDetailRepairAgent:
    """Unit tests for DetailRepairAgent class."""

    @pytest.fixture
    def mock_client(self):
        """Create an in-memory record store with sample shelters."""
        return MockSupabaseClient()

    @pytest.fixture
    def repair_agent(self, mock_client):
        """Create a DetailRepairAgent instance for testing."""
        return DetailRepairAgent(client=mock_client)

    @pytest.mark.asyncio
    async def test_blank_fields_are_patched(self, mock_client, repair_agent):
        """Test that blank required fields are filled from the profile."""
        repaired = await repair_agent.repair_incomplete_details()

        assert repaired == 1
        haven = next(d for d in mock_client.details if d["profile_id"] == "shelter_002")
        assert haven["location"] == "Lviv, Rynok Sq 5"
        # Fields that were already filled stay untouched
        assert haven["shelter_name"] == "Haven"
        assert haven["shelter_type"] == "volunteer_initiative"

    @pytest.mark.asyncio
    async def test_missing_records_are_not_created(self, mock_client, repair_agent):
        """Test that shelters without a detail record are left alone."""
        await repair_agent.repair_incomplete_details()

        assert not any(d["profile_id"] == "shelter_003" for d in mock_client.details)

    @pytest.mark.asyncio
    async def test_second_run_is_a_no_op(self, repair_agent):
        """Test that repairing twice patches nothing the second time."""
        await repair_agent.repair_incomplete_details()
        assert await repair_agent.repair_incomplete_details() == 0

    @pytest.mark.asyncio
    async def test_complete_records_are_not_updated(self):
        """Test that complete records never trigger an update."""
        client = MockSupabaseClient(details=[
            {
                "profile_id": "shelter_001",
                "shelter_name": "Oasis",
                "shelter_type": "animal_shelter",
                "location": "Kyiv",
            }
        ])
        client.update_shelter_detail = AsyncMock()

        repaired = await DetailRepairAgent(client=client).repair_incomplete_details()

        assert repaired == 0
        client.update_shelter_detail.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_fields_are_patched(self):
        """Test that null columns are treated like blank ones."""
        client = MockSupabaseClient(details=[
            {"profile_id": "shelter_003", "shelter_name": None, "shelter_type": None, "location": None}
        ])
        client.update_shelter_detail = AsyncMock()

        repaired = await DetailRepairAgent(client=client).repair_incomplete_details()

        assert repaired == 1
        client.update_shelter_detail.assert_awaited_once_with(
            "shelter_003",
            {
                "shelter_name": "Sea Breeze Vet",
                "shelter_type": "animal_shelter",
                "location": "Unknown",
            },
        )

    @pytest.mark.asyncio
    async def test_errors_propagate(self, mock_client, repair_agent):
        """Test that backend errors are raised to the caller."""
        mock_client.list_shelter_details = AsyncMock(side_effect=Exception("API Error"))

        with pytest.raises(Exception, match="API Error"):
            await repair_agent.repair_incomplete_details()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
