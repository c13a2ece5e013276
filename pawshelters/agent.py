"""
PawShelters Shelter List Controller - Orchestrator
Coordinates fetching, enrichment, filtering and rendering of the shelter list.
"""

import asyncio
from typing import Dict, Any, Optional, List
from loguru import logger

from .config import settings
from .filters import filter_shelters
from .schemas.shelter_data import (
    EnrichedShelter,
    FilterCriteria,
    ListState,
    Idle,
    Loading,
    Ready,
    Errored,
)
from .sub_agents.shelter_fetch_agent import ShelterFetchAgent
from .sub_agents.repair_agent import DetailRepairAgent
from .utils.api_clients import get_backend_client
from .utils.helpers import format_shelter_card, summarize_shelters
from .utils.validators import validate_criteria_field, validate_filter_criteria

# Strong references to fire-and-forget tasks until they finish
_background_tasks: set = set()


class ShelterListController:
    """
    Controller behind the shelter directory page. Fetches the shelters once
    the view is mounted, keeps the view state and derives the visible list
    from the current search query and filter criteria.
    """

    def __init__(self, client=None, fetch_agent=None, repair_agent=None):
        """Initialize the controller and its sub-agents."""
        self.client = client or get_backend_client()
        self.fetch_agent = fetch_agent or ShelterFetchAgent(self.client)
        self.repair_agent = repair_agent or DetailRepairAgent(self.client)

        self.state: ListState = Idle()
        self.search_query: str = ""
        self.criteria = FilterCriteria()

        self.mounted = False
        self.torn_down = False
        self.initialized = False
        self._repair_task: Optional[asyncio.Task] = None

    @property
    def loading(self) -> bool:
        return isinstance(self.state, Loading)

    @property
    def error(self) -> Optional[str]:
        return self.state.message if isinstance(self.state, Errored) else None

    @property
    def shelters(self) -> List[EnrichedShelter]:
        return self.state.shelters if isinstance(self.state, Ready) else []

    async def mount(self) -> ListState:
        """
        Mark the view as mounted and load the shelters if that has not happened yet.

        Returns:
            The view state after loading
        """
        self.mounted = True
        self.torn_down = False

        if not self.initialized and not self.loading:
            await self.fetch_shelters()

        return self.state

    def unmount(self) -> None:
        """Tear the view down. Results of in-flight requests are discarded."""
        self.mounted = False
        self.torn_down = True
        logger.debug("Shelter list unmounted")

    def _set_state(self, state: ListState) -> None:
        if self.torn_down:
            logger.debug(f"Discarding '{state.status}' state after unmount")
            return
        self.state = state

    async def fetch_shelters(self) -> ListState:
        """
        Load every shelter with its details and animal count.

        A failure to list the shelter profiles moves the view into the errored
        state; nothing is retried.

        Returns:
            Ready or Errored view state
        """
        logger.info("Fetching shelters...")
        self._set_state(Loading())

        # Runs alongside the fetch, never awaited by it
        self._start_repair()

        try:
            shelters = await self.fetch_agent.fetch_shelters()
        except Exception as e:
            logger.error(f"Error fetching shelters: {e}")
            self._set_state(Errored(message=settings.load_error_message))
        else:
            logger.info(f"Successfully fetched {len(shelters)} shelters")
            logger.debug(f"Shelter summary: {summarize_shelters(shelters)}")
            self._set_state(Ready(shelters=shelters))
        finally:
            self.initialized = True

        return self.state

    async def refresh(self) -> ListState:
        """Reload the shelters on explicit request. Ignored while a load is running."""
        if self.loading:
            logger.debug("Refresh ignored, shelters are already loading")
            return self.state

        self.initialized = False
        return await self.fetch_shelters()

    def _start_repair(self) -> None:
        """Schedule the shelter detail repair job in the background."""
        if not settings.repair_on_load:
            return

        task = asyncio.create_task(self.repair_agent.repair_incomplete_details())
        self._repair_task = task
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)
        task.add_done_callback(self._log_repair_result)

    @staticmethod
    def _log_repair_result(task: asyncio.Task) -> None:
        if task.cancelled():
            logger.debug("Shelter detail repair cancelled")
            return

        exc = task.exception()
        if exc is not None:
            logger.error(f"Non-critical error fixing shelter details: {exc}")

    async def wait_for_background(self) -> None:
        """Wait until the background repair job (if any) has finished."""
        if self._repair_task is not None:
            await asyncio.gather(self._repair_task, return_exceptions=True)

    def set_search_query(self, query: str) -> None:
        """Update the free-text search query."""
        self.search_query = query or ""

    def handle_change(self, name: str, value: str) -> FilterCriteria:
        """
        Update one field of the filter form.

        Args:
            name: Criteria field name
            value: New field value

        Returns:
            The updated criteria

        Raises:
            ValueError: If the field is unknown or the value is invalid
        """
        if not validate_criteria_field(name):
            raise ValueError(f"Unknown filter field: {name}")

        if name == "free_places":
            logger.debug("free_places is collected by the filter form but not applied")

        self.criteria = FilterCriteria(**{**self.criteria.model_dump(), name: value})
        return self.criteria

    def apply_criteria(self, criteria: FilterCriteria) -> None:
        """Replace all filter form values at once."""
        self.criteria = criteria

    def visible_shelters(self) -> List[EnrichedShelter]:
        """Shelters that pass the current search query and filter criteria."""
        return filter_shelters(self.shelters, self.search_query, self.criteria)

    def render(self) -> Dict[str, Any]:
        """
        Render the page as plain data.

        Returns:
            Dictionary with view status, error message, list summary and shelter cards
        """
        visible = self.visible_shelters()
        return {
            "status": self.state.status,
            "loading": self.loading,
            "error": self.error,
            "total": len(self.shelters),
            "summary": summarize_shelters(self.shelters),
            "count": len(visible),
            "query": self.search_query,
            "criteria": self.criteria.model_dump(),
            "shelters": [format_shelter_card(s).model_dump() for s in visible],
        }


# Main entry point for command-line usage
async def run(args) -> Dict[str, Any]:
    """Load the shelter list once and print it."""
    is_valid, error_msg, criteria = validate_filter_criteria({
        "shelter_type": args.shelter_type,
        "rating": args.rating,
        "free_places": args.free_places,
        "location": args.location,
    })
    if not is_valid:
        print(f"Error: {error_msg}")
        return {}

    controller = ShelterListController()
    controller.set_search_query(args.query)
    controller.apply_criteria(criteria)

    await controller.mount()
    page = controller.render()
    await controller.wait_for_background()
    controller.unmount()

    print(f"\n=== PawShelters - Animal Shelters ===\n")

    if page["error"]:
        print(f"Error: {page['error']}")
        return page

    if not page["shelters"]:
        print("No shelters found. Try adjusting the filters or check back later.")
        return page

    print(
        f"Showing {page['count']} of {page['total']} shelters "
        f"({page['summary']['animals']} animals waiting for adoption)\n"
    )
    for i, card in enumerate(page["shelters"], 1):
        rating = f"{card['rating']:.1f}" if card["rating"] is not None else "not rated"
        print(f"{i}. {card['shelter_name']} ({card['shelter_type_label']})")
        print(f"   Location: {card['location']}")
        print(f"   Rating: {rating}  Animals waiting: {card['animals_count']}")
        if card["website"]:
            print(f"   {card['website']}")
        print()

    return page


def main():
    """Main entry point for the pawshelters command."""
    import argparse

    parser = argparse.ArgumentParser(description="PawShelters shelter directory")
    parser.add_argument("--query", default="", help="Search by shelter name or location")
    parser.add_argument("--shelter-type", default="", help="Shelter type (animal_shelter, vet_clinic, ...)")
    parser.add_argument("--rating", default="", help="Minimum rating")
    parser.add_argument("--location", default="", help="Location substring")
    parser.add_argument("--free-places", default="", help="Free places (accepted, not applied)")

    args = parser.parse_args()

    try:
        asyncio.run(run(args))
    except Exception as e:
        logger.error(f"Error in main: {e}")
        print(f"Error: {e}")


if __name__ == "__main__":
    main()
