"""
HTTP service for PawShelters.
Serves the shelter directory page as JSON for the front end.
"""

import sys
from fastapi import Depends, FastAPI, HTTPException
from loguru import logger

from .config import settings
from .agent import ShelterListController
from .schemas.shelter_data import SHELTER_TYPE_OPTIONS, RATING_OPTIONS
from .utils.api_clients import get_backend_client
from .utils.validators import validate_filter_criteria

# Configure logging
logger.remove()  # Remove default handler
logger.add(sys.stderr, level=settings.log_level)

app = FastAPI(
    title="PawShelters",
    description="Directory of animal shelters with search and filters",
    version="1.0.0"
)


@app.on_event("startup")
async def startup_event():
    """Log startup event."""
    logger.info("PawShelters service is starting up...")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Mock APIs: {settings.mock_apis}")
    logger.info(f"Supabase URL: {settings.supabase_url}")
    logger.info(f"Supabase key configured: {'Yes' if settings.supabase_anon_key else 'No'}")
    logger.info(f"Repair on load: {settings.repair_on_load}")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "PawShelters",
        "version": "1.0.0",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "shelters": "/shelters",
            "filters": "/shelters/filters"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    logger.debug("Health check called")
    return {"status": "healthy", "service": "pawshelters"}


@app.get("/shelters/filters")
async def filter_options():
    """Choices offered by the filter form."""
    return {
        "shelter_type": [option.model_dump() for option in SHELTER_TYPE_OPTIONS],
        "rating": [option.model_dump() for option in RATING_OPTIONS],
    }


@app.get("/shelters")
async def list_shelters(
    q: str = "",
    shelter_type: str = "",
    rating: str = "",
    free_places: str = "",
    location: str = "",
    client=Depends(get_backend_client),
):
    """
    Load the shelter directory page.

    Every request is a fresh page load: the shelters are fetched once and
    filtered by the search query and filter form values.
    """
    is_valid, error_msg, criteria = validate_filter_criteria({
        "shelter_type": shelter_type,
        "rating": rating,
        "free_places": free_places,
        "location": location,
    })
    if not is_valid:
        raise HTTPException(status_code=422, detail=error_msg)

    controller = ShelterListController(client=client)
    controller.set_search_query(q)
    controller.apply_criteria(criteria)

    await controller.mount()
    page = controller.render()
    controller.unmount()

    return page


# Run with: uvicorn pawshelters.web:app --reload --port 8080
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.web_host, port=settings.web_port)
