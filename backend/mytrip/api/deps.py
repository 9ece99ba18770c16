"""FastAPI dependencies shared by the route modules."""

from __future__ import annotations

from collections.abc import AsyncIterator

from mytrip.services.tour_api import TourApiClient


async def get_tour_client() -> AsyncIterator[TourApiClient]:
    """One client per request; a missing credential fails here as a 500."""
    async with TourApiClient() as client:
        yield client
