"""Statistics dashboard endpoints.

Nothing is cached in-process; put an HTTP cache or periodic revalidation in
front if the provider quota needs protecting.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from mytrip.api.deps import get_tour_client
from mytrip.models.stats import CategoryStat, RegionStat, StatsSummary
from mytrip.services import stats
from mytrip.services.tour_api import TourApiClient

router = APIRouter(prefix="/stats", tags=["stats"])

Client = Annotated[TourApiClient, Depends(get_tour_client)]


@router.get("/regions", response_model=list[RegionStat])
async def region_stats(client: Client) -> list[RegionStat]:
    return await stats.get_region_stats(client)


@router.get("/types", response_model=list[CategoryStat])
async def type_stats(client: Client) -> list[CategoryStat]:
    return await stats.get_category_stats(client)


@router.get("/summary", response_model=StatsSummary)
async def stats_summary(client: Client) -> StatsSummary:
    return await stats.get_stats_summary(client)
