"""Statistics dashboard aggregation.

The provider has no grouped-count operator, so every region and every
content type costs one ``numOfRows=1`` listing query whose ``totalCount`` is
the count. Branches are isolated: a failed branch is logged and dropped, and
only a total outage is surfaced.
"""

from __future__ import annotations

import math
from datetime import UTC, datetime
from typing import TypeVar

import structlog

from mytrip.errors import AggregateExhaustionError
from mytrip.models.stats import (
    CategoryStat,
    RegionStat,
    StatsSummary,
    get_all_content_types,
)
from mytrip.services.tour_api import TourApiClient
from mytrip.utils.fanout import settle_all

log = structlog.get_logger("mytrip.stats")

# Large enough for every province-level region in one page
AREA_CODE_PAGE_SIZE = 50
TOP_N = 3

S = TypeVar("S", RegionStat, CategoryStat)


def percentage(count: int, total: int) -> float:
    """Share of ``total`` in percent, half-up rounded to one decimal."""
    if total <= 0:
        return 0.0
    return math.floor(count / total * 1000 + 0.5) / 10


async def _count(client: TourApiClient, **filters: str) -> int:
    result = await client.get_area_based_list(num_of_rows=1, page_no=1, **filters)
    return result.total_count


async def get_region_stats(client: TourApiClient) -> list[RegionStat]:
    """Item count per province, in the provider's region order."""
    areas = await client.get_area_code(num_of_rows=AREA_CODE_PAGE_SIZE)

    outcomes = await settle_all(_count(client, area_code=area.code) for area in areas)

    stats: list[RegionStat] = []
    for area, outcome in zip(areas, outcomes, strict=True):
        if outcome.error is not None:
            log.warning(
                "region_stats_branch_failed",
                area_code=area.code,
                area_name=area.name,
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
            )
            continue
        stats.append(RegionStat(code=area.code, name=area.name, count=outcome.value))

    if not stats:
        raise AggregateExhaustionError("Failed to get region stats: All area queries failed")

    log.info("region_stats_complete", regions=len(areas), succeeded=len(stats))
    return stats


async def get_category_stats(client: TourApiClient) -> list[CategoryStat]:
    """Item count and share per content type."""
    content_types = get_all_content_types()

    outcomes = await settle_all(
        _count(client, content_type_id=content_type.id) for content_type in content_types
    )

    counted: list[tuple[str, str, int]] = []
    for content_type, outcome in zip(content_types, outcomes, strict=True):
        if outcome.error is not None:
            log.warning(
                "category_stats_branch_failed",
                content_type_id=content_type.id,
                content_type_name=content_type.name,
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
            )
            continue
        counted.append((content_type.id, content_type.name, outcome.value))  # type: ignore[arg-type]

    if not counted:
        raise AggregateExhaustionError(
            "Failed to get type stats: All content type queries failed"
        )

    total = sum(count for _, _, count in counted)
    return [
        CategoryStat(
            category_id=type_id,
            name=name,
            count=count,
            percentage=percentage(count, total),
        )
        for type_id, name, count in counted
    ]


def _top(stats: list[S], n: int = TOP_N) -> list[S]:
    # sorted() is stable, so ties keep provider order
    return sorted(stats, key=lambda stat: stat.count, reverse=True)[:n]


async def get_stats_summary(client: TourApiClient) -> StatsSummary:
    """Dashboard headline numbers, recomputed on every call.

    ``total_count`` comes from the category counts because content types
    partition the dataset. Region and category queries are independent, so
    the two totals are not guaranteed to reconcile. Both halves run to
    completion before the first failure is raised.
    """
    regions, categories = await settle_all(
        [get_region_stats(client), get_category_stats(client)]
    )
    for outcome in (regions, categories):
        if outcome.error is not None:
            raise outcome.error
    return StatsSummary(
        total_count=sum(stat.count for stat in categories.value),
        top_regions=_top(regions.value),
        top_types=_top(categories.value),
        last_updated=datetime.now(tz=UTC),
    )
