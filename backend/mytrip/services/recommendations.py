"""'You might also like' recommendations for a place page.

Two tiers: same region and same content type first, then same content type
anywhere. Best effort only: a failed tier counts as no results and the
caller simply hides the section.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from mytrip.models.tour import TourDetail, TourItem
from mytrip.services.tour_api import TourApiClient

log = structlog.get_logger("mytrip.recommendations")

MAX_RECOMMENDATIONS = 6
CANDIDATE_POOL_SIZE = 10


async def _candidates(
    client: TourApiClient,
    tier: str,
    content_type_id: str,
    area_code: str | None = None,
) -> list[TourItem]:
    try:
        result = await client.get_area_based_list(
            area_code=area_code,
            content_type_id=content_type_id,
            num_of_rows=CANDIDATE_POOL_SIZE,
            page_no=1,
        )
    except Exception as exc:
        log.warning(
            "recommendation_tier_failed",
            tier=tier,
            area_code=area_code,
            content_type_id=content_type_id,
            error_type=type(exc).__name__,
            error=str(exc),
        )
        return []
    return result.items


def _take(
    candidates: Iterable[TourItem],
    excluded: set[str],
    limit: int,
) -> list[TourItem]:
    """Up to ``limit`` candidates not in ``excluded``; ``excluded`` is updated."""
    picked: list[TourItem] = []
    for item in candidates:
        if len(picked) >= limit:
            break
        if item.contentid in excluded:
            continue
        excluded.add(item.contentid)
        picked.append(item)
    return picked


async def recommend(
    client: TourApiClient,
    subject: TourDetail | TourItem,
) -> list[TourItem]:
    """At most six places similar to ``subject``, never including it."""
    content_type_id = (subject.contenttypeid or "").strip()
    if not content_type_id:
        return []

    seen = {subject.contentid}
    picked: list[TourItem] = []

    area_code = (subject.areacode or "").strip()
    if area_code:
        same_region = await _candidates(client, "region", content_type_id, area_code)
        picked.extend(_take(same_region, seen, MAX_RECOMMENDATIONS))

    if len(picked) < MAX_RECOMMENDATIONS:
        same_type = await _candidates(client, "content_type", content_type_id)
        picked.extend(_take(same_type, seen, MAX_RECOMMENDATIONS - len(picked)))

    log.debug(
        "recommendations_resolved",
        contentid=subject.contentid,
        count=len(picked),
    )
    return picked
