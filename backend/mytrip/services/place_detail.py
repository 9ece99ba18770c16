"""Place page loader: one mandatory lookup plus optional panels.

The common detail must succeed; its errors (NotFoundError for an unknown
place) go straight to the caller. Intro, images, pet info and
recommendations are fetched concurrently afterwards, and any of them failing
just leaves that panel empty.
"""

from __future__ import annotations

import structlog

from mytrip.errors import NotFoundError
from mytrip.models.tour import PlaceDetail, TourDetail, TourIntro
from mytrip.services.recommendations import recommend
from mytrip.services.tour_api import TourApiClient
from mytrip.utils.fanout import settle_all

log = structlog.get_logger("mytrip.place_detail")

_SECTIONS = ("intro", "images", "pet_info", "recommendations")


async def _intro(client: TourApiClient, detail: TourDetail) -> TourIntro | None:
    if not detail.contenttypeid:
        return None
    return await client.get_detail_intro(detail.contentid, detail.contenttypeid)


async def load_place_detail(client: TourApiClient, content_id: str) -> PlaceDetail:
    detail = await client.get_detail_common(content_id)

    outcomes = await settle_all(
        [
            _intro(client, detail),
            client.get_detail_image(detail.contentid, image_yn="Y", sub_image_yn="Y"),
            client.get_detail_pet_tour(detail.contentid),
            recommend(client, detail),
        ]
    )

    sections: dict[str, object] = {}
    for name, outcome in zip(_SECTIONS, outcomes, strict=True):
        if outcome.error is None:
            sections[name] = outcome.value
            continue
        if not isinstance(outcome.error, NotFoundError):
            log.warning(
                "place_section_failed",
                contentid=detail.contentid,
                section=name,
                error_type=type(outcome.error).__name__,
                error=str(outcome.error),
            )

    return PlaceDetail(
        detail=detail,
        intro=sections.get("intro"),
        images=sections.get("images") or [],
        pet_info=sections.get("pet_info"),
        recommendations=sections.get("recommendations") or [],
        full_address=detail.full_address,
    )
