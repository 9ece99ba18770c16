"""Tour data endpoints: thin wrappers over TourApiClient.

Errors are not handled here; TourApiError subclasses bubble up to the
app-level handler, which maps them onto ErrorResponse.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from mytrip.api.deps import get_tour_client
from mytrip.models.tour import (
    AreaCode,
    ListResult,
    PetTourInfo,
    PlaceDetail,
    TourDetail,
    TourImage,
    TourIntro,
    TourItem,
)
from mytrip.services.place_detail import load_place_detail
from mytrip.services.recommendations import recommend
from mytrip.services.tour_api import SortBy, TourApiClient, sort_items

router = APIRouter(prefix="/tour", tags=["tour"])

Client = Annotated[TourApiClient, Depends(get_tour_client)]


@router.get("/area-codes", response_model=list[AreaCode])
async def area_codes(
    client: Client,
    area_code: str | None = None,
    num_of_rows: Annotated[int | None, Query(ge=1)] = None,
    page_no: Annotated[int | None, Query(ge=1)] = None,
) -> list[AreaCode]:
    return await client.get_area_code(area_code=area_code, num_of_rows=num_of_rows, page_no=page_no)


@router.get("/places", response_model=ListResult[TourItem])
async def browse_places(
    client: Client,
    keyword: str | None = None,
    area_code: str | None = None,
    content_type_id: str | None = None,
    sort_by: SortBy | None = None,
    page_no: Annotated[int, Query(ge=1)] = 1,
    num_of_rows: Annotated[int, Query(ge=1, le=100)] = 20,
) -> ListResult[TourItem]:
    page = await client.browse(
        keyword=keyword,
        area_code=area_code,
        content_type_id=content_type_id,
        page_no=page_no,
        num_of_rows=num_of_rows,
    )
    if sort_by is None:
        return page
    return page.model_copy(update={"items": sort_items(page.items, sort_by)})


@router.get("/search", response_model=ListResult[TourItem])
async def search(
    client: Client,
    keyword: Annotated[str, Query(min_length=1)],
    area_code: str | None = None,
    content_type_id: str | None = None,
    page_no: Annotated[int, Query(ge=1)] = 1,
    num_of_rows: Annotated[int, Query(ge=1, le=100)] = 10,
) -> ListResult[TourItem]:
    return await client.search_keyword(
        keyword,
        area_code=area_code,
        content_type_id=content_type_id,
        page_no=page_no,
        num_of_rows=num_of_rows,
    )


@router.get("/places/{content_id}", response_model=TourDetail)
async def place_detail(
    client: Client, content_id: str, content_type_id: str | None = None
) -> TourDetail:
    return await client.get_detail_common(content_id, content_type_id=content_type_id)


@router.get("/places/{content_id}/full", response_model=PlaceDetail)
async def place_full(client: Client, content_id: str) -> PlaceDetail:
    return await load_place_detail(client, content_id)


@router.get("/places/{content_id}/intro", response_model=TourIntro)
async def place_intro(
    client: Client,
    content_id: str,
    content_type_id: Annotated[str, Query(min_length=1)],
) -> TourIntro:
    return await client.get_detail_intro(content_id, content_type_id)


@router.get("/places/{content_id}/images", response_model=list[TourImage])
async def place_images(client: Client, content_id: str) -> list[TourImage]:
    return await client.get_detail_image(content_id, image_yn="Y", sub_image_yn="Y")


@router.get("/places/{content_id}/pet", response_model=PetTourInfo | None)
async def place_pet_info(client: Client, content_id: str) -> PetTourInfo | None:
    return await client.get_detail_pet_tour(content_id)


@router.get("/places/{content_id}/recommendations", response_model=list[TourItem])
async def place_recommendations(client: Client, content_id: str) -> list[TourItem]:
    detail = await client.get_detail_common(content_id)
    return await recommend(client, detail)
