"""Korea Tourism Organization KorService2 client.

One method per provider endpoint. Each method composes the resilient
fetcher with the envelope normalizer and then applies its own policy for
missing data: list endpoints return an empty page, the detail lookups treat
absence as "not found", and the optional panels (images, pet info) treat it
as a soft empty result.

See https://www.data.go.kr/data/15101578/openapi.do for the provider docs.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any, Literal, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from mytrip.config import current_tour_api_key, settings
from mytrip.errors import (
    ClientError,
    ConfigurationError,
    MissingDataError,
    NotFoundError,
    TourApiError,
)
from mytrip.models.tour import (
    AreaCode,
    ListResult,
    PetTourInfo,
    TourDetail,
    TourImage,
    TourIntro,
    TourItem,
)
from mytrip.utils.envelope import envelope_body, parse_envelope, to_array
from mytrip.utils.http import SleepFn, fetch_with_retry

log = structlog.get_logger("mytrip.tour_api")

DEFAULT_NUM_OF_ROWS = 10
DEFAULT_PAGE_NO = 1
BROWSE_NUM_OF_ROWS = 20

# detailCommon2 switches, keyword name -> provider parameter
_DETAIL_COMMON_FLAGS: dict[str, str] = {
    "default_yn": "defaultYN",
    "first_image_yn": "firstImageYN",
    "areacode_yn": "areacodeYN",
    "catcode_yn": "catcodeYN",
    "addrinfo_yn": "addrinfoYN",
    "mapinfo_yn": "mapinfoYN",
    "overview_yn": "overviewYN",
}

SortBy = Literal["latest", "name"]

M = TypeVar("M", bound=BaseModel)


def _require(value: str | None, name: str) -> str:
    if value is None or not str(value).strip():
        raise ClientError(f"Missing required parameter: {name}", status_code=400)
    return str(value).strip()


def _require_positive(value: int, name: str) -> int:
    if value < 1:
        raise ClientError(f"Invalid parameter {name}: must be >= 1, got {value}", status_code=400)
    return value


def _validate_records(model: type[M], records: Iterable[Any], endpoint: str) -> list[M]:
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as exc:
        raise TourApiError(
            f"Unexpected record shape from {endpoint}: {exc.error_count()} validation error(s)",
            cause=exc,
        ) from exc


class TourApiClient:
    """Async client for the tourism data provider.

    The service credential is read from the environment at construction,
    not at import: an explicit ``api_key``, else ``TOUR_API_KEY``, else
    ``NEXT_PUBLIC_TOUR_API_KEY``. A missing credential is a
    ConfigurationError at construction time.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        max_retries: int | None = None,
        timeout: float | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        key = api_key or current_tour_api_key()
        if not key:
            raise ConfigurationError(
                "Tour API key is missing. Please set TOUR_API_KEY or "
                "NEXT_PUBLIC_TOUR_API_KEY environment variable."
            )
        self._api_key = key
        self._base_url = (base_url or settings.tour_api_base_url).rstrip("/")
        self._max_retries = (
            settings.tour_api_max_retries if max_retries is None else max_retries
        )
        self._timeout = settings.tour_api_timeout_seconds if timeout is None else timeout
        self._sleep = sleep
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> TourApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- plumbing ---

    def _common_params(self) -> dict[str, str]:
        return {
            "serviceKey": self._api_key,
            "MobileOS": settings.tour_api_mobile_os,
            "MobileApp": settings.tour_api_mobile_app,
            "_type": "json",
        }

    def build_params(self, params: Mapping[str, Any]) -> dict[str, str]:
        """Merge caller params over the service identity, dropping None values."""
        merged = {**self._common_params(), **params}
        return {key: str(value) for key, value in merged.items() if value is not None}

    async def _get_json(self, endpoint: str, params: Mapping[str, Any]) -> Any:
        response = await fetch_with_retry(
            self._http,
            f"{self._base_url}{endpoint}",
            params=self.build_params(params),
            max_retries=self._max_retries,
            timeout=self._timeout,
            sleep=self._sleep,
        )
        if not response.is_success:
            raise TourApiError(
                f"Failed to fetch {endpoint}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            # An invalid key gets an XML error document with status 200
            raise TourApiError(
                f"Failed to decode {endpoint} response as JSON",
                status_code=response.status_code,
                cause=exc,
            ) from exc

    def _list_result(
        self,
        model: type[M],
        data: Any,
        endpoint: str,
        page_no: int,
        num_of_rows: int,
    ) -> ListResult[M]:
        body = envelope_body(data)
        try:
            records = to_array(parse_envelope(data))
        except MissingDataError:
            records = []
        items = _validate_records(model, records, endpoint)
        total = body.get("totalCount")
        return ListResult[model](  # type: ignore[valid-type]
            items=items,
            total_count=len(items) if total in (None, "") else int(total),
            page_no=int(body.get("pageNo") or page_no),
            num_of_rows=int(body.get("numOfRows") or num_of_rows),
        )

    # --- endpoints ---

    async def get_area_code(
        self,
        *,
        area_code: str | None = None,
        num_of_rows: int | None = None,
        page_no: int | None = None,
    ) -> list[AreaCode]:
        """areaCode2: provinces, or the districts of ``area_code``."""
        data = await self._get_json(
            "/areaCode2",
            {"areaCode": area_code, "numOfRows": num_of_rows, "pageNo": page_no},
        )
        try:
            records = to_array(parse_envelope(data))
        except MissingDataError:
            return []
        return _validate_records(AreaCode, records, "/areaCode2")

    async def get_area_based_list(
        self,
        *,
        area_code: str | None = None,
        content_type_id: str | None = None,
        sigungu_code: str | None = None,
        cat1: str | None = None,
        cat2: str | None = None,
        cat3: str | None = None,
        num_of_rows: int = DEFAULT_NUM_OF_ROWS,
        page_no: int = DEFAULT_PAGE_NO,
    ) -> ListResult[TourItem]:
        """areaBasedList2: one page of items filtered by region/category."""
        _require_positive(num_of_rows, "numOfRows")
        _require_positive(page_no, "pageNo")
        data = await self._get_json(
            "/areaBasedList2",
            {
                "numOfRows": num_of_rows,
                "pageNo": page_no,
                "areaCode": area_code,
                "contentTypeId": content_type_id,
                "sigunguCode": sigungu_code,
                "cat1": cat1,
                "cat2": cat2,
                "cat3": cat3,
            },
        )
        return self._list_result(TourItem, data, "/areaBasedList2", page_no, num_of_rows)

    async def search_keyword(
        self,
        keyword: str,
        *,
        area_code: str | None = None,
        content_type_id: str | None = None,
        num_of_rows: int = DEFAULT_NUM_OF_ROWS,
        page_no: int = DEFAULT_PAGE_NO,
    ) -> ListResult[TourItem]:
        """searchKeyword2: one page of keyword matches."""
        keyword = _require(keyword, "keyword")
        _require_positive(num_of_rows, "numOfRows")
        _require_positive(page_no, "pageNo")
        data = await self._get_json(
            "/searchKeyword2",
            {
                "numOfRows": num_of_rows,
                "pageNo": page_no,
                "keyword": keyword,
                "areaCode": area_code,
                "contentTypeId": content_type_id,
            },
        )
        return self._list_result(TourItem, data, "/searchKeyword2", page_no, num_of_rows)

    async def get_detail_common(
        self,
        content_id: str,
        *,
        content_type_id: str | None = None,
        **flags: str,
    ) -> TourDetail:
        """detailCommon2. A place with no record is NotFoundError (404)."""
        content_id = _require(content_id, "contentId")
        unknown = sorted(set(flags) - set(_DETAIL_COMMON_FLAGS))
        if unknown:
            raise ClientError(
                f"Invalid parameter(s) for detailCommon2: {', '.join(unknown)}",
                status_code=400,
            )
        params: dict[str, Any] = {"contentId": content_id, "contentTypeId": content_type_id}
        for name, value in flags.items():
            params[_DETAIL_COMMON_FLAGS[name]] = value

        data = await self._get_json("/detailCommon2", params)
        try:
            records = to_array(parse_envelope(data))
        except MissingDataError as exc:
            raise NotFoundError(
                f"Tour detail not found for contentId: {content_id}", cause=exc
            ) from exc
        if not records:
            raise NotFoundError(f"Tour detail not found for contentId: {content_id}")
        return _validate_records(TourDetail, records[:1], "/detailCommon2")[0]

    async def get_detail_intro(self, content_id: str, content_type_id: str) -> TourIntro:
        """detailIntro2: type-specific operating info (hours, fees, menus...)."""
        content_id = _require(content_id, "contentId")
        content_type_id = _require(content_type_id, "contentTypeId")
        data = await self._get_json(
            "/detailIntro2", {"contentId": content_id, "contentTypeId": content_type_id}
        )
        try:
            records = to_array(parse_envelope(data))
        except MissingDataError as exc:
            raise NotFoundError(
                f"Tour intro not found for contentId: {content_id}", cause=exc
            ) from exc
        if not records:
            raise NotFoundError(f"Tour intro not found for contentId: {content_id}")
        return _validate_records(TourIntro, records[:1], "/detailIntro2")[0]

    async def get_detail_image(
        self,
        content_id: str,
        *,
        image_yn: str | None = None,
        sub_image_yn: str | None = None,
    ) -> list[TourImage]:
        """detailImage2. No images (404 or empty envelope) is ``[]``, not an error."""
        content_id = _require(content_id, "contentId")
        try:
            data = await self._get_json(
                "/detailImage2",
                {"contentId": content_id, "imageYN": image_yn, "subImageYN": sub_image_yn},
            )
            records = to_array(parse_envelope(data))
        except (NotFoundError, MissingDataError):
            return []
        return _validate_records(TourImage, records, "/detailImage2")

    async def get_detail_pet_tour(self, content_id: str) -> PetTourInfo | None:
        """detailPetTour2. Most places have no pet info; that is ``None``."""
        content_id = _require(content_id, "contentId")
        try:
            data = await self._get_json("/detailPetTour2", {"contentId": content_id})
            records = to_array(parse_envelope(data))
        except (NotFoundError, MissingDataError):
            return None
        if not records:
            return None
        return _validate_records(PetTourInfo, records[:1], "/detailPetTour2")[0]

    async def browse(
        self,
        *,
        keyword: str | None = None,
        area_code: str | None = None,
        content_type_id: str | None = None,
        page_no: int = DEFAULT_PAGE_NO,
        num_of_rows: int = BROWSE_NUM_OF_ROWS,
    ) -> ListResult[TourItem]:
        """Home listing: keyword search when a keyword is given, else area listing."""
        if keyword and keyword.strip():
            return await self.search_keyword(
                keyword.strip(),
                area_code=area_code,
                content_type_id=content_type_id,
                page_no=page_no,
                num_of_rows=num_of_rows,
            )
        return await self.get_area_based_list(
            area_code=area_code,
            content_type_id=content_type_id,
            page_no=page_no,
            num_of_rows=num_of_rows,
        )


def sort_items(items: Iterable[TourItem], sort_by: SortBy | None = None) -> list[TourItem]:
    """Order a page client-side: newest first, or by title."""
    items = list(items)
    if sort_by == "latest":
        # modifiedtime is a fixed-width YYYYMMDDhhmmss string
        return sorted(items, key=lambda item: item.modifiedtime or "", reverse=True)
    if sort_by == "name":
        return sorted(items, key=lambda item: item.title)
    return items
