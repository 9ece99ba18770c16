"""Provider record models (KorService2).

Field names follow the provider's lowercase keys so records validate straight
from the envelope. The provider omits fields freely, sends numbers where it
documents strings, and adds type-specific keys, hence the permissive config.
"""

from __future__ import annotations

import re
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")


class ProviderRecord(BaseModel):
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class AreaCode(ProviderRecord):
    code: str
    name: str
    rnum: str | None = None


class TourItem(ProviderRecord):
    """One row of areaBasedList2 / searchKeyword2."""

    contentid: str
    contenttypeid: str = ""
    title: str = ""
    addr1: str = ""
    addr2: str | None = None
    areacode: str | None = None
    sigungucode: str | None = None
    mapx: str | None = None
    mapy: str | None = None
    firstimage: str | None = None
    firstimage2: str | None = None
    tel: str | None = None
    cat1: str | None = None
    cat2: str | None = None
    cat3: str | None = None
    modifiedtime: str | None = None


class TourDetail(ProviderRecord):
    """detailCommon2 record."""

    contentid: str
    contenttypeid: str = ""
    title: str = ""
    addr1: str = ""
    addr2: str | None = None
    zipcode: str | None = None
    tel: str | None = None
    homepage: str | None = None
    overview: str | None = None
    firstimage: str | None = None
    firstimage2: str | None = None
    mapx: str | None = None
    mapy: str | None = None
    areacode: str | None = None
    sigungucode: str | None = None
    cat1: str | None = None
    cat2: str | None = None
    cat3: str | None = None

    @property
    def full_address(self) -> str:
        parts = [p.strip() for p in (self.addr1, self.addr2 or "") if p and p.strip()]
        return " ".join(parts)

    @property
    def overview_text(self) -> str:
        """Overview with markup removed and whitespace collapsed."""
        if not self.overview:
            return ""
        text = _TAG_RE.sub("", _BR_RE.sub(" ", self.overview))
        return _WS_RE.sub(" ", text).strip()

    @property
    def primary_image(self) -> str | None:
        return self.firstimage or self.firstimage2 or None

    def summary(self, limit: int = 100) -> str:
        return self.overview_text[:limit]


class TourIntro(ProviderRecord):
    """detailIntro2 record. Keys vary by content type and are kept as extras
    (usetime, restdate, checkintime, firstmenu, ...)."""

    contentid: str
    contenttypeid: str = ""


class TourImage(ProviderRecord):
    contentid: str
    imagename: str | None = None
    originimgurl: str | None = None
    serialnum: str | None = None
    smallimageurl: str | None = None


class PetTourInfo(ProviderRecord):
    contentid: str
    contenttypeid: str | None = None
    chkpetleash: str | None = None
    chkpetsize: str | None = None
    chkpetplace: str | None = None
    chkpetfee: str | None = None
    petinfo: str | None = None
    parking: str | None = None


T = TypeVar("T")


class ListResult(BaseModel, Generic[T]):
    """One page of a list-style endpoint."""

    model_config = ConfigDict(frozen=True)

    items: list[T] = []
    total_count: int = Field(ge=0, default=0)
    page_no: int | None = None
    num_of_rows: int | None = None


class PlaceDetail(BaseModel):
    """Everything the place page shows; optional sections may be empty."""

    model_config = ConfigDict(frozen=True)

    detail: TourDetail
    intro: TourIntro | None = None
    images: list[TourImage] = []
    pet_info: PetTourInfo | None = None
    recommendations: list[TourItem] = []
    full_address: str = ""
