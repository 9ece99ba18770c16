"""Statistics dashboard models and the fixed content-type table."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# KorService2 content types. Categories partition the whole dataset.
CONTENT_TYPES: dict[str, str] = {
    "12": "관광지",
    "14": "문화시설",
    "15": "축제/행사",
    "25": "여행코스",
    "28": "레포츠",
    "32": "숙박",
    "38": "쇼핑",
    "39": "음식점",
}


class ContentType(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


def get_all_content_types() -> list[ContentType]:
    return [ContentType(id=type_id, name=name) for type_id, name in CONTENT_TYPES.items()]


def content_type_name(type_id: str) -> str | None:
    return CONTENT_TYPES.get(type_id)


class RegionStat(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    count: int = Field(ge=0)


class CategoryStat(BaseModel):
    """Only meaningful within its batch: percentage is relative to the batch total."""

    model_config = ConfigDict(frozen=True)

    category_id: str
    name: str
    count: int = Field(ge=0)
    percentage: float = Field(ge=0, le=100, default=0.0)


class StatsSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_count: int = Field(ge=0)
    top_regions: list[RegionStat] = []
    top_types: list[CategoryStat] = []
    last_updated: datetime
