# app/schemas/catalog_item.py

from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, List, Optional, Tuple, TypeVar
from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now_iso() -> str:
    """현재 UTC 시각 (ISO-8601, 밀리초, Z 표기)"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class MediaType(str, Enum):
    movie = "movie"
    tv = "tv"


class CatalogItem(BaseModel):
    """카탈로그 항목 (식별 키: id + type)"""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="TMDB ID")
    type: MediaType = Field(description="미디어 타입")
    title: str = Field(description="제목")
    poster_path: Optional[str] = Field(default=None, description="포스터 경로")
    overview: str = Field(default="", description="줄거리")
    release_date: str = Field(default="", description="개봉일/첫 방영일")
    vote_average: float = Field(default=0.0, description="TMDB 평균 평점")
    date_added: str = Field(default_factory=utc_now_iso, alias="dateAdded", description="추가일시")

    @field_validator("overview", "release_date", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return value or ""

    @field_validator("vote_average", mode="before")
    @classmethod
    def none_to_zero(cls, value):
        return value or 0.0

    @property
    def key(self) -> Tuple[int, MediaType]:
        return (self.id, self.type)

    def matches(self, item_id: int, media_type: MediaType) -> bool:
        return self.id == item_id and self.type == media_type


T = TypeVar("T", bound=CatalogItem)


def dedupe_by_key(items: Iterable[T], keep: str = "first") -> List[T]:
    """(id, type) 기준 중복 제거. keep="last"면 마지막 항목이 마지막 위치에 남음"""
    items = list(items)
    if keep == "last":
        return list(reversed(dedupe_by_key(reversed(items), keep="first")))

    seen = set()
    result = []
    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        result.append(item)
    return result
