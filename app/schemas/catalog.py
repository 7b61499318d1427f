# app/schemas/catalog.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.schemas.catalog_item import CatalogItem, MediaType, dedupe_by_key, utc_now_iso
from app.schemas.custom_list import CustomList
from app.schemas.watched import WatchedItem


class Catalog(BaseModel):
    """카탈로그 스냅샷 (저장 단위)"""

    model_config = ConfigDict(populate_by_name=True)

    watchlist: List[CatalogItem] = Field(default_factory=list, description="왓치리스트")
    watched: List[WatchedItem] = Field(default_factory=list, description="시청 완료 목록")
    custom_lists: List[CustomList] = Field(default_factory=list, alias="customLists", description="커스텀 리스트")
    last_updated: str = Field(default_factory=utc_now_iso, alias="lastUpdated", description="마지막 저장 일시")

    @field_validator("watchlist", "watched")
    @classmethod
    def unique_items(cls, items):
        return dedupe_by_key(items, keep="last")

    @classmethod
    def empty(cls) -> "Catalog":
        return cls()

    def to_document(self) -> dict:
        """JSON 문서 형태로 직렬화"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CatalogStats(BaseModel):
    """카탈로그 통계"""

    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(default=0, alias="totalItems", description="전체 항목 수 (중복 제거)")
    watchlist_count: int = Field(default=0, alias="watchlistCount", description="왓치리스트 수")
    watched_count: int = Field(default=0, alias="watchedCount", description="시청 완료 수")
    custom_lists_count: int = Field(default=0, alias="customListsCount", description="커스텀 리스트 수")
    movie_count: int = Field(default=0, alias="movieCount", description="영화 수")
    tv_show_count: int = Field(default=0, alias="tvShowCount", description="TV 프로그램 수")
    average_rating: float = Field(default=0.0, alias="averageRating", description="평균 사용자 별점")


class ItemStatus(BaseModel):
    """단일 항목의 카탈로그 상태"""

    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="TMDB ID")
    type: MediaType = Field(description="미디어 타입")
    in_watchlist: bool = Field(default=False, alias="inWatchlist", description="왓치리스트 포함 여부")
    watched: bool = Field(default=False, description="시청 완료 여부")
    force_watched: bool = Field(default=False, alias="forceWatched", description="시즌 시청 기록 존재 여부")
    watched_seasons: List[int] = Field(default_factory=list, alias="watchedSeasons", description="시청한 시즌 번호")
    lists: List[str] = Field(default_factory=list, description="포함된 커스텀 리스트 ID")
    watched_item: Optional[WatchedItem] = Field(default=None, alias="watchedItem", description="시청 기록")
