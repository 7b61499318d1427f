# app/schemas/watched.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from app.schemas.catalog_item import CatalogItem, MediaType, today_iso


def _empty_rating_to_none(value):
    # UI에서 별점 미선택은 0으로 전달됨
    return value or None


class SeasonWatch(BaseModel):
    """시즌별 시청 기록"""

    model_config = ConfigDict(populate_by_name=True)

    season_number: int = Field(alias="seasonNumber", ge=0, description="시즌 번호")
    user_rating: Optional[int] = Field(default=None, alias="userRating", ge=1, le=5, description="사용자 별점")
    watched_date: str = Field(default_factory=today_iso, alias="watchedDate", description="시청일")
    notes: Optional[str] = Field(default=None, description="메모")

    @field_validator("user_rating", mode="before")
    @classmethod
    def empty_rating_to_none(cls, value):
        return _empty_rating_to_none(value)


class WatchedItem(CatalogItem):
    """시청 완료 항목"""

    user_rating: Optional[int] = Field(default=None, alias="userRating", ge=1, le=5, description="사용자 별점")
    watched_date: str = Field(default_factory=today_iso, alias="watchedDate", description="시청일")
    notes: Optional[str] = Field(default=None, description="메모")
    seasons: Optional[List[SeasonWatch]] = Field(default=None, description="시즌별 시청 기록")

    @field_validator("user_rating", mode="before")
    @classmethod
    def empty_rating_to_none(cls, value):
        return _empty_rating_to_none(value)

    @field_validator("seasons")
    @classmethod
    def unique_seasons(cls, seasons: Optional[List[SeasonWatch]]) -> Optional[List[SeasonWatch]]:
        if seasons is None:
            return None
        by_number = {season.season_number: season for season in seasons}
        return [by_number[number] for number in sorted(by_number)]

    @computed_field(alias="forceWatched")
    @property
    def force_watched(self) -> bool:
        """시즌 시청 기록이 있는 TV 프로그램은 시청 목록에서 직접 제거 불가"""
        return self.type == MediaType.tv and bool(self.seasons)

    @property
    def season_numbers(self) -> List[int]:
        return [season.season_number for season in self.seasons or []]


class WatchedRequest(BaseModel):
    """TMDB 조회 기반 시청 완료 요청"""

    model_config = ConfigDict(populate_by_name=True)

    user_rating: Optional[int] = Field(default=None, alias="userRating", ge=1, le=5, description="사용자 별점")
    watched_date: str = Field(default_factory=today_iso, alias="watchedDate", description="시청일")
    notes: Optional[str] = Field(default=None, description="메모")

    @field_validator("user_rating", mode="before")
    @classmethod
    def empty_rating_to_none(cls, value):
        return _empty_rating_to_none(value)


class SeasonWatchRequest(SeasonWatch):
    """시즌 시청 요청. 프로그램이 카탈로그에 없고 item도 없으면 TMDB에서 조회"""

    item: Optional[CatalogItem] = Field(default=None, description="프로그램 정보")

    def to_season(self) -> SeasonWatch:
        return SeasonWatch.model_validate(self.model_dump(exclude={"item"}))
