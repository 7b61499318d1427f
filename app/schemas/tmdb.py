# app/schemas/tmdb.py

from typing import List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class TMDBGenre(BaseModel):
    id: int = Field(description="장르 ID")
    name: str = Field(description="장르 이름")


class TMDBRecord(BaseModel):
    """TMDB 검색/상세 공통 필드"""

    model_config = ConfigDict(extra="allow")

    id: int = Field(description="TMDB ID")
    overview: Optional[str] = Field(default="", description="줄거리")
    poster_path: Optional[str] = Field(default=None, description="포스터 경로")
    backdrop_path: Optional[str] = Field(default=None, description="배경 이미지 경로")
    vote_average: Optional[float] = Field(default=0.0, description="평균 평점")
    vote_count: Optional[int] = Field(default=0, description="평가 수")
    popularity: Optional[float] = Field(default=None, description="인기도")
    original_language: Optional[str] = Field(default=None, description="원어")
    genre_ids: List[int] = Field(default_factory=list, description="장르 ID 목록")
    adult: bool = Field(default=False, description="성인 콘텐츠 여부")

    # 응답 표시용 (TMDBService에서 채움)
    poster_url: Optional[str] = Field(default=None, description="포스터 이미지 URL")
    backdrop_url: Optional[str] = Field(default=None, description="배경 이미지 URL")
    release_year: str = Field(default="", description="개봉/첫 방영 연도")
    display_release_date: str = Field(default="", description="표시용 개봉일 (January 31, 2020)")


class TMDBMovieRecord(TMDBRecord):
    """영화 레코드"""

    media_type: Literal["movie"] = "movie"
    title: str = Field(description="영화 제목")
    original_title: Optional[str] = Field(default=None, description="원제")
    release_date: Optional[str] = Field(default="", description="개봉일")


class TMDBTVRecord(TMDBRecord):
    """TV 프로그램 레코드"""

    media_type: Literal["tv"] = "tv"
    name: str = Field(description="프로그램 이름")
    original_name: Optional[str] = Field(default=None, description="원제")
    first_air_date: Optional[str] = Field(default="", description="첫 방영일")
    origin_country: List[str] = Field(default_factory=list, description="제작 국가")


TMDBMediaRecord = Union[TMDBMovieRecord, TMDBTVRecord]


class TMDBCompany(BaseModel):
    id: int
    name: str
    logo_path: Optional[str] = None
    origin_country: Optional[str] = None


class TMDBSeasonSummary(BaseModel):
    id: int
    name: str
    season_number: int
    episode_count: Optional[int] = 0
    air_date: Optional[str] = None
    poster_path: Optional[str] = None
    poster_url: Optional[str] = None

class TMDBMovieDetails(TMDBMovieRecord):
    genres: List[TMDBGenre] = Field(default_factory=list, description="장르")
    runtime: Optional[int] = Field(default=None, description="상영시간(분)")
    status: Optional[str] = Field(default=None, description="상태")
    tagline: Optional[str] = Field(default=None, description="태그라인")
    budget: Optional[int] = Field(default=None, description="제작비")
    revenue: Optional[int] = Field(default=None, description="수익")
    imdb_id: Optional[str] = Field(default=None, description="IMDb ID")
    production_companies: List[TMDBCompany] = Field(default_factory=list, description="제작사")


class TMDBTVDetails(TMDBTVRecord):
    genres: List[TMDBGenre] = Field(default_factory=list, description="장르")
    episode_run_time: List[int] = Field(default_factory=list, description="에피소드 상영시간")
    status: Optional[str] = Field(default=None, description="상태")
    tagline: Optional[str] = Field(default=None, description="태그라인")
    number_of_episodes: Optional[int] = Field(default=None, description="전체 에피소드 수")
    number_of_seasons: Optional[int] = Field(default=None, description="전체 시즌 수")
    seasons: List[TMDBSeasonSummary] = Field(default_factory=list, description="시즌 목록")
    networks: List[TMDBCompany] = Field(default_factory=list, description="방송사")


class TMDBSearchResponse(BaseModel):
    """TMDB 검색 응답 (영화/TV만 포함)"""

    page: int = Field(default=1, description="페이지")
    results: List[TMDBMediaRecord] = Field(default_factory=list, description="검색 결과")
    total_pages: int = Field(default=0, description="전체 페이지 수")
    total_results: int = Field(default=0, description="전체 결과 수")
