# app/api/v1/media.py

from typing import Union
from fastapi import APIRouter, Depends, Path, Query
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_tmdb_service
from app.schemas.catalog_item import MediaType
from app.schemas.tmdb import TMDBMovieDetails, TMDBSearchResponse, TMDBTVDetails
from app.services.tmdb_service import TMDBService

router = APIRouter()


@router.get(
    "/popular/{type}",
    response_model=TMDBSearchResponse,
    summary="인기 콘텐츠",
    description="TMDB 인기 영화 또는 인기 TV 프로그램을 조회합니다.",
)
async def get_popular(
    type: MediaType = Path(description="미디어 타입"),
    page: int = Query(default=1, ge=1, le=500, description="페이지"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        if type == MediaType.movie:
            return await tmdb_service.get_popular_movies(page)
        return await tmdb_service.get_popular_tv(page)
    except Exception as e:
        raise to_http_exception(e, "인기 콘텐츠를 불러오는데 실패했습니다")


@router.get(
    "/trending",
    response_model=TMDBSearchResponse,
    summary="트렌딩 콘텐츠",
)
async def get_trending(
    media_type: str = Query(default="all", description="all | movie | tv", pattern="^(all|movie|tv)$"),
    time_window: str = Query(default="day", description="day | week", pattern="^(day|week)$"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        return await tmdb_service.get_trending(media_type, time_window)
    except Exception as e:
        raise to_http_exception(e, "트렌딩 콘텐츠를 불러오는데 실패했습니다")


@router.get(
    "/{type}/{item_id}",
    response_model=Union[TMDBMovieDetails, TMDBTVDetails],
    summary="콘텐츠 상세 정보",
    description="TMDB에서 영화 또는 TV 프로그램 상세 정보를 조회합니다.",
)
async def get_media_details(
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        return await tmdb_service.get_details(type, item_id)
    except Exception as e:
        raise to_http_exception(e, "상세 정보를 불러오는데 실패했습니다")
