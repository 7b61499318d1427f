# app/api/v1/search.py

from fastapi import APIRouter, Depends, HTTPException, Query
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_tmdb_service
from app.schemas.catalog_item import MediaType
from app.schemas.tmdb import TMDBSearchResponse
from app.services.tmdb_service import TMDBService

router = APIRouter()


def is_valid_search_query(query: str) -> bool:
    """검색어가 유효한지 확인"""
    return bool(query and len(query.strip()) > 0)


@router.get(
    "",
    response_model=TMDBSearchResponse,
    summary="영화/TV 검색",
    description="TMDB에서 영화와 TV 프로그램을 검색합니다. 성인 콘텐츠와 인물 결과는 제외됩니다.",
)
async def search_media(
    query: str = Query(description="검색할 키워드", min_length=1),
    media_type: str = Query(default="all", description="all | movie | tv", pattern="^(all|movie|tv)$"),
    page: int = Query(default=1, ge=1, le=500, description="페이지"),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    """통합 검색"""
    if not is_valid_search_query(query):
        raise HTTPException(status_code=400, detail="검색어를 입력해주세요")

    try:
        fixed_type = None if media_type == "all" else MediaType(media_type)
        return await tmdb_service.search(query.strip(), fixed_type, page)
    except Exception as e:
        raise to_http_exception(e, "검색에 실패했습니다")
