# app/api/v1/watchlist.py

from fastapi import APIRouter, Depends, Path
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_catalog_service, get_tmdb_service
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import CatalogItem, MediaType
from app.services.catalog_service import CatalogService
from app.services.media_utils import convert_to_catalog_item
from app.services.tmdb_service import TMDBService

router = APIRouter()


@router.post(
    "",
    response_model=Catalog,
    summary="왓치리스트 추가",
    description="카탈로그 항목을 왓치리스트에 추가합니다. 같은 항목이 있으면 교체합니다.",
)
async def add_to_watchlist(
    item: CatalogItem,
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.add_to_watchlist(item)
    except Exception as e:
        raise to_http_exception(e, "왓치리스트 추가에 실패했습니다")


@router.post(
    "/{type}/{item_id}",
    response_model=Catalog,
    summary="TMDB 조회 후 왓치리스트 추가",
    description="TMDB 상세 정보를 조회해 왓치리스트에 추가합니다.",
)
async def add_to_watchlist_by_id(
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        details = await tmdb_service.get_details(type, item_id)
        item = convert_to_catalog_item(details, type)
        return await catalog_service.add_to_watchlist(item)
    except Exception as e:
        raise to_http_exception(e, "왓치리스트 추가에 실패했습니다")


@router.delete(
    "/{type}/{item_id}",
    response_model=Catalog,
    summary="왓치리스트 제거",
    description="왓치리스트에서 항목을 제거합니다. 없는 항목이면 변경 없이 반환합니다.",
)
async def remove_from_watchlist(
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.remove_from_watchlist(item_id, type)
    except Exception as e:
        raise to_http_exception(e, "왓치리스트 제거에 실패했습니다")
