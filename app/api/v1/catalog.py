# app/api/v1/catalog.py

from typing import Any, Dict, List, Optional, Union
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_catalog_service
from app.core.exceptions import CatalogNotFound
from app.schemas.catalog import Catalog, CatalogStats, ItemStatus
from app.schemas.catalog_item import CatalogItem, MediaType
from app.schemas.watched import WatchedItem
from app.services import catalog_evaluator as evaluator
from app.services.catalog_evaluator import SortOption
from app.services.catalog_service import CatalogService
from app.services.catalog_store import parse_catalog_document

router = APIRouter()

VIEWS = {"all", "watchlist", "watched", "list"}


@router.get(
    "",
    response_model=Catalog,
    summary="카탈로그 조회",
    description="왓치리스트, 시청 완료 목록, 커스텀 리스트 전체를 조회합니다.",
)
async def get_catalog(catalog_service: CatalogService = Depends(get_catalog_service)):
    return catalog_service.catalog


@router.put(
    "",
    response_model=Catalog,
    summary="카탈로그 전체 교체",
    description="카탈로그 문서 전체를 검증 후 저장합니다.",
)
async def replace_catalog(
    document: Dict[str, Any] = Body(description="카탈로그 문서"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        catalog = parse_catalog_document(document)
        return await catalog_service.replace(catalog)
    except Exception as e:
        raise to_http_exception(e, "카탈로그 저장에 실패했습니다")


@router.post(
    "/reload",
    response_model=Catalog,
    summary="카탈로그 다시 읽기",
    description="저장소에서 카탈로그를 다시 읽어옵니다.",
)
async def reload_catalog(catalog_service: CatalogService = Depends(get_catalog_service)):
    return await catalog_service.reload()


@router.get(
    "/stats",
    response_model=CatalogStats,
    summary="카탈로그 통계",
    description="전체/목록별/타입별 항목 수와 평균 별점을 조회합니다.",
)
async def get_catalog_stats(catalog_service: CatalogService = Depends(get_catalog_service)):
    return evaluator.get_catalog_stats(catalog_service.catalog)


@router.get(
    "/items",
    response_model=List[Union[WatchedItem, CatalogItem]],
    summary="카탈로그 항목 목록",
    description="보기(view)별 항목을 타입/검색어로 필터링하고 정렬합니다.",
)
async def list_catalog_items(
    view: str = Query(default="all", description="all | watchlist | watched | list"),
    list_id: Optional[str] = Query(default=None, description="view=list 일 때 리스트 ID"),
    type: Optional[MediaType] = Query(default=None, description="미디어 타입 필터"),
    q: Optional[str] = Query(default=None, description="제목/줄거리 검색어"),
    sort_by: SortOption = Query(default=SortOption.date_added, description="정렬 기준"),
    ascending: Optional[bool] = Query(default=None, description="오름차순 여부 (미지정 시 기준별 기본값)"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    if view not in VIEWS:
        raise HTTPException(status_code=400, detail=f"지원하지 않는 보기입니다: {view}")

    catalog = catalog_service.catalog
    try:
        if view == "watchlist":
            items = list(catalog.watchlist)
        elif view == "watched":
            items = list(catalog.watched)
        elif view == "list":
            custom_list = evaluator.get_custom_list(catalog, list_id) if list_id else None
            if custom_list is None:
                raise CatalogNotFound(f"리스트를 찾을 수 없습니다 (ID: {list_id})")
            items = list(custom_list.items)
        else:
            items = evaluator.get_all_catalog_items(catalog)

        if type:
            items = evaluator.filter_by_type(items, type)
        if q:
            items = evaluator.filter_by_title(items, q)
        return evaluator.sort_items(items, sort_by, ascending)
    except Exception as e:
        raise to_http_exception(e, "카탈로그 항목 조회에 실패했습니다")


@router.get(
    "/status/{type}/{item_id}",
    response_model=ItemStatus,
    summary="항목 상태",
    description="항목의 왓치리스트/시청 완료/시즌/리스트 포함 여부를 조회합니다.",
)
async def get_item_status(
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    return evaluator.get_item_status(catalog_service.catalog, item_id, type)
