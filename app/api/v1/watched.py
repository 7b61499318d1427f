# app/api/v1/watched.py

from fastapi import APIRouter, Depends, Path
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_catalog_service, get_tmdb_service
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import MediaType
from app.schemas.watched import SeasonWatchRequest, WatchedItem, WatchedRequest
from app.services.catalog_service import CatalogService
from app.services.media_utils import convert_to_catalog_item
from app.services.tmdb_service import TMDBService

router = APIRouter()


@router.post(
    "",
    response_model=Catalog,
    summary="시청 완료 처리",
    description="항목을 시청 완료 목록에 추가하고 왓치리스트에서 제거합니다. TV 시즌 기록은 병합됩니다.",
)
async def mark_as_watched(
    item: WatchedItem,
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.mark_as_watched(item)
    except Exception as e:
        raise to_http_exception(e, "시청 완료 처리에 실패했습니다")


@router.post(
    "/{type}/{item_id}",
    response_model=Catalog,
    summary="TMDB 조회 후 시청 완료 처리",
    description="TMDB 상세 정보를 조회해 별점, 시청일, 메모와 함께 시청 완료 처리합니다.",
)
async def mark_as_watched_by_id(
    request: WatchedRequest,
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        details = await tmdb_service.get_details(type, item_id)
        catalog_item = convert_to_catalog_item(details, type)
        watched_item = WatchedItem(**catalog_item.model_dump(), **request.model_dump())
        return await catalog_service.mark_as_watched(watched_item)
    except Exception as e:
        raise to_http_exception(e, "시청 완료 처리에 실패했습니다")


@router.delete(
    "/{type}/{item_id}",
    response_model=Catalog,
    summary="시청 완료 해제",
    description="시청 완료 목록에서 항목을 제거합니다. 시청한 시즌이 남아 있는 TV 프로그램은 409를 반환합니다.",
)
async def remove_from_watched(
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.remove_from_watched(item_id, type)
    except Exception as e:
        raise to_http_exception(e, "시청 완료 해제에 실패했습니다")


@router.post(
    "/tv/{item_id}/seasons",
    response_model=Catalog,
    summary="시즌 시청 처리",
    description="TV 프로그램의 시즌을 시청 완료 처리합니다. 프로그램 정보가 없으면 TMDB에서 조회합니다.",
)
async def mark_season_watched(
    request: SeasonWatchRequest,
    item_id: int = Path(description="TMDB TV ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
    tmdb_service: TMDBService = Depends(get_tmdb_service),
):
    try:
        show = catalog_service.get_watched_item(item_id, MediaType.tv) or request.item
        if show is None:
            details = await tmdb_service.get_tv_details(item_id)
            show = convert_to_catalog_item(details, MediaType.tv)
        elif show.id != item_id or show.type != MediaType.tv:
            show = show.model_copy(update={"id": item_id, "type": MediaType.tv})
        return await catalog_service.mark_season_watched(show, request.to_season())
    except Exception as e:
        raise to_http_exception(e, "시즌 시청 처리에 실패했습니다")


@router.delete(
    "/tv/{item_id}/seasons/{season_number}",
    response_model=Catalog,
    summary="시즌 시청 해제",
    description="시즌 시청 기록을 제거합니다. 마지막 시즌을 해제해도 프로그램 시청 기록은 유지됩니다.",
)
async def remove_season_watched(
    item_id: int = Path(description="TMDB TV ID"),
    season_number: int = Path(ge=0, description="시즌 번호"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.remove_season_watched(item_id, season_number)
    except Exception as e:
        raise to_http_exception(e, "시즌 시청 해제에 실패했습니다")
