# app/api/v1/lists.py

from fastapi import APIRouter, Depends, Path, status
from app.api.v1.errors import to_http_exception
from app.core.dependencies import get_catalog_service
from app.core.exceptions import CatalogNotFound
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import CatalogItem, MediaType
from app.schemas.custom_list import CustomList, CustomListCreate, CustomListCreated, CustomListUpdate
from app.services.catalog_service import CatalogService

router = APIRouter()


def _require_list(catalog_service: CatalogService, list_id: str) -> CustomList:
    custom_list = catalog_service.get_custom_list(list_id)
    if custom_list is None:
        raise CatalogNotFound(f"리스트를 찾을 수 없습니다 (ID: {list_id})")
    return custom_list


@router.post(
    "",
    response_model=CustomListCreated,
    status_code=status.HTTP_201_CREATED,
    summary="커스텀 리스트 생성",
    description="빈 커스텀 리스트를 생성하고 ID를 반환합니다.",
)
async def create_custom_list(
    request: CustomListCreate,
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        _, list_id = await catalog_service.create_custom_list(request.name, request.description)
        return CustomListCreated(id=list_id, list=_require_list(catalog_service, list_id))
    except Exception as e:
        raise to_http_exception(e, "리스트 생성에 실패했습니다")


@router.get(
    "/{list_id}",
    response_model=CustomList,
    summary="커스텀 리스트 조회",
)
async def get_custom_list(
    list_id: str = Path(description="리스트 ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return _require_list(catalog_service, list_id)
    except Exception as e:
        raise to_http_exception(e)


@router.patch(
    "/{list_id}",
    response_model=CustomList,
    summary="커스텀 리스트 수정",
    description="리스트 이름과 설명을 수정합니다.",
)
async def update_custom_list(
    request: CustomListUpdate,
    list_id: str = Path(description="리스트 ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        await catalog_service.update_custom_list(list_id, request.name, request.description)
        return _require_list(catalog_service, list_id)
    except Exception as e:
        raise to_http_exception(e, "리스트 수정에 실패했습니다")


@router.delete(
    "/{list_id}",
    response_model=Catalog,
    summary="커스텀 리스트 삭제",
)
async def delete_custom_list(
    list_id: str = Path(description="리스트 ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        return await catalog_service.delete_custom_list(list_id)
    except Exception as e:
        raise to_http_exception(e, "리스트 삭제에 실패했습니다")


@router.post(
    "/{list_id}/items",
    response_model=CustomList,
    summary="리스트 항목 추가",
    description="리스트에 항목을 추가합니다. 이미 있는 항목은 그대로 유지됩니다.",
)
async def add_to_custom_list(
    item: CatalogItem,
    list_id: str = Path(description="리스트 ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        _require_list(catalog_service, list_id)
        await catalog_service.add_to_custom_list(list_id, item)
        return _require_list(catalog_service, list_id)
    except Exception as e:
        raise to_http_exception(e, "리스트 항목 추가에 실패했습니다")


@router.delete(
    "/{list_id}/items/{type}/{item_id}",
    response_model=CustomList,
    summary="리스트 항목 제거",
)
async def remove_from_custom_list(
    list_id: str = Path(description="리스트 ID"),
    type: MediaType = Path(description="미디어 타입"),
    item_id: int = Path(description="TMDB ID"),
    catalog_service: CatalogService = Depends(get_catalog_service),
):
    try:
        _require_list(catalog_service, list_id)
        await catalog_service.remove_from_custom_list(list_id, item_id, type)
        return _require_list(catalog_service, list_id)
    except Exception as e:
        raise to_http_exception(e, "리스트 항목 제거에 실패했습니다")
