# app/services/catalog_service.py

import asyncio
import logging
from typing import Callable, Optional, Tuple
from app.core.config import DualMembershipPolicy
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import CatalogItem, MediaType
from app.schemas.custom_list import CustomList
from app.schemas.watched import SeasonWatch, WatchedItem
from app.services import catalog_evaluator as evaluator
from app.services import catalog_mutator as mutator
from app.services.catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class CatalogService:
    """메모리 카탈로그 상태와 저장소를 묶는 상태 객체.

    변경 요청은 락으로 직렬화되며, 저장에 성공한 스냅샷만 메모리 상태로 반영한다.
    """

    def __init__(
        self,
        store: CatalogStore,
        dual_membership_policy: DualMembershipPolicy = DualMembershipPolicy.allow,
    ):
        self.store = store
        self.dual_membership_policy = dual_membership_policy
        self._catalog: Catalog = Catalog.empty()
        self._lock = asyncio.Lock()

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    async def load(self) -> Catalog:
        async with self._lock:
            self._catalog = await asyncio.to_thread(self.store.read)
        return self._catalog

    async def reload(self) -> Catalog:
        return await self.load()

    async def _commit(self, mutate: Callable[[Catalog], Catalog]) -> Catalog:
        async with self._lock:
            new_catalog = mutate(self._catalog)
            # PersistenceError 발생 시 이전 상태 유지
            self._catalog = await asyncio.to_thread(self.store.write, new_catalog)
        return self._catalog

    async def replace(self, catalog: Catalog) -> Catalog:
        logger.info("카탈로그 전체 교체 요청")
        return await self._commit(lambda _: catalog)

    async def add_to_watchlist(self, item: CatalogItem) -> Catalog:
        logger.info(f"왓치리스트 추가: {item.type.value}/{item.id} {item.title}")
        return await self._commit(
            lambda catalog: mutator.add_to_watchlist(catalog, item, self.dual_membership_policy)
        )

    async def remove_from_watchlist(self, item_id: int, media_type: MediaType) -> Catalog:
        logger.info(f"왓치리스트 제거: {media_type.value}/{item_id}")
        return await self._commit(lambda catalog: mutator.remove_from_watchlist(catalog, item_id, media_type))

    async def mark_as_watched(self, item: WatchedItem) -> Catalog:
        logger.info(f"시청 완료 처리: {item.type.value}/{item.id} {item.title}")
        return await self._commit(lambda catalog: mutator.mark_as_watched(catalog, item))

    async def remove_from_watched(self, item_id: int, media_type: MediaType) -> Catalog:
        logger.info(f"시청 완료 해제: {media_type.value}/{item_id}")
        return await self._commit(lambda catalog: mutator.remove_from_watched(catalog, item_id, media_type))

    async def mark_season_watched(self, item: CatalogItem, season: SeasonWatch) -> Catalog:
        logger.info(f"시즌 시청 처리: tv/{item.id} season {season.season_number}")
        return await self._commit(lambda catalog: mutator.mark_season_watched(catalog, item, season))

    async def remove_season_watched(self, item_id: int, season_number: int) -> Catalog:
        logger.info(f"시즌 시청 해제: tv/{item_id} season {season_number}")
        return await self._commit(lambda catalog: mutator.remove_season_watched(catalog, item_id, season_number))

    async def create_custom_list(self, name: str, description: Optional[str] = None) -> Tuple[Catalog, str]:
        created = {}

        def mutate(catalog: Catalog) -> Catalog:
            new_catalog, list_id = mutator.create_custom_list(catalog, name, description)
            created["id"] = list_id
            return new_catalog

        catalog = await self._commit(mutate)
        logger.info(f"커스텀 리스트 생성: {created['id']} ({name})")
        return catalog, created["id"]

    async def update_custom_list(
        self, list_id: str, name: Optional[str] = None, description: Optional[str] = None
    ) -> Catalog:
        logger.info(f"커스텀 리스트 수정: {list_id}")
        return await self._commit(lambda catalog: mutator.update_custom_list(catalog, list_id, name, description))

    async def add_to_custom_list(self, list_id: str, item: CatalogItem) -> Catalog:
        logger.info(f"커스텀 리스트 항목 추가: {list_id} <- {item.type.value}/{item.id}")
        return await self._commit(lambda catalog: mutator.add_to_custom_list(catalog, list_id, item))

    async def remove_from_custom_list(self, list_id: str, item_id: int, media_type: MediaType) -> Catalog:
        logger.info(f"커스텀 리스트 항목 제거: {list_id} -> {media_type.value}/{item_id}")
        return await self._commit(
            lambda catalog: mutator.remove_from_custom_list(catalog, list_id, item_id, media_type)
        )

    async def delete_custom_list(self, list_id: str) -> Catalog:
        logger.info(f"커스텀 리스트 삭제: {list_id}")
        return await self._commit(lambda catalog: mutator.delete_custom_list(catalog, list_id))

    def get_custom_list(self, list_id: str) -> Optional[CustomList]:
        return evaluator.get_custom_list(self._catalog, list_id)

    def get_watched_item(self, item_id: int, media_type: MediaType) -> Optional[WatchedItem]:
        return evaluator.get_watched_item(self._catalog, item_id, media_type)
