# app/services/catalog_mutator.py

"""카탈로그 상태 전이 함수.

모든 함수는 입력 스냅샷을 수정하지 않고 새 Catalog를 반환한다.
규칙 위반은 InvariantViolation으로 거부한다.
"""

import random
import string
import time
from typing import List, Optional, Tuple
from app.core.config import DualMembershipPolicy
from app.core.exceptions import CatalogNotFound, InvariantViolation
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import CatalogItem, MediaType, utc_now_iso
from app.schemas.custom_list import CustomList
from app.schemas.watched import SeasonWatch, WatchedItem

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_list_id() -> str:
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"list_{int(time.time() * 1000)}_{suffix}"


def _without(items: List[CatalogItem], item_id: int, media_type: MediaType) -> list:
    return [item for item in items if not item.matches(item_id, media_type)]


def _find_watched(catalog: Catalog, item_id: int, media_type: MediaType) -> Optional[WatchedItem]:
    return next((item for item in catalog.watched if item.matches(item_id, media_type)), None)


def merge_seasons(
    existing: Optional[List[SeasonWatch]], update: Optional[List[SeasonWatch]]
) -> Optional[List[SeasonWatch]]:
    """시즌 병합: 기존 시즌 유지, 같은 시즌 번호는 교체"""
    if update is None:
        return list(existing) if existing is not None else None
    merged = {season.season_number: season for season in existing or []}
    for season in update:
        merged[season.season_number] = season
    return [merged[number] for number in sorted(merged)]


def add_to_watchlist(
    catalog: Catalog,
    item: CatalogItem,
    policy: DualMembershipPolicy = DualMembershipPolicy.allow,
) -> Catalog:
    if policy == DualMembershipPolicy.reject and _find_watched(catalog, item.id, item.type):
        raise InvariantViolation(f"'{item.title}'은(는) 이미 시청 완료 목록에 있습니다")

    # WatchedItem이 들어와도 왓치리스트에는 기본 항목만 저장
    entry = CatalogItem.model_validate(item.model_dump(include=set(CatalogItem.model_fields)))
    watchlist = _without(catalog.watchlist, item.id, item.type) + [entry]
    return catalog.model_copy(update={"watchlist": watchlist})


def remove_from_watchlist(catalog: Catalog, item_id: int, media_type: MediaType) -> Catalog:
    return catalog.model_copy(update={"watchlist": _without(catalog.watchlist, item_id, media_type)})


def mark_as_watched(catalog: Catalog, watched_item: WatchedItem) -> Catalog:
    """시청 완료 처리. 왓치리스트에서 제거하고 TV 시즌 기록은 병합"""
    entry = watched_item
    existing = _find_watched(catalog, watched_item.id, watched_item.type)

    if watched_item.type == MediaType.tv:
        seasons = merge_seasons(existing.seasons if existing else None, watched_item.seasons)
        entry = watched_item.model_copy(update={"seasons": seasons})
    elif watched_item.seasons is not None:
        entry = watched_item.model_copy(update={"seasons": None})

    return catalog.model_copy(
        update={
            "watched": _without(catalog.watched, entry.id, entry.type) + [entry],
            "watchlist": _without(catalog.watchlist, entry.id, entry.type),
        }
    )


def mark_season_watched(catalog: Catalog, item: CatalogItem, season: SeasonWatch) -> Catalog:
    """단일 시즌 시청 처리. 프로그램 시청 기록이 없으면 새로 생성"""
    if item.type != MediaType.tv:
        raise InvariantViolation("시즌 시청 기록은 TV 프로그램에만 추가할 수 있습니다")

    existing = _find_watched(catalog, item.id, MediaType.tv)
    if existing:
        watched_item = existing.model_copy(update={"seasons": [season]})
    else:
        data = item.model_dump(include=set(CatalogItem.model_fields))
        watched_item = WatchedItem(**data, watched_date=season.watched_date, seasons=[season])

    return mark_as_watched(catalog, watched_item)


def remove_from_watched(catalog: Catalog, item_id: int, media_type: MediaType) -> Catalog:
    existing = _find_watched(catalog, item_id, media_type)
    if existing and existing.force_watched:
        seasons = existing.season_numbers
        season_text = ", ".join(str(number) for number in seasons)
        raise InvariantViolation(
            f"'{existing.title}'은(는) 시청한 시즌이 있어 제거할 수 없습니다 "
            f"(watched seasons: {season_text}). 시즌 시청 기록을 먼저 해제해주세요",
            blocking_seasons=seasons,
        )
    return catalog.model_copy(update={"watched": _without(catalog.watched, item_id, media_type)})


def remove_season_watched(catalog: Catalog, item_id: int, season_number: int) -> Catalog:
    """시즌 시청 해제. 마지막 시즌이 해제되어도 프로그램 시청 기록은 유지"""
    existing = _find_watched(catalog, item_id, MediaType.tv)
    if not existing or season_number not in existing.season_numbers:
        return catalog

    seasons = [season for season in existing.seasons if season.season_number != season_number]
    updated = existing.model_copy(update={"seasons": seasons})
    watched = [updated if item is existing else item for item in catalog.watched]
    return catalog.model_copy(update={"watched": watched})


def create_custom_list(
    catalog: Catalog, name: str, description: Optional[str] = None
) -> Tuple[Catalog, str]:
    existing_ids = {custom_list.id for custom_list in catalog.custom_lists}
    list_id = generate_list_id()
    while list_id in existing_ids:
        list_id = generate_list_id()

    now = utc_now_iso()
    new_list = CustomList(id=list_id, name=name, description=description, created_at=now, updated_at=now)
    return catalog.model_copy(update={"custom_lists": catalog.custom_lists + [new_list]}), list_id


def _replace_list(catalog: Catalog, list_id: str, **changes) -> Catalog:
    custom_lists = [
        custom_list.model_copy(update={**changes, "updated_at": utc_now_iso()})
        if custom_list.id == list_id
        else custom_list
        for custom_list in catalog.custom_lists
    ]
    return catalog.model_copy(update={"custom_lists": custom_lists})


def update_custom_list(
    catalog: Catalog,
    list_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Catalog:
    if not any(custom_list.id == list_id for custom_list in catalog.custom_lists):
        raise CatalogNotFound(f"리스트를 찾을 수 없습니다 (ID: {list_id})")

    changes = {}
    if name is not None:
        if not name.strip():
            raise InvariantViolation("리스트 이름은 비어 있을 수 없습니다")
        changes["name"] = name.strip()
    if description is not None:
        changes["description"] = description or None
    return _replace_list(catalog, list_id, **changes)


def add_to_custom_list(catalog: Catalog, list_id: str, item: CatalogItem) -> Catalog:
    target = next((custom_list for custom_list in catalog.custom_lists if custom_list.id == list_id), None)
    if target is None:
        return catalog

    items = target.items
    if not target.contains(item.id, item.type):
        entry = CatalogItem.model_validate(item.model_dump(include=set(CatalogItem.model_fields)))
        items = items + [entry]
    return _replace_list(catalog, list_id, items=items)


def remove_from_custom_list(catalog: Catalog, list_id: str, item_id: int, media_type: MediaType) -> Catalog:
    target = next((custom_list for custom_list in catalog.custom_lists if custom_list.id == list_id), None)
    if target is None:
        return catalog
    return _replace_list(catalog, list_id, items=_without(target.items, item_id, media_type))


def delete_custom_list(catalog: Catalog, list_id: str) -> Catalog:
    custom_lists = [custom_list for custom_list in catalog.custom_lists if custom_list.id != list_id]
    return catalog.model_copy(update={"custom_lists": custom_lists})
