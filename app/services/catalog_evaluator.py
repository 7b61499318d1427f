# app/services/catalog_evaluator.py

"""카탈로그 스냅샷에 대한 읽기 전용 계산 (포함 여부, 통계, 정렬/필터)"""

import math
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Sequence, TypeVar
from app.schemas.catalog import Catalog, CatalogStats, ItemStatus
from app.schemas.catalog_item import CatalogItem, MediaType, dedupe_by_key, parse_timestamp
from app.schemas.custom_list import CustomList
from app.schemas.watched import WatchedItem

T = TypeVar("T", bound=CatalogItem)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortOption(str, Enum):
    date_added = "dateAdded"
    title = "title"
    rating = "rating"
    release_date = "releaseDate"


def is_in_watchlist(catalog: Catalog, item_id: int, media_type: MediaType) -> bool:
    return any(item.matches(item_id, media_type) for item in catalog.watchlist)


def is_watched(catalog: Catalog, item_id: int, media_type: MediaType) -> bool:
    return any(item.matches(item_id, media_type) for item in catalog.watched)


def get_watched_item(catalog: Catalog, item_id: int, media_type: MediaType) -> Optional[WatchedItem]:
    return next((item for item in catalog.watched if item.matches(item_id, media_type)), None)


def is_season_watched(catalog: Catalog, item_id: int, season_number: int) -> bool:
    show = get_watched_item(catalog, item_id, MediaType.tv)
    if not show or not show.seasons:
        return False
    return season_number in show.season_numbers


def has_watched_seasons(item: WatchedItem) -> bool:
    return item.force_watched


def find_in_custom_lists(catalog: Catalog, item_id: int, media_type: MediaType) -> List[CustomList]:
    return [custom_list for custom_list in catalog.custom_lists if custom_list.contains(item_id, media_type)]


def get_custom_list(catalog: Catalog, list_id: str) -> Optional[CustomList]:
    return next((custom_list for custom_list in catalog.custom_lists if custom_list.id == list_id), None)


def get_all_catalog_items(catalog: Catalog) -> List[CatalogItem]:
    """왓치리스트 -> 시청 완료 -> 커스텀 리스트 순, 먼저 나온 항목 우선"""
    items: List[CatalogItem] = [*catalog.watchlist, *catalog.watched]
    for custom_list in catalog.custom_lists:
        items.extend(custom_list.items)
    return dedupe_by_key(items, keep="first")


def _round_half_up(value: float, digits: int = 1) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def get_catalog_stats(catalog: Catalog) -> CatalogStats:
    all_items = get_all_catalog_items(catalog)
    ratings = [item.user_rating for item in catalog.watched if item.user_rating]
    average_rating = _round_half_up(sum(ratings) / len(ratings)) if ratings else 0.0

    return CatalogStats(
        total_items=len(all_items),
        watchlist_count=len(catalog.watchlist),
        watched_count=len(catalog.watched),
        custom_lists_count=len(catalog.custom_lists),
        movie_count=sum(1 for item in all_items if item.type == MediaType.movie),
        tv_show_count=sum(1 for item in all_items if item.type == MediaType.tv),
        average_rating=average_rating,
    )


def get_item_status(catalog: Catalog, item_id: int, media_type: MediaType) -> ItemStatus:
    watched_item = get_watched_item(catalog, item_id, media_type)
    return ItemStatus(
        id=item_id,
        type=media_type,
        in_watchlist=is_in_watchlist(catalog, item_id, media_type),
        watched=watched_item is not None,
        force_watched=bool(watched_item and watched_item.force_watched),
        watched_seasons=watched_item.season_numbers if watched_item else [],
        lists=[custom_list.id for custom_list in find_in_custom_lists(catalog, item_id, media_type)],
        watched_item=watched_item,
    )


# 정렬 (입력 목록은 변경하지 않음)

def sort_by_date_added(items: Sequence[T], ascending: bool = False) -> List[T]:
    return sorted(items, key=lambda item: parse_timestamp(item.date_added) or _EPOCH, reverse=not ascending)


def sort_by_title(items: Sequence[T], ascending: bool = True) -> List[T]:
    return sorted(items, key=lambda item: (item.title.casefold(), item.title), reverse=not ascending)


def sort_by_rating(items: Sequence[T], ascending: bool = False) -> List[T]:
    return sorted(items, key=lambda item: item.vote_average, reverse=not ascending)


def sort_by_release_date(items: Sequence[T], ascending: bool = False) -> List[T]:
    """개봉일 정렬. 개봉일이 없는 항목은 방향과 무관하게 마지막"""
    dated = [item for item in items if item.release_date]
    undated = [item for item in items if not item.release_date]
    dated.sort(key=lambda item: item.release_date, reverse=not ascending)
    return dated + undated


def sort_items(items: Sequence[T], sort_by: SortOption = SortOption.date_added, ascending: Optional[bool] = None) -> List[T]:
    """정렬 옵션별 기본 방향: 제목은 오름차순, 나머지는 내림차순"""
    sorters = {
        SortOption.date_added: sort_by_date_added,
        SortOption.title: sort_by_title,
        SortOption.rating: sort_by_rating,
        SortOption.release_date: sort_by_release_date,
    }
    sorter = sorters[SortOption(sort_by)]
    if ascending is None:
        return sorter(items)
    return sorter(items, ascending=ascending)


# 필터

def filter_by_type(items: Sequence[T], media_type: MediaType) -> List[T]:
    return [item for item in items if item.type == media_type]


def filter_by_title(items: Sequence[T], search_term: str) -> List[T]:
    term = (search_term or "").strip().lower()
    if not term:
        return list(items)
    return [item for item in items if term in item.title.lower() or term in item.overview.lower()]
