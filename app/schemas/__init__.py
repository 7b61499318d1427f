# app/schemas/__init__.py

from .catalog_item import CatalogItem, MediaType
from .watched import SeasonWatch, WatchedItem, WatchedRequest, SeasonWatchRequest
from .custom_list import CustomList, CustomListCreate, CustomListUpdate, CustomListCreated
from .catalog import Catalog, CatalogStats, ItemStatus
from .tmdb import (
    TMDBMovieRecord,
    TMDBTVRecord,
    TMDBMediaRecord,
    TMDBMovieDetails,
    TMDBTVDetails,
    TMDBSearchResponse,
)

__all__ = [
    "CatalogItem",
    "MediaType",
    "SeasonWatch",
    "WatchedItem",
    "WatchedRequest",
    "SeasonWatchRequest",
    "CustomList",
    "CustomListCreate",
    "CustomListUpdate",
    "CustomListCreated",
    "Catalog",
    "CatalogStats",
    "ItemStatus",
    "TMDBMovieRecord",
    "TMDBTVRecord",
    "TMDBMediaRecord",
    "TMDBMovieDetails",
    "TMDBTVDetails",
    "TMDBSearchResponse",
]
