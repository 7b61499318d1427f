# app/api/v1/__init__.py

from fastapi import APIRouter
from . import catalog, watchlist, watched, lists, search, media, system

api_router = APIRouter()

api_router.include_router(catalog.router, prefix="/catalog", tags=["카탈로그"])
api_router.include_router(watchlist.router, prefix="/watchlist", tags=["왓치리스트"])
api_router.include_router(watched.router, prefix="/watched", tags=["시청 완료"])
api_router.include_router(lists.router, prefix="/lists", tags=["커스텀 리스트"])
api_router.include_router(search.router, prefix="/search", tags=["검색"])
api_router.include_router(media.router, prefix="/media", tags=["콘텐츠"])
api_router.include_router(system.router, prefix="/system", tags=["시스템"])
