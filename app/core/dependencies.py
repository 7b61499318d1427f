# app/core/dependencies.py

from fastapi import HTTPException, Request, status
from app.services.catalog_service import CatalogService
from app.services.tmdb_service import TMDBService


def get_catalog_service(request: Request) -> CatalogService:
    """앱 상태에 보관된 카탈로그 서비스"""
    catalog_service = getattr(request.app.state, "catalog_service", None)
    if catalog_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="카탈로그가 아직 로드되지 않았습니다"
        )
    return catalog_service


def get_tmdb_service() -> TMDBService:
    return TMDBService()
