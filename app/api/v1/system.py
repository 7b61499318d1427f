# app/api/v1/system.py

from fastapi import APIRouter, Depends
from app.core.config import get_settings
from app.core.dependencies import get_catalog_service
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/health")
def health_check():
    """서비스 헬스체크"""
    return {"status": "healthy", "service": get_settings().app_name}


@router.get("/storage")
def storage_check(catalog_service: CatalogService = Depends(get_catalog_service)):
    """카탈로그 저장소 상태"""
    path = catalog_service.store.path
    return {
        "path": str(path),
        "exists": path.exists(),
        "lastUpdated": catalog_service.catalog.last_updated,
        "tmdbConfigured": get_settings().tmdb_configured,
    }
