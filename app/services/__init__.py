# app/services/__init__.py

from .tmdb_service import TMDBService
from .catalog_store import CatalogStore
from .catalog_service import CatalogService

__all__ = ["TMDBService", "CatalogStore", "CatalogService"]
