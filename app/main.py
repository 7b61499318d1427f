# app/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import get_settings
from app.core.logging_setup import setup_logging
from app.api.v1 import api_router
from app.services.catalog_service import CatalogService
from app.services.catalog_store import CatalogStore

# 설정 로드
settings = get_settings()
setup_logging(settings.log_level, settings.log_file)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 시작 시: 카탈로그 로드
    current = get_settings()
    catalog_service = CatalogService(
        CatalogStore(current.catalog_file_path),
        dual_membership_policy=current.dual_membership_policy,
    )
    catalog = await catalog_service.load()
    app.state.catalog_service = catalog_service
    logger.info(
        f"카탈로그 로드 완료 ({current.catalog_file_path}): "
        f"watchlist={len(catalog.watchlist)}, watched={len(catalog.watched)}, lists={len(catalog.custom_lists)}"
    )
    if not current.tmdb_configured:
        logger.warning("TMDB API key not found. Set TMDB_API_KEY or TMDB_ACCESS_TOKEN in .env")

    yield

    # 종료 시
    app.state.catalog_service = None
    logger.info("카탈로그 서비스 종료")


# FastAPI 앱 생성
app = FastAPI(
    title=settings.app_name,
    description="Personal movie & TV catalog service",
    version="1.0.0",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# CORS 미들웨어
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# API v1 라우터 등록
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """서비스 루트"""
    return {
        "service": settings.app_name,
        "description": "Personal movie & TV catalog service",
        "version": "1.0.0",
        "docs": "/docs",
    }
