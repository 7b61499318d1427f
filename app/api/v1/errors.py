# app/api/v1/errors.py

import logging
from fastapi import HTTPException, status
from app.core.exceptions import (
    CatalogNotFound,
    InvariantViolation,
    PersistenceError,
    TMDBError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: Exception, fallback: str = "요청 처리에 실패했습니다") -> HTTPException:
    """도메인 예외 -> HTTP 응답 변환"""
    if isinstance(error, InvariantViolation):
        detail = {"message": str(error), "blockingSeasons": error.blocking_seasons}
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)
    if isinstance(error, CatalogNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error))
    if isinstance(error, TMDBError):
        if error.status == 404:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="콘텐츠를 찾을 수 없습니다")
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))

    logger.error(f"{fallback}: {error}", exc_info=error)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{fallback}: {str(error)}"
    )
