# app/core/exceptions.py

from typing import List, Optional


class CatalogError(Exception):
    """카탈로그 처리 기본 예외"""


class InvariantViolation(CatalogError):
    """카탈로그 규칙 위반 (예: 시즌 시청 기록이 남은 TV 프로그램 제거)"""

    def __init__(self, message: str, blocking_seasons: Optional[List[int]] = None):
        super().__init__(message)
        self.blocking_seasons = blocking_seasons or []


class CatalogNotFound(CatalogError):
    """대상 항목 또는 커스텀 리스트 없음"""


class ValidationError(CatalogError):
    """카탈로그 문서 또는 외부 레코드 형식 오류"""


class PersistenceError(CatalogError):
    """카탈로그 저장소 읽기/쓰기 실패"""


class TMDBError(Exception):
    """TMDB API 호출 실패"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status
