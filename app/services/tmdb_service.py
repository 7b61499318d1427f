# app/services/tmdb_service.py

import logging
from typing import Any, Dict, List, Optional
import httpx
from pydantic import ValidationError as PydanticValidationError
from app.core.config import get_settings
from app.core.exceptions import TMDBError
from app.schemas.catalog_item import MediaType
from app.schemas.tmdb import (
    TMDBMediaRecord,
    TMDBMovieDetails,
    TMDBMovieRecord,
    TMDBSearchResponse,
    TMDBTVDetails,
    TMDBTVRecord,
)
from app.services.media_utils import add_display_fields, get_media_type

logger = logging.getLogger(__name__)


class TMDBService:

    def __init__(self):
        self.settings = get_settings()
        self.timeout = httpx.Timeout(self.settings.tmdb_timeout)
        self.default_language = self.settings.tmdb_language

    def _params(self, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = dict(params or {})
        if not self.settings.tmdb_access_token and self.settings.tmdb_api_key:
            params["api_key"] = self.settings.tmdb_api_key
        return params

    async def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> dict:
        if not self.settings.tmdb_configured:
            raise TMDBError("TMDB API key is not configured")

        url = f"{self.settings.tmdb_base_url}{endpoint}"

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(
                    url,
                    params=self._params(params),
                    headers=self.settings.tmdb_headers
                )
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                logger.warning(f"TMDB API 오류: {endpoint} -> {status}")
                raise TMDBError(f"TMDB API error: {e.response.reason_phrase}", status)
            except httpx.RequestError as e:
                logger.error(f"TMDB 요청 실패: {endpoint} -> {e}")
                raise TMDBError(f"Failed to fetch data from TMDB API: {e}")

    def _parse_results(self, data: dict, media_type: Optional[MediaType] = None) -> TMDBSearchResponse:
        """검색 결과에서 성인 콘텐츠와 영화/TV 이외 항목(인물 등) 제거"""
        results: List[TMDBMediaRecord] = []
        for result_data in data.get("results", []):
            if result_data.get("adult"):
                continue

            record_type = media_type or get_media_type(result_data)
            if record_type is None:
                continue

            try:
                if record_type == MediaType.movie:
                    record = TMDBMovieRecord.model_validate({**result_data, "media_type": "movie"})
                else:
                    record = TMDBTVRecord.model_validate({**result_data, "media_type": "tv"})
            except PydanticValidationError as e:
                logger.debug(f"TMDB 결과 건너뜀 (id={result_data.get('id')}): {e.error_count()}개 필드 오류")
                continue
            results.append(add_display_fields(record))

        return TMDBSearchResponse(
            page=data.get("page", 1),
            results=results,
            total_pages=data.get("total_pages", 0),
            total_results=data.get("total_results", 0),
        )

    async def search_multi(self, query: str, page: int = 1, language: str = None) -> TMDBSearchResponse:
        data = await self._request(
            "/search/multi",
            {"query": query, "page": page, "include_adult": "false", "language": language or self.default_language},
        )
        return self._parse_results(data)

    async def search_movies(self, query: str, page: int = 1, language: str = None) -> TMDBSearchResponse:
        data = await self._request(
            "/search/movie",
            {"query": query, "page": page, "include_adult": "false", "language": language or self.default_language},
        )
        return self._parse_results(data, MediaType.movie)

    async def search_tv(self, query: str, page: int = 1, language: str = None) -> TMDBSearchResponse:
        data = await self._request(
            "/search/tv",
            {"query": query, "page": page, "include_adult": "false", "language": language or self.default_language},
        )
        return self._parse_results(data, MediaType.tv)

    async def search(
        self, query: str, media_type: Optional[MediaType] = None, page: int = 1, language: str = None
    ) -> TMDBSearchResponse:
        if media_type == MediaType.movie:
            return await self.search_movies(query, page, language)
        if media_type == MediaType.tv:
            return await self.search_tv(query, page, language)
        return await self.search_multi(query, page, language)

    async def get_movie_details(self, movie_id: int, language: str = None) -> TMDBMovieDetails:
        data = await self._request(f"/movie/{movie_id}", {"language": language or self.default_language})
        return add_display_fields(TMDBMovieDetails.model_validate({**data, "media_type": "movie"}))

    async def get_tv_details(self, tv_id: int, language: str = None) -> TMDBTVDetails:
        data = await self._request(f"/tv/{tv_id}", {"language": language or self.default_language})
        return add_display_fields(TMDBTVDetails.model_validate({**data, "media_type": "tv"}))

    async def get_details(self, media_type: MediaType, item_id: int, language: str = None):
        if media_type == MediaType.movie:
            return await self.get_movie_details(item_id, language)
        return await self.get_tv_details(item_id, language)

    async def get_popular_movies(self, page: int = 1, language: str = None) -> TMDBSearchResponse:
        data = await self._request("/movie/popular", {"page": page, "language": language or self.default_language})
        return self._parse_results(data, MediaType.movie)

    async def get_popular_tv(self, page: int = 1, language: str = None) -> TMDBSearchResponse:
        data = await self._request("/tv/popular", {"page": page, "language": language or self.default_language})
        return self._parse_results(data, MediaType.tv)

    async def get_trending(
        self, media_type: str = "all", time_window: str = "day", language: str = None
    ) -> TMDBSearchResponse:
        data = await self._request(
            f"/trending/{media_type}/{time_window}", {"language": language or self.default_language}
        )
        fixed_type = None if media_type == "all" else MediaType(media_type)
        return self._parse_results(data, fixed_type)
