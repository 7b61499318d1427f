# app/core/config.py

from enum import Enum
from functools import lru_cache
from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DualMembershipPolicy(str, Enum):
    """왓치리스트/시청 목록 동시 등록 정책"""

    allow = "allow"
    reject = "reject"


class Settings(BaseSettings):
    """설정 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # 애플리케이션 설정
    app_name: str = Field(default="Media Catalog", description="애플리케이션 이름")
    debug: bool = Field(default=False, description="디버그 모드")

    # 카탈로그 저장소 설정
    catalog_file_path: str = Field(default="data/catalog.json", description="카탈로그 JSON 파일 경로")
    dual_membership_policy: DualMembershipPolicy = Field(
        default=DualMembershipPolicy.allow,
        description="시청 완료 항목의 왓치리스트 재등록 허용 여부",
    )

    # TMDB API 설정
    tmdb_api_key: Optional[str] = Field(default=None, description="TMDB API Key")
    tmdb_access_token: Optional[str] = Field(default=None, description="TMDB Access Token")
    tmdb_base_url: str = Field(default="https://api.themoviedb.org/3", description="TMDB API URL")
    tmdb_image_base_url: str = Field(default="https://image.tmdb.org/t/p/", description="TMDB 이미지 URL")
    tmdb_timeout: float = Field(default=10.0, description="요청 타임아웃")
    tmdb_language: str = Field(default="en-US", description="TMDB 응답 언어")

    # CORS 설정
    cors_allowed_origins: List[str] = Field(default=["*"], description="허용 Origin 목록")

    # 로깅 설정
    log_level: str = Field(default="INFO", description="로그 레벨")
    log_file: Optional[str] = Field(default=None, description="로그 파일 경로")

    @property
    def tmdb_headers(self) -> dict[str, str]:
        """TMDB API 요청 헤더"""
        headers = {"Content-Type": "application/json"}
        if self.tmdb_access_token:
            headers["Authorization"] = f"Bearer {self.tmdb_access_token}"
        return headers

    @property
    def tmdb_configured(self) -> bool:
        return bool(self.tmdb_access_token or self.tmdb_api_key)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
