# app/services/media_utils.py

import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union
from pydantic import ValidationError as PydanticValidationError
from app.core.config import get_settings
from app.core.exceptions import ValidationError
from app.schemas.catalog_item import CatalogItem, MediaType, utc_now_iso
from app.schemas.tmdb import TMDBMediaRecord, TMDBMovieRecord, TMDBTVDetails, TMDBTVRecord

logger = logging.getLogger(__name__)

RawRecord = Union[Mapping[str, Any], TMDBMovieRecord, TMDBTVRecord]


def parse_media_record(record: RawRecord, media_type: MediaType) -> TMDBMediaRecord:
    """외부 레코드를 영화/TV 레코드로 검증"""
    media_type = MediaType(media_type)
    if media_type == MediaType.movie and isinstance(record, TMDBMovieRecord):
        return record
    if media_type == MediaType.tv and isinstance(record, TMDBTVRecord):
        return record
    if isinstance(record, (TMDBMovieRecord, TMDBTVRecord)):
        raise ValidationError(f"{record.media_type} 레코드를 {media_type.value} 항목으로 변환할 수 없습니다")

    data = dict(record)
    data["media_type"] = media_type.value
    try:
        if media_type == MediaType.movie:
            return TMDBMovieRecord.model_validate(data)
        return TMDBTVRecord.model_validate(data)
    except PydanticValidationError as e:
        logger.warning(f"TMDB 레코드 검증 실패 ({media_type.value}, id={data.get('id')}): {e}")
        raise ValidationError(f"잘못된 {media_type.value} 레코드입니다: {e.error_count()}개 필드 오류")


def convert_to_catalog_item(record: RawRecord, media_type: MediaType) -> CatalogItem:
    """TMDB 레코드를 카탈로그 항목으로 변환"""
    parsed = parse_media_record(record, media_type)
    if isinstance(parsed, TMDBMovieRecord):
        title = parsed.title
        release_date = parsed.release_date
    else:
        title = parsed.name
        release_date = parsed.first_air_date

    return CatalogItem(
        id=parsed.id,
        type=MediaType(media_type),
        title=title,
        poster_path=parsed.poster_path,
        overview=parsed.overview or "",
        release_date=release_date or "",
        vote_average=parsed.vote_average or 0.0,
        date_added=utc_now_iso(),
    )


def get_media_type(record: Mapping[str, Any]) -> Optional[MediaType]:
    """레코드의 미디어 타입 추론 (person 등은 None)"""
    media_type = record.get("media_type")
    if media_type:
        try:
            return MediaType(media_type)
        except ValueError:
            return None
    if "title" in record:
        return MediaType.movie
    if "name" in record:
        return MediaType.tv
    return None


def format_release_date(date_string: Optional[str]) -> str:
    """2020-01-31 -> January 31, 2020"""
    if not date_string:
        return "Unknown"
    try:
        parsed = datetime.strptime(date_string, "%Y-%m-%d")
    except (ValueError, TypeError):
        return date_string
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_year(date_string: Optional[str]) -> str:
    if not date_string:
        return ""
    return date_string.split("-")[0]


def get_image_url(path: Optional[str], size: str = "w500") -> Optional[str]:
    if not path:
        return None
    return f"{get_settings().tmdb_image_base_url}{size}{path}"


def get_poster_url(path: Optional[str]) -> Optional[str]:
    return get_image_url(path, "w500")


def get_backdrop_url(path: Optional[str]) -> Optional[str]:
    return get_image_url(path, "w1280")


def get_thumbnail_url(path: Optional[str]) -> Optional[str]:
    return get_image_url(path, "w185")


def add_display_fields(record: TMDBMediaRecord) -> TMDBMediaRecord:
    """이미지 URL과 표시용 날짜 채우기. TV 상세의 시즌 포스터는 썸네일 크기"""
    release_date = record.release_date if isinstance(record, TMDBMovieRecord) else record.first_air_date
    update = {
        "poster_url": get_poster_url(record.poster_path),
        "backdrop_url": get_backdrop_url(record.backdrop_path),
        "release_year": format_year(release_date),
        "display_release_date": format_release_date(release_date),
    }
    if isinstance(record, TMDBTVDetails):
        update["seasons"] = [
            season.model_copy(update={"poster_url": get_thumbnail_url(season.poster_path)})
            for season in record.seasons
        ]
    return record.model_copy(update=update)
