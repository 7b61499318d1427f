# app/services/catalog_store.py

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Union
from pydantic import ValidationError as PydanticValidationError
from app.core.exceptions import PersistenceError, ValidationError
from app.schemas.catalog import Catalog
from app.schemas.catalog_item import utc_now_iso

logger = logging.getLogger(__name__)


def validate_catalog_document(document: Any) -> None:
    """카탈로그 문서 형태 검사 (watchlist/watched/customLists 배열, lastUpdated 문자열)"""
    if not isinstance(document, dict):
        raise ValidationError("카탈로그 문서는 객체여야 합니다")
    for key in ("watchlist", "watched", "customLists"):
        if not isinstance(document.get(key), list):
            raise ValidationError(f"'{key}' 필드는 배열이어야 합니다")
    if not isinstance(document.get("lastUpdated"), str):
        raise ValidationError("'lastUpdated' 필드는 문자열이어야 합니다")


def parse_catalog_document(document: Any) -> Catalog:
    validate_catalog_document(document)
    try:
        return Catalog.model_validate(document)
    except PydanticValidationError as e:
        raise ValidationError(f"카탈로그 항목 검증 실패: {e.error_count()}개 오류")


class CatalogStore:
    """단일 JSON 파일 기반 카탈로그 저장소"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _ensure_data_directory(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def read(self) -> Catalog:
        """카탈로그 읽기. 파일이 없거나 손상된 경우 빈 카탈로그 반환"""
        if not self.path.exists():
            logger.info(f"카탈로그 파일 없음 - 새 카탈로그 생성: {self.path}")
            return Catalog.empty()

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
            catalog = parse_catalog_document(document)
        except (OSError, ValueError) as e:
            # ValueError: JSONDecodeError, UnicodeDecodeError
            logger.warning(f"카탈로그 파일 읽기 실패 - 빈 카탈로그 사용: {e}")
            return Catalog.empty()
        except ValidationError as e:
            logger.warning(f"잘못된 카탈로그 데이터 - 빈 카탈로그 사용: {e}")
            return Catalog.empty()

        logger.debug(
            f"카탈로그 로드 완료: watchlist={len(catalog.watchlist)}, "
            f"watched={len(catalog.watched)}, lists={len(catalog.custom_lists)}"
        )
        return catalog

    def write(self, catalog: Catalog) -> Catalog:
        """lastUpdated 갱신 후 문서 전체를 원자적으로 교체"""
        stamped = catalog.model_copy(update={"last_updated": utc_now_iso()})
        payload = json.dumps(stamped.to_document(), indent=2, ensure_ascii=False)

        tmp_path = None
        try:
            self._ensure_data_directory()
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(f"카탈로그 저장 실패 ({self.path}): {e}", exc_info=True)
            raise PersistenceError(f"카탈로그 저장에 실패했습니다: {e}")
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

        logger.debug(f"카탈로그 저장 완료: {self.path}")
        return stamped
