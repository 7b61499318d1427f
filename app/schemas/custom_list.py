# app/schemas/custom_list.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.schemas.catalog_item import CatalogItem, dedupe_by_key, utc_now_iso


class CustomList(BaseModel):
    """사용자 정의 리스트"""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="리스트 ID")
    name: str = Field(min_length=1, description="리스트 이름")
    description: Optional[str] = Field(default=None, description="설명")
    items: List[CatalogItem] = Field(default_factory=list, description="리스트 항목")
    created_at: str = Field(default_factory=utc_now_iso, alias="createdAt", description="생성일시")
    updated_at: str = Field(default_factory=utc_now_iso, alias="updatedAt", description="수정일시")

    @field_validator("items")
    @classmethod
    def unique_items(cls, items: List[CatalogItem]) -> List[CatalogItem]:
        return dedupe_by_key(items, keep="first")

    def contains(self, item_id: int, media_type) -> bool:
        return any(item.matches(item_id, media_type) for item in self.items)


class CustomListCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100, description="리스트 이름")
    description: Optional[str] = Field(default=None, max_length=500, description="설명")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("리스트 이름을 입력해주세요")
        return value


class CustomListUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100, description="리스트 이름")
    description: Optional[str] = Field(default=None, max_length=500, description="설명")


class CustomListCreated(BaseModel):
    """리스트 생성 응답"""

    id: str = Field(description="생성된 리스트 ID")
    list: CustomList = Field(description="생성된 리스트")
