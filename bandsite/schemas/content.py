"""
범용 콘텐츠(key/value) 요청 스키마
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ContentPut(BaseModel):
    """전체 교체. value 는 필수 (null 도 하나의 값으로 허용)"""
    model_config = ConfigDict(extra="ignore")

    value: Any = Field(...)


class ContentAppend(BaseModel):
    model_config = ConfigDict(extra="ignore")

    field: str = Field(..., min_length=1, max_length=100)
    item: Any = Field(...)
    prepend: bool = False


class VisibilityPatch(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = Field(..., min_length=1, max_length=200)
    value: bool
