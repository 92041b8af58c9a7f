"""
미디어(사진/영상/플라이어) 스키마
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


MediaType = Literal["photos", "videos", "flyers"]


class MediaItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    url: str = Field(..., min_length=1, max_length=2000)
    thumbnailUrl: Optional[str] = Field(None, max_length=2000)
    title: Optional[str] = Field(None, max_length=300)
    createdAt: Optional[str] = None


class MediaCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item: MediaItem
    type: MediaType
