"""
음악(발매작) 스키마
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bandsite.schemas.common import _sanitize_text, check_url


class Track(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=300)
    duration: str = Field("", max_length=20)
    audioUrl: Optional[str] = Field(None, max_length=2000)
    lyrics: Optional[str] = Field(None, max_length=20000)

    @field_validator("title", mode="before")
    @classmethod
    def sanitize_title(cls, v):
        return _sanitize_text(v)


class StreamingLink(BaseModel):
    model_config = ConfigDict(extra="ignore")

    platform: str = Field(..., max_length=50)
    url: str = Field(..., max_length=2000)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        return check_url(v)


class StreamingPlatform(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., max_length=50)
    url: str = Field("", max_length=2000)
    color: str = Field("", max_length=30)


class ReleaseIn(BaseModel):
    """발매작 생성/수정 본문"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=300)
    type: Literal["album", "ep", "single"]
    releaseDate: str = ""
    coverArt: str = ""
    tracks: List[Track] = Field(default_factory=list)
    streamingLinks: List[StreamingLink] = Field(default_factory=list)
    slug: Optional[str] = Field(None, max_length=200, pattern=r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
    visibility: Literal["public", "unlisted", "private"] = "public"
    password: Optional[str] = Field(None, max_length=200)

    @field_validator("title", mode="before")
    @classmethod
    def sanitize_title(cls, v):
        return _sanitize_text(v)


class StreamingPlatformsUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    streamingPlatforms: List[StreamingPlatform]
