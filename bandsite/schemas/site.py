"""
소셜 링크 / 사이트 메타 설정 스키마
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bandsite.schemas.common import _sanitize_text


class Socials(BaseModel):
    model_config = ConfigDict(extra="ignore")

    instagram: str = Field("", max_length=2000)
    facebook: str = Field("", max_length=2000)
    youtube: str = Field("", max_length=2000)
    spotify: str = Field("", max_length=2000)
    tiktok: str = Field("", max_length=2000)
    twitter: str = Field("", max_length=2000)
    bandcamp: str = Field("", max_length=2000)

    @field_validator("*", mode="before")
    @classmethod
    def sanitize(cls, v):
        return _sanitize_text(v) if v is not None else ""


class SiteConfigUpdate(BaseModel):
    """알려진 키(ogImage) 외의 값도 보존한다."""
    model_config = ConfigDict(extra="allow")

    ogImage: str = Field("", max_length=2000)
