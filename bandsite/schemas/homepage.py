"""
홈페이지 구성 스키마 (섹션 단위 교체)
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class HomepageHero(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field("", max_length=200)
    tagline: List[str] = Field(default_factory=list)
    marqueeText: str = Field("", max_length=1000)


class FeaturedShow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    showId: Optional[str] = None


class FeaturedRelease(BaseModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool = True
    releaseId: Optional[str] = None
    placeholderText: str = Field("", max_length=1000)


class HomepageUpdate(BaseModel):
    """넘어온 섹션만 교체"""
    model_config = ConfigDict(extra="ignore")

    hero: Optional[HomepageHero] = None
    featuredShow: Optional[FeaturedShow] = None
    featuredRelease: Optional[FeaturedRelease] = None
