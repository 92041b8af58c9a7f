"""
방문/재생 기록 스키마
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PageViewEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = Field(..., min_length=1)
    referrer: Optional[str] = None
    sessionId: Optional[str] = None


class PlayEvent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    trackId: str = Field(..., min_length=1)
    trackName: str = Field(..., min_length=1)
    releaseId: Optional[str] = None
    releaseName: Optional[str] = None
    sessionId: Optional[str] = None
