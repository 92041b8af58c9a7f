"""
밴드 소개(about) 스키마
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    role: str = Field(..., min_length=1, max_length=100)
    bio: str = Field("", max_length=5000)
    image: str = Field("", max_length=2000)


class PhilosophyItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field("", max_length=100)
    description: str = Field("", max_length=1000)


class AboutUpdate(BaseModel):
    """
    PUT 본문.

    - action 이 있으면 멤버 단위 작업(addMember/updateMember/deleteMember)
    - 없으면 넘어온 필드만 교체 (빠진 필드는 기존 값 유지)
    """
    model_config = ConfigDict(extra="ignore")

    action: Optional[Literal["addMember", "updateMember", "deleteMember"]] = None
    member: Optional[Member] = None
    memberId: Optional[str] = None

    members: Optional[List[Member]] = None
    influences: Optional[List[str]] = None
    philosophy: Optional[List[PhilosophyItem]] = None
    bio: Optional[List[str]] = None
