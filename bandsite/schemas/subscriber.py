"""
메일링 리스트 구독 스키마
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SubscriberPreferences(BaseModel):
    model_config = ConfigDict(extra="ignore")

    showAlerts: Optional[bool] = None
    newReleases: Optional[bool] = None
    merchDrops: Optional[bool] = None
    newsletter: Optional[bool] = None


class SubscribeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr
    name: Optional[str] = Field(None, max_length=100)
    source: Optional[Literal["website", "show", "merch", "other"]] = None
    preferences: Optional[SubscriberPreferences] = None


class UnsubscribeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: EmailStr
