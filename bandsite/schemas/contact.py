"""
문의 메시지 스키마
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from bandsite.schemas.common import _sanitize_text


MessageType = Literal["booking", "press", "general", "merch"]
MessageStatus = Literal["new", "read", "replied", "archived"]


class ContactRequest(BaseModel):
    """공개 문의 폼"""
    model_config = ConfigDict(extra="ignore")

    type: MessageType
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: Optional[str] = Field(None, max_length=200)
    message: str = Field(..., min_length=10, max_length=5000)

    @field_validator("name", "subject", "message", mode="before")
    @classmethod
    def sanitize_strings(cls, v):
        return _sanitize_text(v)


class MessageStatusUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: MessageStatus


class MarkReadRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ids: List[str] = Field(..., min_length=1)
