"""
공연 스키마
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bandsite.schemas.common import check_url


ShowType = Literal["upcoming", "past"]


class Venue(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=200)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)


class Band(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=200)
    isHeadliner: bool = False


class Show(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    date: str = Field(..., min_length=1)
    venue: Venue
    doorsTime: Optional[str] = None
    ticketUrl: Optional[str] = Field(None, max_length=2000)
    bands: Optional[List[Band]] = None

    @field_validator("ticketUrl")
    @classmethod
    def validate_ticket_url(cls, v):
        if v in (None, ""):
            return None
        return check_url(v)


class ShowWrite(BaseModel):
    """POST/PUT 본문: {show, type}"""
    model_config = ConfigDict(extra="ignore")

    show: Show
    type: ShowType
