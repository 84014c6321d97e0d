from pydantic import Field, field_validator, model_validator
from typing import Optional, List, Any
import datetime as dt

from alumni_portal.schemas.base import CamelModel
from alumni_portal.schemas.post import member_ids


class WorkshopCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    date: dt.date
    time: str = Field(..., min_length=1, max_length=32)
    is_online: bool = False
    meeting_link: str = ""
    location: str = ""
    image: str = ""

    @model_validator(mode='after')
    def require_meeting_link_when_online(self):
        if self.is_online and not self.meeting_link.strip():
            raise ValueError("meetingLink is required for online events")
        return self


class CreatorSummary(CamelModel):
    id: str
    name: str


class WorkshopResponse(CamelModel):
    id: str
    title: str
    description: str
    date: dt.date
    time: str
    is_online: bool
    location: str = ""
    meeting_link: str = ""
    image: str = ""
    creator: Optional[CreatorSummary] = None
    university_id: str
    attendees: List[str] = []
    created_at: dt.datetime

    @field_validator('attendees', mode='before')
    @classmethod
    def attendees_to_ids(cls, value: Any) -> List[str]:
        return member_ids(value)


class WorkshopEnvelope(CamelModel):
    message: str
    workshop: WorkshopResponse
