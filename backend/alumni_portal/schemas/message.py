from pydantic import Field
from datetime import datetime

from alumni_portal.schemas.base import CamelModel


class DirectMessageCreate(CamelModel):
    receiver_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class DirectMessageResponse(CamelModel):
    id: str
    sender_id: str
    receiver_id: str
    content: str
    read: bool
    created_at: datetime


class DirectMessageEnvelope(CamelModel):
    message: str
    data: DirectMessageResponse
