from pydantic import Field, field_validator
from typing import Optional, List, Any
from datetime import datetime

from alumni_portal.models.post import PostType
from alumni_portal.schemas.base import CamelModel


def member_ids(value: Any) -> List[str]:
    """Collapse a collection of Member rows (or ids) to ids"""
    return [getattr(item, "id", item) for item in (value or [])]


class AuthorSummary(CamelModel):
    id: str
    name: str
    profile_photo: str = ""


class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: Optional[PostType] = None
    image: str = ""


class PostUpdate(CamelModel):
    """Allow-listed post fields; author and university never change"""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[str] = Field(None, min_length=1)
    type: Optional[PostType] = None
    image: Optional[str] = None


class PostResponse(CamelModel):
    id: str
    title: str
    content: str
    image: str = ""
    type: PostType
    author: Optional[AuthorSummary] = None
    university_id: str
    likes: List[str] = []
    created_at: datetime
    updated_at: datetime

    @field_validator('likes', mode='before')
    @classmethod
    def likes_to_ids(cls, value: Any) -> List[str]:
        return member_ids(value)


class PostEnvelope(CamelModel):
    message: str
    post: PostResponse


class LikeResponse(CamelModel):
    message: str
    liked: bool
    likes_count: int


class CommentCreate(CamelModel):
    post_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)


class CommentResponse(CamelModel):
    id: str
    content: str
    author: Optional[AuthorSummary] = None
    post_id: str
    created_at: datetime


class CommentEnvelope(CamelModel):
    message: str
    comment: CommentResponse
