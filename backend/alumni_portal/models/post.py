from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Text, ForeignKey, Table
from sqlalchemy.orm import relationship
import enum

from alumni_portal.core.database import Base, generate_uuid, utcnow


class PostType(str, enum.Enum):
    ANNOUNCEMENT = "announcement"
    JOB = "job"
    REQUIREMENT = "requirement"
    RECRUITMENT = "recruitment"
    GENERAL = "general"


# Composite primary key keeps likes a set
post_likes = Table(
    "post_likes",
    Base.metadata,
    Column("post_id", String(36), ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True),
    Column("member_id", String(36), ForeignKey("members.id", ondelete="CASCADE"), primary_key=True),
)


class Post(Base):
    """Feed post. University is copied from the author at creation."""
    __tablename__ = "posts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    image = Column(Text, default="", nullable=False)
    type = Column(SQLEnum(PostType), default=PostType.GENERAL, nullable=False)

    author_id = Column(String(36), ForeignKey("members.id"), nullable=False, index=True)
    university_id = Column(String(36), ForeignKey("universities.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    author = relationship("Member")
    likes = relationship("Member", secondary=post_likes)

    def __repr__(self):
        return f"<Post {self.id} {self.title!r}>"


class Comment(Base):
    """Comment on a post"""
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    content = Column(Text, nullable=False)
    author_id = Column(String(36), ForeignKey("members.id"), nullable=False, index=True)
    post_id = Column(String(36), ForeignKey("posts.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    author = relationship("Member")

    def __repr__(self):
        return f"<Comment {self.id} on {self.post_id}>"
