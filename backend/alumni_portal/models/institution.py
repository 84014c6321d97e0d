from sqlalchemy import Column, String, DateTime, Text
import re

from alumni_portal.core.database import Base, generate_uuid, utcnow

_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Lowercase name with every whitespace run replaced by one underscore"""
    return _WHITESPACE_RUN.sub("_", name.lower())


class Institution(Base):
    """A university tenant. Owns its members, posts and workshops."""
    __tablename__ = "universities"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, nullable=False)
    # Derived from name at registration and never rewritten
    slug = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    logo = Column(Text, default="", nullable=False)
    description = Column(Text, default="", nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Institution {self.slug}>"
