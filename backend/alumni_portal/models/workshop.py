"""
Workshop Model - Events scheduled by members for their university
"""

from sqlalchemy import Column, String, Boolean, DateTime, Date, Text, ForeignKey, Table
from sqlalchemy.orm import relationship

from alumni_portal.core.database import Base, generate_uuid, utcnow


workshop_attendees = Table(
    "workshop_attendees",
    Base.metadata,
    Column("workshop_id", String(36), ForeignKey("workshops.id", ondelete="CASCADE"), primary_key=True),
    Column("member_id", String(36), ForeignKey("members.id", ondelete="CASCADE"), primary_key=True),
    Column("registered_at", DateTime, default=utcnow, nullable=False),
)


class Workshop(Base):
    """Workshop / event. In-person with a location, or online with a meeting link."""
    __tablename__ = "workshops"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Schedule
    date = Column(Date, nullable=False, index=True)
    time = Column(String(32), nullable=False)  # e.g. "18:30"

    # Delivery
    is_online = Column(Boolean, default=False, nullable=False)
    location = Column(String(255), default="", nullable=False)
    meeting_link = Column(Text, default="", nullable=False)
    image = Column(Text, default="", nullable=False)

    creator_id = Column(String(36), ForeignKey("members.id"), nullable=False, index=True)
    university_id = Column(String(36), ForeignKey("universities.id"), nullable=False, index=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    creator = relationship("Member")
    attendees = relationship("Member", secondary=workshop_attendees)

    def __repr__(self):
        return f"<Workshop {self.title} on {self.date}>"
