from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey

from alumni_portal.core.database import Base, generate_uuid, utcnow


class DirectMessage(Base):
    """Direct message between two members"""
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    sender_id = Column(String(36), ForeignKey("members.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("members.id"), nullable=False, index=True)
    content = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self):
        return f"<DirectMessage {self.sender_id} -> {self.receiver_id}>"
