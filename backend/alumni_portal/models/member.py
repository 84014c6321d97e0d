from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship
import enum

from alumni_portal.core.database import Base, generate_uuid, utcnow


class MemberRole(str, enum.Enum):
    """Member roles"""
    ALUMNI = "alumni"
    ADMIN = "admin"
    REPRESENTATIVE = "representative"


class MemberStatus(str, enum.Enum):
    """Approval lifecycle: pending -> approved | rejected"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


MODERATOR_ROLES = (MemberRole.ADMIN, MemberRole.REPRESENTATIVE)


class Member(Base):
    """Alumni / admin / representative account scoped to one university"""
    __tablename__ = "members"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    phone = Column(String(32), nullable=False)
    profile_photo = Column(Text, default="", nullable=False)

    role = Column(SQLEnum(MemberRole), default=MemberRole.ALUMNI, nullable=False)
    status = Column(SQLEnum(MemberStatus), default=MemberStatus.PENDING, nullable=False, index=True)

    university_id = Column(String(36), ForeignKey("universities.id"), nullable=False, index=True)

    # Contact details collected at signup
    parent_email = Column(String(255), default="", nullable=False)
    parent_phone = Column(String(32), default="", nullable=False)
    roll_number = Column(String(64), default="", nullable=False)

    # Academic and professional profile
    course_degree = Column(String(255), default="", nullable=False)
    school = Column(String(255), default="", nullable=False)
    graduation_year = Column(Integer, nullable=True, index=True)
    current_city = Column(String(255), default="", nullable=False)
    hometown = Column(String(255), default="", nullable=False)
    company = Column(String(255), default="", nullable=False)
    designation = Column(String(255), default="", nullable=False)
    bio = Column(Text, default="", nullable=False)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    university = relationship("Institution")

    @property
    def is_moderator(self) -> bool:
        return self.role in MODERATOR_ROLES and self.status == MemberStatus.APPROVED

    def __repr__(self):
        return f"<Member {self.email}>"
