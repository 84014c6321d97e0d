from pydantic import EmailStr, Field, field_validator
from typing import Optional, Dict, Any
from datetime import datetime

from alumni_portal.models.member import MemberRole, MemberStatus
from alumni_portal.schemas.base import CamelModel
from alumni_portal.schemas.university import UniversitySummary


class MemberSignup(CamelModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    university: str = Field(..., min_length=1, description="University id")

    parent_email: str = ""
    parent_phone: str = ""
    roll_number: str = ""

    @field_validator('name', 'phone')
    @classmethod
    def strip_whitespace(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class MemberLogin(CamelModel):
    email: str
    password: str


class ProfileUpdate(CamelModel):
    """
    Allow-listed profile fields.

    Anything else in the request body (status, role, university, email,
    password) is ignored.
    """
    name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    profile_photo: Optional[str] = None
    parent_email: Optional[str] = None
    parent_phone: Optional[str] = None
    roll_number: Optional[str] = None
    course_degree: Optional[str] = None
    school: Optional[str] = None
    graduation_year: Optional[int] = Field(None, ge=1900, le=2100)
    current_city: Optional[str] = None
    hometown: Optional[str] = None
    company: Optional[str] = None
    designation: Optional[str] = None
    bio: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent; null clears text fields to ''"""
        data = self.model_dump(exclude_unset=True)
        if data.get("name") is None:
            data.pop("name", None)
        if data.get("phone") is None:
            data.pop("phone", None)
        return {
            key: ("" if value is None and key != "graduation_year" else value)
            for key, value in data.items()
        }


class MemberResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    profile_photo: str = ""
    role: MemberRole
    status: MemberStatus
    university_id: str

    parent_email: str = ""
    parent_phone: str = ""
    roll_number: str = ""
    course_degree: str = ""
    school: str = ""
    graduation_year: Optional[int] = None
    current_city: str = ""
    hometown: str = ""
    company: str = ""
    designation: str = ""
    bio: str = ""

    created_at: datetime


class MemberDetailResponse(MemberResponse):
    """Member with its university embedded"""
    university: Optional[UniversitySummary] = None


class MemberAuthResponse(CamelModel):
    message: str
    token: str
    user: MemberDetailResponse


class MemberUpdateResponse(CamelModel):
    message: str
    user: MemberResponse


class DirectoryEntry(CamelModel):
    id: str
    name: str
    email: str
    company: str = ""
    designation: str = ""
    current_city: str = ""
    graduation_year: Optional[int] = None
    profile_photo: str = ""


class SearchResult(CamelModel):
    id: str
    name: str
    email: str
    company: str = ""
    designation: str = ""
    profile_photo: str = ""
