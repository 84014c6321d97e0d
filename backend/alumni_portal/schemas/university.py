from pydantic import field_validator
from typing import Optional
from datetime import datetime

from alumni_portal.schemas.base import CamelModel


class UniversityRegister(CamelModel):
    # Presence is checked by the account service so the error reads
    # "All fields required" instead of a per-field validation message
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator('name', 'email')
    @classmethod
    def strip_whitespace(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if isinstance(value, str) else value


class UniversityLogin(CamelModel):
    email: str
    password: str


class UniversityProfileUpdate(CamelModel):
    """Fields a university account may change about itself"""
    logo: Optional[str] = None
    description: Optional[str] = None


class UniversityResponse(CamelModel):
    id: str
    name: str
    slug: str
    email: str
    logo: str = ""
    description: str = ""
    created_at: datetime


class UniversitySummary(CamelModel):
    id: str
    name: str
    slug: str
    logo: str = ""
    description: str = ""


class UniversityAuthResponse(CamelModel):
    message: str
    token: str
    university: UniversityResponse


class UniversityUpdateResponse(CamelModel):
    message: str
    university: UniversityResponse
