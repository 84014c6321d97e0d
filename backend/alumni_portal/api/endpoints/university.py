from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from alumni_portal.core.database import get_db
from alumni_portal.core.exceptions import NotFoundError
from alumni_portal.core.logging_config import logger
from alumni_portal.core.rate_limiter import auth_rate_limit
from alumni_portal.models.institution import Institution
from alumni_portal.modules.auth.dependencies import get_current_institution
from alumni_portal.schemas.university import (
    UniversityAuthResponse,
    UniversityLogin,
    UniversityProfileUpdate,
    UniversityRegister,
    UniversityResponse,
    UniversitySummary,
    UniversityUpdateResponse,
)
from alumni_portal.services import account_service

router = APIRouter()


@router.post("/university/register", response_model=UniversityAuthResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def register_university(
    request: Request,
    payload: UniversityRegister,
    db: AsyncSession = Depends(get_db)
):
    """Register a university. The slug is derived from the name and never changes."""
    institution, token = await account_service.register_institution(
        db, payload.name, payload.email, payload.password
    )
    return {
        "message": "University registered successfully",
        "token": token,
        "university": institution,
    }


@router.post("/university/login", response_model=UniversityAuthResponse)
@auth_rate_limit()
async def login_university(
    request: Request,
    credentials: UniversityLogin,
    db: AsyncSession = Depends(get_db)
):
    """Login as a university account"""
    institution, token = await account_service.authenticate_institution(
        db, credentials.email, credentials.password
    )
    return {"message": "Login successful", "token": token, "university": institution}


@router.put("/university/profile", response_model=UniversityUpdateResponse)
async def update_university_profile(
    payload: UniversityProfileUpdate,
    institution: Institution = Depends(get_current_institution),
    db: AsyncSession = Depends(get_db)
):
    """Update logo/description of the calling university"""
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(institution, field, value or "")
    await db.commit()

    logger.info(f"[University] Profile updated for {institution.slug}")
    return {"message": "University updated", "university": institution}


@router.get("/universities", response_model=List[UniversitySummary])
async def list_universities(db: AsyncSession = Depends(get_db)):
    """All registered universities, alphabetically"""
    result = await db.execute(select(Institution).order_by(Institution.name))
    return result.scalars().all()


@router.get("/university/{slug}", response_model=UniversitySummary)
async def get_university(slug: str, db: AsyncSession = Depends(get_db)):
    """Look up a university by its slug"""
    result = await db.execute(select(Institution).where(Institution.slug == slug.lower()))
    institution = result.scalar_one_or_none()
    if not institution:
        raise NotFoundError("University", slug)
    return institution
