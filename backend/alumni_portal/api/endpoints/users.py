from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional

from alumni_portal.core.config import settings
from alumni_portal.core.database import get_db
from alumni_portal.core.logging_config import logger
from alumni_portal.models.member import Member, MemberStatus
from alumni_portal.modules.auth.dependencies import get_current_member
from alumni_portal.schemas.member import (
    DirectoryEntry,
    MemberDetailResponse,
    MemberUpdateResponse,
    ProfileUpdate,
    SearchResult,
)
from alumni_portal.utils.search import clamp_limit, parse_year

router = APIRouter()


# ==================== Profile ====================

@router.get("/user/profile", response_model=MemberDetailResponse)
async def get_profile(member: Member = Depends(get_current_member)):
    """Current member with university"""
    return member


@router.put("/user/profile", response_model=MemberUpdateResponse)
async def update_profile(
    payload: ProfileUpdate,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Update the allow-listed profile fields of the current member"""
    changes = payload.changes()
    for field, value in changes.items():
        setattr(member, field, value)
    await db.commit()

    logger.info(f"[Profile] Updated {sorted(changes)} for member {member.id}")
    return {"message": "Profile updated", "user": member}


# ==================== Directory & search ====================

@router.get("/users/directory/{university_id}", response_model=List[DirectoryEntry])
async def directory(
    university_id: str,
    graduation_year: Optional[str] = Query(None, alias="graduationYear"),
    current_city: Optional[str] = Query(None, alias="currentCity"),
    company: Optional[str] = Query(None),
    designation: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Approved members of one university, filtered by exact field values"""
    query = select(Member).where(
        Member.university_id == university_id,
        Member.status == MemberStatus.APPROVED,
    )

    # Blank filters from form submissions are ignored
    if graduation_year and graduation_year.strip():
        query = query.where(Member.graduation_year == parse_year(graduation_year))
    if current_city:
        query = query.where(Member.current_city == current_city)
    if company:
        query = query.where(Member.company == company)
    if designation:
        query = query.where(Member.designation == designation)

    result = await db.execute(query.order_by(Member.name).limit(settings.DIRECTORY_RESULT_LIMIT))
    return result.scalars().all()


@router.get("/users/search", response_model=List[SearchResult])
async def search_users(
    name: Optional[str] = Query(None),
    email: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """Case-insensitive substring search over approved members"""
    query = select(Member).where(Member.status == MemberStatus.APPROVED)

    if name and name.strip():
        query = query.where(Member.name.icontains(name.strip(), autoescape=True))
    if email and email.strip():
        query = query.where(Member.email.icontains(email.strip(), autoescape=True))

    query = (
        query.order_by(Member.name, Member.id)
        .offset(offset)
        .limit(clamp_limit(limit, settings.SEARCH_RESULT_LIMIT))
    )
    result = await db.execute(query)
    return result.scalars().all()
