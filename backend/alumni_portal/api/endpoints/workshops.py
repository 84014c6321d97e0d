"""
Workshops / events API - members schedule events for their university and
other members register to attend.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import List

from alumni_portal.core.database import get_db
from alumni_portal.core.exceptions import NotFoundError
from alumni_portal.core.logging_config import logger
from alumni_portal.models.member import Member
from alumni_portal.models.workshop import Workshop
from alumni_portal.modules.auth.dependencies import get_current_member
from alumni_portal.schemas.workshop import WorkshopCreate, WorkshopEnvelope, WorkshopResponse

router = APIRouter(prefix="/workshops", tags=["Workshops"])


@router.post("", response_model=WorkshopEnvelope, status_code=status.HTTP_201_CREATED)
async def create_workshop(
    payload: WorkshopCreate,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Schedule an event for the creator's university"""
    workshop = Workshop(
        title=payload.title,
        description=payload.description,
        date=payload.date,
        time=payload.time,
        is_online=payload.is_online,
        meeting_link=payload.meeting_link,
        location=payload.location,
        image=payload.image,
        creator=member,
        university_id=member.university_id,
        attendees=[],
    )
    db.add(workshop)
    await db.commit()

    logger.info(f"[Workshops] {member.id} scheduled {workshop.id} on {workshop.date}")
    return {"message": "Event created", "workshop": workshop}


@router.get("/{university_id}", response_model=List[WorkshopResponse])
async def list_workshops(university_id: str, db: AsyncSession = Depends(get_db)):
    """Events of a university, latest date first"""
    result = await db.execute(
        select(Workshop)
        .options(selectinload(Workshop.creator), selectinload(Workshop.attendees))
        .where(Workshop.university_id == university_id)
        .order_by(Workshop.date.desc(), Workshop.created_at.desc())
    )
    return result.scalars().all()


@router.post("/{workshop_id}/register", response_model=WorkshopEnvelope)
async def register_for_workshop(
    workshop_id: str,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Add the caller to the attendee set. Registering twice is a no-op."""
    result = await db.execute(
        select(Workshop)
        .options(selectinload(Workshop.creator), selectinload(Workshop.attendees))
        .where(Workshop.id == workshop_id)
    )
    workshop = result.scalar_one_or_none()
    if not workshop:
        raise NotFoundError("Workshop", workshop_id)

    if not any(attendee.id == member.id for attendee in workshop.attendees):
        workshop.attendees.append(member)
        await db.commit()
        logger.info(f"[Workshops] {member.id} registered for {workshop.id}")

    return {"message": "Registered for event", "workshop": workshop}
