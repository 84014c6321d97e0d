from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_, and_
from typing import List

from alumni_portal.core.database import get_db
from alumni_portal.core.exceptions import ForbiddenError, NotFoundError
from alumni_portal.models.member import Member
from alumni_portal.models.message import DirectMessage
from alumni_portal.modules.auth.dependencies import get_current_member
from alumni_portal.schemas.message import (
    DirectMessageCreate,
    DirectMessageEnvelope,
    DirectMessageResponse,
)

router = APIRouter(prefix="/messages", tags=["Messages"])


@router.post("", response_model=DirectMessageEnvelope, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: DirectMessageCreate,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Send a direct message to another member"""
    receiver = await db.get(Member, payload.receiver_id)
    if not receiver:
        raise NotFoundError("User", payload.receiver_id)

    message = DirectMessage(sender_id=member.id, receiver_id=receiver.id, content=payload.content)
    db.add(message)
    await db.commit()

    return {"message": "Message sent", "data": message}


@router.get("/{user_id}", response_model=List[DirectMessageResponse])
async def get_conversation(
    user_id: str,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Both directions of the thread between the caller and ``user_id``, newest first"""
    result = await db.execute(
        select(DirectMessage)
        .where(
            or_(
                and_(DirectMessage.sender_id == member.id, DirectMessage.receiver_id == user_id),
                and_(DirectMessage.sender_id == user_id, DirectMessage.receiver_id == member.id),
            )
        )
        .order_by(DirectMessage.created_at.desc())
    )
    return result.scalars().all()


@router.put("/{message_id}/read", response_model=DirectMessageEnvelope)
async def mark_read(
    message_id: str,
    member: Member = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """Mark a received message as read"""
    message = await db.get(DirectMessage, message_id)
    if not message:
        raise NotFoundError("Message", message_id)
    if message.receiver_id != member.id:
        raise ForbiddenError("Only the receiver can mark a message as read")

    if not message.read:
        message.read = True
        await db.commit()

    return {"message": "Message marked as read", "data": message}
