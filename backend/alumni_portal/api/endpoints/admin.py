"""
Approval workflow endpoints.

Callers must moderate the target's university: the university account, or
an approved admin/representative member of it.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from alumni_portal.core.database import get_db
from alumni_portal.models.member import MemberStatus
from alumni_portal.modules.auth.dependencies import AuthContext, get_current_account
from alumni_portal.schemas.member import MemberResponse, MemberUpdateResponse
from alumni_portal.services import account_service

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/pending-approvals/{university_id}", response_model=List[MemberResponse])
async def pending_approvals(
    university_id: str,
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Members of the university waiting for approval"""
    return await account_service.list_pending_members(db, context, university_id)


@router.put("/approve-user/{user_id}", response_model=MemberUpdateResponse)
async def approve_user(
    user_id: str,
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    member = await account_service.set_member_status(db, context, user_id, MemberStatus.APPROVED)
    return {"message": "User approved", "user": member}


@router.put("/reject-user/{user_id}", response_model=MemberUpdateResponse)
async def reject_user(
    user_id: str,
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    member = await account_service.set_member_status(db, context, user_id, MemberStatus.REJECTED)
    return {"message": "User rejected", "user": member}
