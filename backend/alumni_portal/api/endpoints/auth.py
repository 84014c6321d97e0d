from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from alumni_portal.core.database import get_db
from alumni_portal.core.logging_config import set_account_id
from alumni_portal.core.rate_limiter import auth_rate_limit
from alumni_portal.schemas.member import MemberAuthResponse, MemberLogin, MemberSignup
from alumni_portal.services import account_service

router = APIRouter(prefix="/auth")


@router.post("/signup", response_model=MemberAuthResponse, status_code=status.HTTP_201_CREATED)
@auth_rate_limit()
async def signup(
    request: Request,
    payload: MemberSignup,
    db: AsyncSession = Depends(get_db)
):
    """
    Alumni signup.

    The account starts as ``pending`` whatever the request says. A token is
    issued right away; university admins approve or reject later.
    """
    member, token = await account_service.signup_member(db, payload)
    return {"message": "Signup successful. Awaiting approval.", "token": token, "user": member}


@router.post("/login", response_model=MemberAuthResponse)
@auth_rate_limit()
async def login(
    request: Request,
    credentials: MemberLogin,
    db: AsyncSession = Depends(get_db)
):
    """Alumni login. Rejected accounts get 403; pending accounts may log in."""
    member, token = await account_service.authenticate_member(db, credentials.email, credentials.password)

    set_account_id(member.id)
    return {"message": "Login successful", "token": token, "user": member}
