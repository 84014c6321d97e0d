from dataclasses import dataclass
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from typing import Optional

from alumni_portal.core.config import settings
from alumni_portal.core.database import get_db
from alumni_portal.core.exceptions import (
    AuthenticationError,
    ForbiddenError,
    InvalidTokenError,
    UnauthenticatedError,
)
from alumni_portal.core.logging_config import logger, set_account_id
from alumni_portal.core.security import (
    ACCOUNT_KIND_INSTITUTION,
    ACCOUNT_KIND_MEMBER,
    decode_access_token,
)
from alumni_portal.models.institution import Institution
from alumni_portal.models.member import Member

# auto_error=False so a missing header reaches us and gets our own 401 body
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthContext:
    """Identity attached to a request by the authorization gate"""
    account_id: str
    kind: str

    @property
    def is_institution(self) -> bool:
        return self.kind == ACCOUNT_KIND_INSTITUTION

    @property
    def is_member(self) -> bool:
        return self.kind == ACCOUNT_KIND_MEMBER


async def get_current_account(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthContext:
    """Verify the bearer token and tag the request logs with the account id"""
    if credentials is None or not credentials.credentials:
        # A header with some other scheme still carries a token, just not a valid one
        parts = request.headers.get("Authorization", "").split()
        if len(parts) < 2:
            raise UnauthenticatedError()
        raise InvalidTokenError()

    try:
        payload = decode_access_token(credentials.credentials)
    except AuthenticationError as e:
        # Expired and tampered tokens look the same to the client
        logger.debug(f"[Auth] Token rejected: {e.code}")
        raise InvalidTokenError()

    context = AuthContext(account_id=payload["sub"], kind=payload["kind"])
    set_account_id(context.account_id)
    return context


async def get_current_member(
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
) -> Member:
    """Get the authenticated member, with its university loaded"""
    if not context.is_member:
        raise ForbiddenError("Member account required")

    result = await db.execute(
        select(Member)
        .options(selectinload(Member.university))
        .where(Member.id == context.account_id)
    )
    member = result.scalar_one_or_none()

    if not member:
        raise AuthenticationError("Account not found")

    return member


async def get_current_institution(
    context: AuthContext = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
) -> Institution:
    """Get the authenticated university account"""
    if not context.is_institution:
        raise ForbiddenError("University account required")

    institution = await db.get(Institution, context.account_id)
    if not institution:
        raise AuthenticationError("Account not found")

    return institution


async def ensure_moderator(
    db: AsyncSession,
    context: AuthContext,
    university_id: str,
) -> None:
    """
    Require the caller to moderate ``university_id``.

    Moderators are the university account itself, or an approved member of
    that university with the admin or representative role. With
    ENFORCE_MODERATOR_SCOPE off any authenticated account passes.
    """
    if not settings.ENFORCE_MODERATOR_SCOPE:
        return

    if context.is_institution and context.account_id == university_id:
        return

    if context.is_member:
        member = await db.get(Member, context.account_id)
        if member and member.university_id == university_id and member.is_moderator:
            return

    logger.warning(
        f"[Auth] Moderator check failed for {context.kind} {context.account_id} on university {university_id}"
    )
    raise ForbiddenError("Admin access required for this university")
