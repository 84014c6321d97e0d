"""
Account lifecycle: university registration/login, member signup/login and
the member approval workflow.

Every function performs its store work on the caller's session and commits
before returning, so the result can be serialized straight away.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_
from sqlalchemy.orm import selectinload
from functools import lru_cache
from typing import List, Optional, Tuple
import secrets

from alumni_portal.core.exceptions import (
    AccountRejectedError,
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from alumni_portal.core.logging_config import logger
from alumni_portal.core.security import (
    ACCOUNT_KIND_INSTITUTION,
    ACCOUNT_KIND_MEMBER,
    create_access_token,
    get_password_hash,
    verify_password,
)
from alumni_portal.models.institution import Institution, slugify
from alumni_portal.models.member import Member, MemberStatus
from alumni_portal.modules.auth.dependencies import AuthContext, ensure_moderator
from alumni_portal.schemas.member import MemberSignup

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache(maxsize=1)
def unknown_account_digest() -> str:
    """Digest checked when no account matches, so unknown emails cost a bcrypt round too"""
    return get_password_hash(secrets.token_urlsafe(16))


def check_password(password: str, account) -> bool:
    """Verify against the account, or against a throwaway digest when there is none"""
    if account is None:
        verify_password(password, unknown_account_digest())
        return False
    return verify_password(password, account.hashed_password)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


# ==================== Universities ====================

async def register_institution(
    db: AsyncSession,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> Tuple[Institution, str]:
    """Create a university account and issue its session token"""
    if not name or not email or not password:
        raise ValidationError("All fields required")

    email = normalize_email(email)
    slug = slugify(name)

    result = await db.execute(
        select(Institution).where(
            or_(Institution.email == email, Institution.slug == slug, Institution.name == name)
        )
    )
    existing = result.scalars().first()
    if existing:
        if existing.email == email:
            reason, field = "Email already registered", "email"
        else:
            reason, field = "University name already registered", "name"
        logger.log_auth_event(event="university_register", success=False, user_email=email, reason=reason)
        raise ConflictError(reason, field=field)

    institution = Institution(
        name=name,
        slug=slug,
        email=email,
        hashed_password=get_password_hash(password),
    )
    db.add(institution)

    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        logger.log_auth_event(event="university_register", success=False, user_email=email,
                              reason="Unique constraint violation")
        raise ConflictError("University already registered")

    logger.log_auth_event(event="university_register", success=True, user_email=email, slug=slug)
    return institution, create_access_token(institution.id, ACCOUNT_KIND_INSTITUTION)


async def authenticate_institution(db: AsyncSession, email: str, password: str) -> Tuple[Institution, str]:
    """Check university credentials. Unknown email and wrong password look identical."""
    email = normalize_email(email)
    result = await db.execute(select(Institution).where(Institution.email == email))
    institution = result.scalar_one_or_none()

    if not check_password(password, institution):
        logger.log_auth_event(event="university_login", success=False, user_email=email, reason=INVALID_CREDENTIALS)
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.log_auth_event(event="university_login", success=True, user_email=email)
    return institution, create_access_token(institution.id, ACCOUNT_KIND_INSTITUTION)


# ==================== Members ====================

async def signup_member(db: AsyncSession, data: MemberSignup) -> Tuple[Member, str]:
    """
    Create a member account in the ``pending`` state and issue a token.

    The session exists before approval; only a rejected member is blocked
    at login.
    """
    email = normalize_email(data.email)

    institution = await db.get(Institution, data.university)
    if not institution:
        raise ValidationError("University not found", field="university")

    result = await db.execute(select(Member.id).where(Member.email == email))
    if result.scalar_one_or_none():
        logger.log_auth_event(event="signup", success=False, user_email=email, reason="Email already registered")
        raise ConflictError("Email already registered", field="email")

    member = Member(
        name=data.name,
        email=email,
        hashed_password=get_password_hash(data.password),
        phone=data.phone,
        university=institution,
        parent_email=data.parent_email,
        parent_phone=data.parent_phone,
        roll_number=data.roll_number,
        status=MemberStatus.PENDING,
    )
    db.add(member)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Email already registered", field="email")

    logger.log_auth_event(event="signup", success=True, user_email=email, university_id=institution.id)
    return member, create_access_token(member.id, ACCOUNT_KIND_MEMBER)


async def authenticate_member(db: AsyncSession, email: str, password: str) -> Tuple[Member, str]:
    """
    Check member credentials, then the approval status.

    Credentials are verified first so a wrong password on a rejected
    account still answers 401, not 403.
    """
    email = normalize_email(email)
    result = await db.execute(
        select(Member)
        .options(selectinload(Member.university))
        .where(Member.email == email)
    )
    member = result.scalar_one_or_none()

    if not check_password(password, member):
        logger.log_auth_event(event="login", success=False, user_email=email, reason=INVALID_CREDENTIALS)
        raise AuthenticationError(INVALID_CREDENTIALS)

    if member.status == MemberStatus.REJECTED:
        logger.log_auth_event(event="login", success=False, user_email=email, reason="Account rejected")
        raise AccountRejectedError()

    logger.log_auth_event(event="login", success=True, user_email=email, member_status=member.status.value)
    return member, create_access_token(member.id, ACCOUNT_KIND_MEMBER)


# ==================== Approval workflow ====================

async def list_pending_members(db: AsyncSession, context: AuthContext, university_id: str) -> List[Member]:
    """Members of a university still waiting for a decision"""
    await ensure_moderator(db, context, university_id)

    result = await db.execute(
        select(Member)
        .where(Member.university_id == university_id, Member.status == MemberStatus.PENDING)
        .order_by(Member.created_at)
    )
    return list(result.scalars().all())


async def set_member_status(
    db: AsyncSession,
    context: AuthContext,
    member_id: str,
    status: MemberStatus,
) -> Member:
    """
    Record an approval decision.

    The write is unconditional: deciding again overwrites the previous
    decision, so the last call wins.
    """
    member = await db.get(Member, member_id)
    if not member:
        raise NotFoundError("User", member_id)

    await ensure_moderator(db, context, member.university_id)

    previous = member.status
    member.status = status
    await db.commit()

    logger.log_auth_event(
        event=f"member_{status.value}",
        success=True,
        user_email=member.email,
        previous_status=previous.value if previous else None,
        decided_by=context.account_id,
    )
    return member
