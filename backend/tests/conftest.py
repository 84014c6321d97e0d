"""
Alumni Portal - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Awaitable, Callable, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_alumni_portal.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['ENFORCE_MODERATOR_SCOPE'] = 'true'
os.environ['LOG_LEVEL'] = 'WARNING'

from alumni_portal.main import app
from alumni_portal.core.database import Base, get_db
from alumni_portal.core.security import (
    ACCOUNT_KIND_INSTITUTION,
    ACCOUNT_KIND_MEMBER,
    create_access_token,
    get_password_hash,
)
from alumni_portal.models import Institution, Member, MemberRole, MemberStatus, slugify

fake = Faker()

UNIVERSITY_PASSWORD = 'universitypass123'
MEMBER_PASSWORD = 'memberpass123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_alumni_portal.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


def bearer(account_id: str, kind: str = ACCOUNT_KIND_MEMBER) -> Dict[str, str]:
    """Authorization header for an account"""
    return {'Authorization': f'Bearer {create_access_token(account_id, kind)}'}


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_university(db_session: AsyncSession) -> Callable[..., Awaitable[Institution]]:
    """Factory for university accounts"""
    async def _make(name: str = None, email: str = None, password: str = UNIVERSITY_PASSWORD) -> Institution:
        name = name or f"{fake.unique.city()} University"
        institution = Institution(
            name=name,
            slug=slugify(name),
            email=(email or fake.unique.email()).lower(),
            hashed_password=get_password_hash(password),
        )
        db_session.add(institution)
        await db_session.commit()
        return institution

    return _make


@pytest.fixture
def make_member(db_session: AsyncSession) -> Callable[..., Awaitable[Member]]:
    """Factory for member accounts"""
    async def _make(
        university: Institution,
        status: MemberStatus = MemberStatus.APPROVED,
        role: MemberRole = MemberRole.ALUMNI,
        password: str = MEMBER_PASSWORD,
        **fields,
    ) -> Member:
        member = Member(
            name=fields.pop('name', fake.name()),
            email=fields.pop('email', fake.unique.email()).lower(),
            hashed_password=get_password_hash(password),
            phone=fields.pop('phone', fake.msisdn()),
            university_id=university.id,
            role=role,
            status=status,
            **fields,
        )
        db_session.add(member)
        await db_session.commit()
        return member

    return _make


@pytest.fixture
async def university(make_university) -> Institution:
    """A registered university"""
    return await make_university(name="Northfield State University")


@pytest.fixture
async def other_university(make_university) -> Institution:
    return await make_university(name="Lakeside Institute of Technology")


@pytest.fixture
async def pending_member(make_member, university) -> Member:
    return await make_member(university, status=MemberStatus.PENDING)


@pytest.fixture
async def approved_member(make_member, university) -> Member:
    return await make_member(university, status=MemberStatus.APPROVED)


@pytest.fixture
async def admin_member(make_member, university) -> Member:
    return await make_member(university, status=MemberStatus.APPROVED, role=MemberRole.ADMIN)


@pytest.fixture
def university_headers(university: Institution) -> Dict[str, str]:
    return bearer(university.id, ACCOUNT_KIND_INSTITUTION)


@pytest.fixture
def member_headers(approved_member: Member) -> Dict[str, str]:
    return bearer(approved_member.id)


@pytest.fixture
def admin_headers(admin_member: Member) -> Dict[str, str]:
    return bearer(admin_member.id)
