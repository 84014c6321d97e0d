"""
Unit tests for member signup and login
"""
import pytest
from httpx import AsyncClient

from alumni_portal.core.security import decode_access_token
from alumni_portal.models import MemberStatus
from conftest import MEMBER_PASSWORD


@pytest.fixture
def signup_payload(university):
    return {
        'name': 'Meera Iyer',
        'email': 'meera.iyer@example.com',
        'password': 'pass1234',
        'phone': '9123456780',
        'university': university.id,
        'parentEmail': 'parent@example.com',
        'parentPhone': '9000000000',
        'rollNumber': 'CS-2019-044',
    }


class TestSignup:
    """Test POST /api/auth/signup"""

    @pytest.mark.asyncio
    async def test_signup_success(self, client: AsyncClient, signup_payload, university):
        response = await client.post('/api/auth/signup', json=signup_payload)

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'Signup successful. Awaiting approval.'
        user = data['user']
        assert user['status'] == 'pending'
        assert user['role'] == 'alumni'
        assert user['rollNumber'] == 'CS-2019-044'
        assert user['university']['id'] == university.id
        assert 'password' not in user
        assert 'hashedPassword' not in user
        assert decode_access_token(data['token'])['sub'] == user['id']

    @pytest.mark.asyncio
    async def test_signup_cannot_self_approve(self, client: AsyncClient, signup_payload):
        signup_payload.update({'status': 'approved', 'role': 'admin'})

        response = await client.post('/api/auth/signup', json=signup_payload)

        assert response.status_code == 201
        assert response.json()['user']['status'] == 'pending'
        assert response.json()['user']['role'] == 'alumni'

    @pytest.mark.asyncio
    async def test_signup_duplicate_email(self, client: AsyncClient, signup_payload):
        await client.post('/api/auth/signup', json=signup_payload)
        signup_payload['email'] = signup_payload['email'].upper()

        response = await client.post('/api/auth/signup', json=signup_payload)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_signup_unknown_university(self, client: AsyncClient, signup_payload):
        signup_payload['university'] = 'missing-university'

        response = await client.post('/api/auth/signup', json=signup_payload)

        assert response.status_code == 400
        assert response.json() == {'error': 'University not found'}

    @pytest.mark.asyncio
    async def test_signup_missing_fields(self, client: AsyncClient, university):
        response = await client.post('/api/auth/signup', json={'email': 'x@example.com'})

        assert response.status_code == 400
        assert 'error' in response.json()


class TestLogin:
    """Test POST /api/auth/login"""

    @pytest.mark.asyncio
    async def test_login_approved(self, client: AsyncClient, approved_member):
        response = await client.post('/api/auth/login', json={
            'email': approved_member.email,
            'password': MEMBER_PASSWORD,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['message'] == 'Login successful'
        assert data['user']['id'] == approved_member.id
        assert data['user']['university']['id'] == approved_member.university_id

    @pytest.mark.asyncio
    async def test_login_pending_allowed(self, client: AsyncClient, pending_member):
        response = await client.post('/api/auth/login', json={
            'email': pending_member.email,
            'password': MEMBER_PASSWORD,
        })

        assert response.status_code == 200
        assert response.json()['user']['status'] == 'pending'

    @pytest.mark.asyncio
    async def test_login_rejected(self, client: AsyncClient, make_member, university):
        rejected = await make_member(university, status=MemberStatus.REJECTED)

        response = await client.post('/api/auth/login', json={
            'email': rejected.email,
            'password': MEMBER_PASSWORD,
        })

        assert response.status_code == 403
        assert response.json() == {'error': 'Your account has been rejected'}

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, approved_member):
        response = await client.post('/api/auth/login', json={
            'email': approved_member.email,
            'password': 'wrong-password',
        })

        assert response.status_code == 401
        assert response.json() == {'error': 'Invalid credentials'}

    @pytest.mark.asyncio
    async def test_login_email_case_insensitive(self, client: AsyncClient, approved_member):
        response = await client.post('/api/auth/login', json={
            'email': approved_member.email.upper(),
            'password': MEMBER_PASSWORD,
        })

        assert response.status_code == 200
