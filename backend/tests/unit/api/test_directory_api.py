"""
Unit tests for the alumni directory and search
"""
import pytest
from httpx import AsyncClient

from alumni_portal.core.security import get_password_hash
from alumni_portal.models import Member, MemberStatus


@pytest.fixture
async def alumni(make_member, university):
    """A small directory: three approved members and one pending"""
    return {
        'asha': await make_member(university, name='Asha Menon', email='asha@alumni.org',
                                  graduation_year=2015, current_city='Pune', company='Acme'),
        'bala': await make_member(university, name='Bala Krishnan', email='bala@alumni.org',
                                  graduation_year=2018, current_city='Chennai', company='Globex'),
        'chris': await make_member(university, name='Chris 100% Dsouza', email='chris_d@alumni.org',
                                   graduation_year=2015, current_city='Pune', company='Globex'),
        'dev': await make_member(university, name='Dev Pending', email='dev@alumni.org',
                                 status=MemberStatus.PENDING, graduation_year=2015),
    }


class TestDirectory:
    """Test GET /api/users/directory/{universityId}"""

    @pytest.mark.asyncio
    async def test_approved_only_sorted(self, client: AsyncClient, university, alumni):
        response = await client.get(f'/api/users/directory/{university.id}')

        assert response.status_code == 200
        names = [m['name'] for m in response.json()]
        assert names == ['Asha Menon', 'Bala Krishnan', 'Chris 100% Dsouza']

    @pytest.mark.asyncio
    async def test_filters_combine(self, client: AsyncClient, university, alumni):
        response = await client.get(
            f'/api/users/directory/{university.id}',
            params={'graduationYear': 2015, 'currentCity': 'Pune', 'company': 'Globex'},
        )

        assert [m['id'] for m in response.json()] == [alumni['chris'].id]

    @pytest.mark.asyncio
    async def test_other_university_empty(self, client: AsyncClient, other_university, alumni):
        response = await client.get(f'/api/users/directory/{other_university.id}')

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_blank_filters_ignored(self, client: AsyncClient, university, alumni):
        response = await client.get(
            f'/api/users/directory/{university.id}?graduationYear=&currentCity=&company=&designation='
        )

        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_non_numeric_year(self, client: AsyncClient, university, alumni):
        response = await client.get(f'/api/users/directory/{university.id}', params={'graduationYear': 'abc'})

        assert response.status_code == 400
        assert response.json() == {'error': 'graduationYear: must be an integer'}

    @pytest.mark.asyncio
    async def test_capped_at_fifty(self, client: AsyncClient, db_session, university):
        digest = get_password_hash('pass1234')
        db_session.add_all([
            Member(name=f'Alumnus {i:02d}', email=f'alumnus{i}@class2020.org', hashed_password=digest,
                   phone='9000000000', university_id=university.id, status=MemberStatus.APPROVED,
                   graduation_year=2020)
            for i in range(55)
        ])
        await db_session.commit()

        response = await client.get(f'/api/users/directory/{university.id}', params={'graduationYear': 2020})

        assert response.status_code == 200
        assert len(response.json()) == 50


class TestSearch:
    """Test GET /api/users/search"""

    @pytest.mark.asyncio
    async def test_name_case_insensitive(self, client: AsyncClient, alumni):
        response = await client.get('/api/users/search', params={'name': 'KRISH'})

        assert [m['id'] for m in response.json()] == [alumni['bala'].id]

    @pytest.mark.asyncio
    async def test_pending_excluded(self, client: AsyncClient, alumni):
        response = await client.get('/api/users/search', params={'name': 'dev'})

        assert response.json() == []

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, client: AsyncClient, alumni):
        percent = await client.get('/api/users/search', params={'name': '100%'})
        underscore = await client.get('/api/users/search', params={'email': 's_'})
        lone_percent = await client.get('/api/users/search', params={'name': '%'})

        assert [m['id'] for m in percent.json()] == [alumni['chris'].id]
        assert [m['id'] for m in underscore.json()] == [alumni['chris'].id]
        assert [m['id'] for m in lone_percent.json()] == [alumni['chris'].id]

    @pytest.mark.asyncio
    async def test_limit_and_offset(self, client: AsyncClient, alumni):
        response = await client.get('/api/users/search', params={'email': 'alumni.org', 'limit': 1, 'offset': 1})

        assert [m['id'] for m in response.json()] == [alumni['bala'].id]

    @pytest.mark.asyncio
    async def test_no_terms_lists_approved(self, client: AsyncClient, alumni):
        response = await client.get('/api/users/search')

        assert len(response.json()) == 3
