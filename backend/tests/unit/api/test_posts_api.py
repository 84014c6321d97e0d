"""
Unit tests for the feed: posts, likes and comments
"""
import asyncio
import pytest
from httpx import AsyncClient

from alumni_portal.core.security import ACCOUNT_KIND_INSTITUTION
from alumni_portal.models import MemberRole, MemberStatus
from conftest import bearer


async def create_post(client: AsyncClient, headers, **fields):
    payload = {'title': 'Hiring interns', 'content': 'Summer internship openings', 'type': 'job'}
    payload.update(fields)
    response = await client.post('/api/posts', headers=headers, json=payload)
    assert response.status_code == 201
    return response.json()['post']


class TestCreatePost:
    """Test POST /api/posts"""

    @pytest.mark.asyncio
    async def test_create_post(self, client: AsyncClient, approved_member, member_headers):
        response = await client.post('/api/posts', headers=member_headers, json={
            'title': 'Reunion 2025',
            'content': 'Save the date',
            'type': 'announcement',
        })

        assert response.status_code == 201
        data = response.json()
        assert data['message'] == 'Post created'
        post = data['post']
        assert post['type'] == 'announcement'
        assert post['universityId'] == approved_member.university_id
        assert post['author']['id'] == approved_member.id
        assert post['likes'] == []

    @pytest.mark.asyncio
    async def test_type_defaults_to_general(self, client: AsyncClient, member_headers):
        post = await create_post(client, member_headers, type=None)

        assert post['type'] == 'general'

    @pytest.mark.asyncio
    async def test_invalid_type(self, client: AsyncClient, member_headers):
        response = await client.post('/api/posts', headers=member_headers, json={
            'title': 'x', 'content': 'y', 'type': 'spam',
        })

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post('/api/posts', json={'title': 'x', 'content': 'y'})

        assert response.status_code == 401


class TestListPosts:
    """Test GET /api/posts/{universityId}"""

    @pytest.mark.asyncio
    async def test_newest_first(self, client: AsyncClient, university, member_headers):
        first = await create_post(client, member_headers, title='First')
        await asyncio.sleep(0.01)
        second = await create_post(client, member_headers, title='Second')

        response = await client.get(f'/api/posts/{university.id}')

        assert response.status_code == 200
        ids = [p['id'] for p in response.json()]
        assert ids == [second['id'], first['id']]
        assert response.json()[0]['author']['name']

    @pytest.mark.asyncio
    async def test_scoped_to_university(self, client: AsyncClient, other_university, member_headers):
        await create_post(client, member_headers)

        response = await client.get(f'/api/posts/{other_university.id}')

        assert response.json() == []


class TestUpdatePost:
    """Test PUT /api/posts/{postId}"""

    @pytest.mark.asyncio
    async def test_author_updates(self, client: AsyncClient, member_headers):
        post = await create_post(client, member_headers)

        response = await client.put(f"/api/posts/{post['id']}", headers=member_headers, json={
            'title': 'Updated title',
        })

        assert response.status_code == 200
        data = response.json()
        assert data['message'] == 'Post updated'
        assert data['post']['title'] == 'Updated title'
        assert data['post']['content'] == post['content']

    @pytest.mark.asyncio
    async def test_other_alumni_forbidden(self, client: AsyncClient, make_member, university, member_headers):
        post = await create_post(client, member_headers)
        stranger = await make_member(university)

        response = await client.put(f"/api/posts/{post['id']}", headers=bearer(stranger.id), json={
            'title': 'Hijacked',
        })

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_moderator_updates(self, client: AsyncClient, member_headers, admin_headers):
        post = await create_post(client, member_headers)

        response = await client.put(f"/api/posts/{post['id']}", headers=admin_headers, json={
            'content': 'Moderated',
        })

        assert response.status_code == 200
        assert response.json()['post']['content'] == 'Moderated'

    @pytest.mark.asyncio
    async def test_moderator_of_other_university_forbidden(
        self, client: AsyncClient, make_member, other_university, member_headers
    ):
        post = await create_post(client, member_headers)
        outsider = await make_member(other_university, role=MemberRole.ADMIN)

        response = await client.put(f"/api/posts/{post['id']}", headers=bearer(outsider.id), json={
            'content': 'Nope',
        })

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_post(self, client: AsyncClient, member_headers):
        response = await client.put('/api/posts/missing', headers=member_headers, json={'title': 'x'})

        assert response.status_code == 404
        assert response.json() == {'error': 'Post not found'}


class TestDeletePost:
    """Test DELETE /api/posts/{postId}"""

    @pytest.mark.asyncio
    async def test_author_deletes_with_comments(self, client: AsyncClient, university, member_headers):
        post = await create_post(client, member_headers)
        await client.post('/api/comments', headers=member_headers, json={'postId': post['id'], 'content': 'Nice'})
        await client.post(f"/api/posts/{post['id']}/like", headers=member_headers)

        response = await client.delete(f"/api/posts/{post['id']}", headers=member_headers)

        assert response.status_code == 200
        assert response.json() == {'message': 'Post deleted'}

        feed = await client.get(f'/api/posts/{university.id}')
        assert feed.json() == []
        comments = await client.get(f"/api/comments/{post['id']}")
        assert comments.json() == []

    @pytest.mark.asyncio
    async def test_university_account_deletes(self, client: AsyncClient, university, member_headers):
        post = await create_post(client, member_headers)

        response = await client.delete(
            f"/api/posts/{post['id']}", headers=bearer(university.id, ACCOUNT_KIND_INSTITUTION)
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_pending_admin_cannot_delete(self, client: AsyncClient, make_member, university, member_headers):
        post = await create_post(client, member_headers)
        pending_admin = await make_member(university, role=MemberRole.ADMIN, status=MemberStatus.PENDING)

        response = await client.delete(f"/api/posts/{post['id']}", headers=bearer(pending_admin.id))

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_post(self, client: AsyncClient, member_headers):
        response = await client.delete('/api/posts/missing', headers=member_headers)

        assert response.status_code == 404


class TestLikes:
    """Test POST /api/posts/{postId}/like"""

    @pytest.mark.asyncio
    async def test_like_toggles(self, client: AsyncClient, university, approved_member, member_headers):
        post = await create_post(client, member_headers)

        liked = await client.post(f"/api/posts/{post['id']}/like", headers=member_headers)
        assert liked.status_code == 200
        assert liked.json() == {'message': 'Post liked', 'liked': True, 'likesCount': 1}

        feed = await client.get(f'/api/posts/{university.id}')
        assert feed.json()[0]['likes'] == [approved_member.id]

        unliked = await client.post(f"/api/posts/{post['id']}/like", headers=member_headers)
        assert unliked.json() == {'message': 'Like removed', 'liked': False, 'likesCount': 0}

    @pytest.mark.asyncio
    async def test_like_unknown_post(self, client: AsyncClient, member_headers):
        response = await client.post('/api/posts/missing/like', headers=member_headers)

        assert response.status_code == 404


class TestComments:
    """Test POST /api/comments and GET /api/comments/{postId}"""

    @pytest.mark.asyncio
    async def test_add_and_list(self, client: AsyncClient, approved_member, member_headers):
        post = await create_post(client, member_headers)

        first = await client.post('/api/comments', headers=member_headers, json={
            'postId': post['id'], 'content': 'Congrats!',
        })
        await asyncio.sleep(0.01)
        await client.post('/api/comments', headers=member_headers, json={
            'postId': post['id'], 'content': 'Applied',
        })

        assert first.status_code == 201
        assert first.json()['message'] == 'Comment added'
        assert first.json()['comment']['author']['id'] == approved_member.id

        response = await client.get(f"/api/comments/{post['id']}")
        contents = [c['content'] for c in response.json()]
        assert contents == ['Applied', 'Congrats!']

    @pytest.mark.asyncio
    async def test_comment_on_unknown_post(self, client: AsyncClient, member_headers):
        response = await client.post('/api/comments', headers=member_headers, json={
            'postId': 'missing', 'content': 'Hello?',
        })

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_post_has_no_comments(self, client: AsyncClient):
        response = await client.get('/api/comments/missing')

        assert response.status_code == 200
        assert response.json() == []
