"""
Integration tests for resource browsing, search and moderation
"""
import pytest
from httpx import AsyncClient

from syllabus_hub.models import ResourceType, UserRole


@pytest.fixture
async def searchable_resources(catalog, make_resource):
    """Two approved matching lectures plus three rows the search must skip"""
    best = await make_resource(catalog.cs102, title='Data Structures Full Course', quality_score=60)
    other = await make_resource(catalog.cs102, title='Linked list lecture',
                                description='Part of the data structures series', quality_score=90)
    await make_resource(catalog.cs102, title='Data Structures draft', is_approved=False)
    await make_resource(catalog.cs102, title='Data Structures cheat sheet', type=ResourceType.NOTES)
    await make_resource(catalog.cs101, title='Pointers in C')
    return best, other


class TestResourceSearch:

    async def test_search_filters_and_ranks(self, client: AsyncClient, searchable_resources):
        best, other = searchable_resources

        response = await client.get(
            '/api/v1/resources',
            params={'q': 'data structures', 'type': 'lecture', 'limit': 2},
        )

        assert response.status_code == 200
        data = response.json()
        assert data['pagination'] == {'page': 1, 'limit': 2, 'total': 2, 'pages': 1}
        assert [r['id'] for r in data['resources']] == [best.id, other.id]
        assert all(r['is_approved'] for r in data['resources'])
        assert all(r['type'] == 'lecture' for r in data['resources'])

    async def test_search_endpoint_echoes_query(self, client: AsyncClient, searchable_resources):
        response = await client.get('/api/v1/search/resources', params={'q': '  data structures '})

        assert response.status_code == 200
        data = response.json()
        assert data['query'] == 'data structures'
        assert data['pagination']['total'] == 3

    async def test_search_requires_query(self, client: AsyncClient):
        response = await client.get('/api/v1/search/resources', params={'q': '   '})

        assert response.status_code == 400
        assert response.json()['detail'] == 'Search query is required'

    async def test_global_search_groups_results(self, client: AsyncClient, searchable_resources):
        response = await client.get('/api/v1/search/global', params={'q': 'data'})

        assert response.status_code == 200
        data = response.json()
        assert data['query'] == 'data'
        assert set(data['results']) == {'resources', 'subjects', 'roadmaps'}
        assert [s['code'] for s in data['results']['subjects']] == ['CS102']

    async def test_non_ascii_tag_is_searchable(self, client: AsyncClient, catalog, make_resource):
        tagged = await make_resource(catalog.cs101, title='Campus study spots', tags=['café'])

        response = await client.get('/api/v1/resources', params={'q': 'café'})
        escaped = await client.get('/api/v1/resources', params={'q': 'u00e9'})

        assert response.status_code == 200
        assert [r['id'] for r in response.json()['resources']] == [tagged.id]
        assert response.json()['pagination']['total'] == 1
        assert escaped.json()['pagination']['total'] == 0

    async def test_accented_text_matches_any_case(self, client: AsyncClient, catalog, make_resource):
        titled = await make_resource(catalog.cs101, title='Élan of recursion')
        tagged = await make_resource(catalog.cs101, title='Study spots', tags=['CAFÉ'])

        by_title = await client.get('/api/v1/resources', params={'q': 'élan'})
        by_tag = await client.get('/api/v1/resources', params={'q': 'café'})

        assert [r['id'] for r in by_title.json()['resources']] == [titled.id]
        assert [r['id'] for r in by_tag.json()['resources']] == [tagged.id]

    async def test_stop_words_only_match_nothing(self, client: AsyncClient, searchable_resources):
        response = await client.get('/api/v1/resources', params={'q': 'the and of'})

        assert response.status_code == 200
        assert response.json()['pagination']['total'] == 0


class TestPaginationInput:

    @pytest.mark.parametrize('params', [
        {'page': 0},
        {'limit': -5},
        {'limit': 'abc'},
    ])
    async def test_invalid_paging_is_rejected(self, client: AsyncClient, params):
        response = await client.get('/api/v1/resources', params=params)

        assert response.status_code == 400
        assert response.json()['success'] is False

    async def test_oversized_limit_is_clamped(self, client: AsyncClient):
        response = await client.get('/api/v1/resources', params={'limit': 500})

        assert response.status_code == 200
        assert response.json()['pagination']['limit'] == 100

    async def test_full_last_page_when_total_divides_evenly(
        self, client: AsyncClient, catalog, make_resource
    ):
        for _ in range(4):
            await make_resource(catalog.cs101)

        response = await client.get('/api/v1/resources', params={'page': 2, 'limit': 2})

        assert response.status_code == 200
        data = response.json()
        assert data['pagination'] == {'page': 2, 'limit': 2, 'total': 4, 'pages': 2}
        assert len(data['resources']) == 2

    async def test_page_past_end_is_empty(self, client: AsyncClient, catalog, make_resource):
        await make_resource(catalog.cs101)

        response = await client.get('/api/v1/resources', params={'page': 5})

        assert response.status_code == 200
        data = response.json()
        assert data['resources'] == []
        assert data['pagination']['total'] == 1
        assert data['pagination']['pages'] == 1


class TestResourceVisibility:

    async def test_pending_resource_hidden_from_anonymous(
        self, client: AsyncClient, catalog, make_resource, student_user
    ):
        pending = await make_resource(catalog.cs101, is_approved=False, added_by_id=student_user.id)

        response = await client.get(f'/api/v1/resources/{pending.id}')

        assert response.status_code == 404

    async def test_pending_resource_visible_to_owner_and_moderator(
        self, client: AsyncClient, catalog, make_resource,
        student_user, student_headers, moderator_headers, other_student_headers
    ):
        pending = await make_resource(catalog.cs101, is_approved=False, added_by_id=student_user.id)

        owner = await client.get(f'/api/v1/resources/{pending.id}', headers=student_headers)
        moderator = await client.get(f'/api/v1/resources/{pending.id}', headers=moderator_headers)
        stranger = await client.get(f'/api/v1/resources/{pending.id}', headers=other_student_headers)

        assert owner.status_code == 200
        assert moderator.status_code == 200
        assert stranger.status_code == 404

    async def test_unknown_resource_returns_404(self, client: AsyncClient):
        response = await client.get('/api/v1/resources/00000000-0000-0000-0000-000000000000')

        assert response.status_code == 404
        assert response.json()['success'] is False


class TestResourceWrites:

    def _payload(self, subject_id: str, **overrides) -> dict:
        payload = {
            'type': 'notes',
            'title': 'Handwritten unit 1 notes',
            'url': 'https://example.com/notes/unit-1',
            'subject_id': subject_id,
            'tags': ['Unit 1', 'unit 1', ' notes '],
            'is_approved': True,
        }
        payload.update(overrides)
        return payload

    async def test_student_submission_stays_pending(
        self, client: AsyncClient, catalog, student_user, student_headers
    ):
        response = await client.post(
            '/api/v1/resources', json=self._payload(catalog.cs101.id), headers=student_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data['is_approved'] is False
        assert data['added_by']['id'] == student_user.id
        assert data['average_rating'] == 0
        assert data['total_ratings'] == 0

    async def test_moderator_can_publish_directly(
        self, client: AsyncClient, catalog, moderator_headers
    ):
        response = await client.post(
            '/api/v1/resources', json=self._payload(catalog.cs101.id), headers=moderator_headers
        )

        assert response.status_code == 201
        assert response.json()['is_approved'] is True

    async def test_unknown_subject_is_rejected(self, client: AsyncClient, student_headers):
        response = await client.post(
            '/api/v1/resources',
            json=self._payload('00000000-0000-0000-0000-000000000000'),
            headers=student_headers,
        )

        assert response.status_code == 400

    async def test_anonymous_cannot_submit(self, client: AsyncClient, catalog):
        response = await client.post('/api/v1/resources', json=self._payload(catalog.cs101.id))

        assert response.status_code == 401

    async def test_non_owner_update_is_forbidden(
        self, client: AsyncClient, catalog, make_resource, student_user, other_student_headers
    ):
        resource = await make_resource(catalog.cs101, title='Original title', added_by_id=student_user.id)

        response = await client.put(
            f'/api/v1/resources/{resource.id}',
            json={'title': 'Hijacked title'},
            headers=other_student_headers,
        )
        after = await client.get(f'/api/v1/resources/{resource.id}')

        assert response.status_code == 403
        assert after.json()['title'] == 'Original title'

    async def test_owner_can_update_and_delete(
        self, client: AsyncClient, catalog, make_resource, student_user, student_headers
    ):
        resource = await make_resource(catalog.cs101, title='Original title', added_by_id=student_user.id)

        updated = await client.put(
            f'/api/v1/resources/{resource.id}',
            json={'title': 'Better title', 'is_approved': False},
            headers=student_headers,
        )
        assert updated.status_code == 200
        assert updated.json()['title'] == 'Better title'
        # Students cannot change approval state
        assert updated.json()['is_approved'] is True

        deleted = await client.delete(f'/api/v1/resources/{resource.id}', headers=student_headers)
        assert deleted.status_code == 200
        assert deleted.json()['message'] == 'Resource deleted successfully'

        gone = await client.get(f'/api/v1/resources/{resource.id}')
        assert gone.status_code == 404

    async def test_student_cannot_approve(
        self, client: AsyncClient, catalog, make_resource, student_headers
    ):
        pending = await make_resource(catalog.cs101, is_approved=False)

        response = await client.patch(
            f'/api/v1/resources/{pending.id}/approve', json={'approved': True}, headers=student_headers
        )

        assert response.status_code == 403
        assert response.json()['detail'] == 'Insufficient permissions'

    async def test_moderator_approval_publishes(
        self, client: AsyncClient, catalog, make_resource, moderator_headers
    ):
        pending = await make_resource(catalog.cs101, is_approved=False)

        response = await client.patch(
            f'/api/v1/resources/{pending.id}/approve', json={'approved': True}, headers=moderator_headers
        )
        public = await client.get(f'/api/v1/resources/{pending.id}')

        assert response.status_code == 200
        assert response.json()['is_approved'] is True
        assert public.status_code == 200


class TestUserResources:

    async def test_my_resources_include_pending(
        self, client: AsyncClient, catalog, make_resource, make_user, auth_headers
    ):
        author = await make_user(UserRole.STUDENT)
        await make_resource(catalog.cs101, added_by_id=author.id)
        await make_resource(catalog.cs101, added_by_id=author.id, is_approved=False)
        await make_resource(catalog.cs101)

        response = await client.get('/api/v1/users/me/resources', headers=auth_headers(author))

        assert response.status_code == 200
        assert response.json()['pagination']['total'] == 2
