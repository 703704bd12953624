"""
Integration tests for resource ratings and their aggregates
"""
import pytest
from httpx import AsyncClient


@pytest.fixture
async def lecture(catalog, make_resource):
    return await make_resource(catalog.cs102, title='Trees explained')


async def rate(client: AsyncClient, resource_id: str, value: int, headers: dict, review: str = None):
    return await client.post(
        f'/api/v1/ratings/resource/{resource_id}',
        json={'rating': value, 'review': review},
        headers=headers,
    )


class TestRateResource:

    async def test_first_rating_creates(self, client: AsyncClient, lecture, student_headers):
        response = await rate(client, lecture.id, 4, student_headers, review='Clear and short')

        assert response.status_code == 201
        data = response.json()
        assert data['rating']['rating'] == 4
        assert data['rating']['review'] == 'Clear and short'
        assert data['resource']['average_rating'] == 4.0
        assert data['resource']['total_ratings'] == 1
        assert data['resource']['rating_distribution']['4'] == 1

    async def test_second_rating_replaces_first(self, client: AsyncClient, lecture, student_headers):
        await rate(client, lecture.id, 4, student_headers)

        response = await rate(client, lecture.id, 2, student_headers)

        assert response.status_code == 200
        aggregate = response.json()['resource']
        assert aggregate['total_ratings'] == 1
        assert aggregate['average_rating'] == 2.0
        assert aggregate['rating_distribution'] == {'1': 0, '2': 1, '3': 0, '4': 0, '5': 0}

    async def test_aggregate_across_users(
        self, client: AsyncClient, lecture, student_headers, other_student_headers
    ):
        await rate(client, lecture.id, 2, student_headers)
        await rate(client, lecture.id, 5, other_student_headers)

        resource = await client.get(f'/api/v1/resources/{lecture.id}')

        data = resource.json()
        assert data['average_rating'] == 3.5
        assert data['total_ratings'] == 2
        assert data['rating_distribution']['2'] == 1
        assert data['rating_distribution']['5'] == 1

    @pytest.mark.parametrize('value', [0, 6])
    async def test_out_of_range_rating_is_rejected(
        self, client: AsyncClient, lecture, student_headers, value
    ):
        response = await rate(client, lecture.id, value, student_headers)

        assert response.status_code == 400

    async def test_rating_requires_login(self, client: AsyncClient, lecture):
        response = await client.post(f'/api/v1/ratings/resource/{lecture.id}', json={'rating': 5})

        assert response.status_code == 401

    async def test_pending_resource_cannot_be_rated(
        self, client: AsyncClient, catalog, make_resource, student_headers
    ):
        pending = await make_resource(catalog.cs102, is_approved=False)

        response = await rate(client, pending.id, 5, student_headers)

        assert response.status_code == 404


class TestListRatings:

    async def test_most_helpful_first(
        self, client: AsyncClient, lecture, student_headers, other_student_headers
    ):
        first = (await rate(client, lecture.id, 3, student_headers)).json()['rating']
        second = (await rate(client, lecture.id, 5, other_student_headers)).json()['rating']
        await client.post(f"/api/v1/ratings/{second['id']}/helpful", headers=student_headers)

        response = await client.get(f'/api/v1/ratings/resource/{lecture.id}')

        assert response.status_code == 200
        data = response.json()
        assert [r['id'] for r in data['ratings']] == [second['id'], first['id']]
        assert data['ratings'][0]['helpful_votes'] == 1
        assert data['pagination']['total'] == 2

    async def test_unknown_resource_returns_404(self, client: AsyncClient):
        response = await client.get('/api/v1/ratings/resource/00000000-0000-0000-0000-000000000000')

        assert response.status_code == 404


class TestDeleteRating:

    async def test_non_owner_cannot_delete(
        self, client: AsyncClient, lecture, student_headers, other_student_headers
    ):
        rating = (await rate(client, lecture.id, 5, student_headers)).json()['rating']

        response = await client.delete(f"/api/v1/ratings/{rating['id']}", headers=other_student_headers)

        assert response.status_code == 403

    async def test_owner_delete_refreshes_aggregate(
        self, client: AsyncClient, lecture, student_headers, other_student_headers
    ):
        mine = (await rate(client, lecture.id, 1, student_headers)).json()['rating']
        await rate(client, lecture.id, 5, other_student_headers)

        response = await client.delete(f"/api/v1/ratings/{mine['id']}", headers=student_headers)

        assert response.status_code == 200
        assert response.json()['average_rating'] == 5.0
        assert response.json()['total_ratings'] == 1

    async def test_admin_can_delete_any_rating(
        self, client: AsyncClient, lecture, student_headers, admin_headers
    ):
        rating = (await rate(client, lecture.id, 4, student_headers)).json()['rating']

        response = await client.delete(
            f"/api/v1/ratings/resource/{lecture.id}/{rating['id']}", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {
            'average_rating': 0.0,
            'total_ratings': 0,
            'rating_distribution': {'1': 0, '2': 0, '3': 0, '4': 0, '5': 0},
        }

    async def test_rating_under_wrong_resource_returns_404(
        self, client: AsyncClient, catalog, lecture, make_resource, student_headers, admin_headers
    ):
        elsewhere = await make_resource(catalog.cs101)
        rating = (await rate(client, lecture.id, 4, student_headers)).json()['rating']

        response = await client.delete(
            f"/api/v1/ratings/resource/{elsewhere.id}/{rating['id']}", headers=admin_headers
        )

        assert response.status_code == 404
