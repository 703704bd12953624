"""
Smoke tests for the app shell: health, root and response headers
"""
from httpx import AsyncClient


async def test_health(client: AsyncClient):
    response = await client.get('/health')

    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'healthy'
    assert data['environment'] == 'testing'


async def test_root_points_to_docs(client: AsyncClient):
    response = await client.get('/')

    assert response.status_code == 200
    assert response.json()['docs'] == '/docs'


async def test_security_and_tracing_headers(client: AsyncClient):
    response = await client.get('/health')

    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert response.headers['X-Frame-Options'] == 'DENY'
    assert 'X-Request-ID' in response.headers


async def test_unknown_route_is_404(client: AsyncClient):
    response = await client.get('/api/v1/nothing-here')

    assert response.status_code == 404
