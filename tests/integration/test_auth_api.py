"""
Integration tests for registration, login and token refresh
"""
from httpx import AsyncClient

from syllabus_hub.core.security import create_access_token
from syllabus_hub.models import UserRole

TEST_PASSWORD = 'testpassword123'


class TestRegister:

    async def test_register_returns_tokens_and_student_role(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/register', json={
            'name': '  Asha Rao ',
            'email': 'Asha.Rao@Example.com',
            'password': 'supersecret1',
        })

        assert response.status_code == 201
        data = response.json()
        assert data['user']['name'] == 'Asha Rao'
        assert data['user']['email'] == 'asha.rao@example.com'
        assert data['user']['role'] == 'student'
        assert data['access_token']
        assert data['refresh_token']
        assert data['token_type'] == 'bearer'
        assert 'hashed_password' not in data['user']

    async def test_duplicate_email_is_rejected(self, client: AsyncClient, make_user):
        await make_user(UserRole.STUDENT, email='taken@example.com')

        response = await client.post('/api/v1/auth/register', json={
            'name': 'Someone Else',
            'email': 'TAKEN@example.com',
            'password': 'supersecret1',
        })

        assert response.status_code == 400
        assert response.json()['detail'] == 'User already exists'

    async def test_short_password_is_rejected(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/register', json={
            'name': 'Short Pass',
            'email': 'short@example.com',
            'password': 'abc',
        })

        assert response.status_code == 400


class TestLogin:

    async def test_login_with_valid_credentials(self, client: AsyncClient, make_user):
        user = await make_user(UserRole.MODERATOR, email='mod@example.com')

        response = await client.post('/api/v1/auth/login', json={
            'email': 'mod@example.com',
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 200
        data = response.json()
        assert data['user']['id'] == user.id
        assert data['user']['role'] == 'moderator'
        assert data['user']['last_login'] is not None

    async def test_wrong_password(self, client: AsyncClient, make_user):
        await make_user(UserRole.STUDENT, email='student@example.com')

        response = await client.post('/api/v1/auth/login', json={
            'email': 'student@example.com',
            'password': 'not-the-password',
        })

        assert response.status_code == 401
        assert response.json()['detail'] == 'Invalid credentials'

    async def test_unknown_email(self, client: AsyncClient):
        response = await client.post('/api/v1/auth/login', json={
            'email': 'nobody@example.com',
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 401

    async def test_inactive_user_cannot_login(self, client: AsyncClient, make_user):
        await make_user(UserRole.STUDENT, email='gone@example.com', is_active=False)

        response = await client.post('/api/v1/auth/login', json={
            'email': 'gone@example.com',
            'password': TEST_PASSWORD,
        })

        assert response.status_code == 401


class TestTokens:

    async def test_refresh_issues_new_pair(self, client: AsyncClient, make_user):
        await make_user(UserRole.STUDENT, email='refresh@example.com')
        login = await client.post('/api/v1/auth/login', json={
            'email': 'refresh@example.com',
            'password': TEST_PASSWORD,
        })

        response = await client.post('/api/v1/auth/refresh', json={
            'refresh_token': login.json()['refresh_token'],
        })

        assert response.status_code == 200
        assert response.json()['access_token']

    async def test_access_token_cannot_refresh(self, client: AsyncClient, make_user):
        await make_user(UserRole.STUDENT, email='wrongtype@example.com')
        login = await client.post('/api/v1/auth/login', json={
            'email': 'wrongtype@example.com',
            'password': TEST_PASSWORD,
        })

        response = await client.post('/api/v1/auth/refresh', json={
            'refresh_token': login.json()['access_token'],
        })

        assert response.status_code == 401
        assert response.json()['detail'] == 'Invalid token type'

    async def test_me_returns_current_user(self, client: AsyncClient, student_user, student_headers):
        response = await client.get('/api/v1/auth/me', headers=student_headers)

        assert response.status_code == 200
        assert response.json()['email'] == student_user.email

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get('/api/v1/auth/me')

        assert response.status_code == 401
        assert response.json()['detail'] == 'Not authenticated'

    async def test_token_for_deleted_user_is_rejected(self, client: AsyncClient):
        token = create_access_token({
            'sub': '00000000-0000-0000-0000-000000000000',
            'email': 'ghost@example.com',
            'role': 'student',
        })

        response = await client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {token}'})

        assert response.status_code == 401

    async def test_profile_update(self, client: AsyncClient, student_headers):
        response = await client.patch(
            '/api/v1/users/me', json={'name': 'Renamed Student'}, headers=student_headers
        )

        assert response.status_code == 200
        assert response.json()['name'] == 'Renamed Student'
