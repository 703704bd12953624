"""
Campus Syllabus Hub - Test Configuration and Fixtures
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator, Dict
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before the app reads its settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_campus_hub.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_FILE'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

from syllabus_hub.main import app
from syllabus_hub.core.database import Base, get_db, json_serializer, register_sqlite_functions
from syllabus_hub.core.security import get_password_hash, create_access_token
from syllabus_hub.models import (
    Branch,
    Program,
    Year,
    Semester,
    Subject,
    Resource,
    ResourceType,
    User,
    UserRole,
    empty_rating_distribution,
)

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_campus_hub.db'
test_engine = create_async_engine(
    TEST_DATABASE_URL, echo=False, poolclass=NullPool, json_serializer=json_serializer
)
register_sqlite_functions(test_engine)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


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


async def create_user(db: AsyncSession, role: UserRole, **overrides) -> User:
    user = User(
        name=overrides.pop('name', fake.name()),
        email=overrides.pop('email', fake.unique.email()),
        hashed_password=get_password_hash(overrides.pop('password', TEST_PASSWORD)),
        role=role,
        is_active=overrides.pop('is_active', True),
    )
    db.add(user)
    await db.commit()
    return user


def headers_for(user: User) -> Dict[str, str]:
    """Bearer header for a user row"""
    token = create_access_token({
        'sub': str(user.id),
        'email': user.email,
        'role': user.role.value,
    })
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def student_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.STUDENT)


@pytest.fixture
async def other_student(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.STUDENT)


@pytest.fixture
async def moderator_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.MODERATOR)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.ADMIN)


@pytest.fixture
def student_headers(student_user: User) -> dict:
    return headers_for(student_user)


@pytest.fixture
def other_student_headers(other_student: User) -> dict:
    return headers_for(other_student)


@pytest.fixture
def moderator_headers(moderator_user: User) -> dict:
    return headers_for(moderator_user)


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@dataclass
class Catalog:
    cse: Branch
    ece: Branch
    btech: Program
    first_year: Year
    sem1: Semester
    sem2: Semester
    cs101: Subject
    cs102: Subject
    ece101: Subject


@pytest.fixture
async def catalog(db_session: AsyncSession) -> Catalog:
    """Two branches, one program, one year, two semesters and three subjects"""
    cse = Branch(code='CSE', name='Computer Science & Engineering')
    ece = Branch(code='ECE', name='Electronics & Communication Engineering')
    db_session.add_all([cse, ece])
    await db_session.flush()

    btech = Program(code='BTECH', name='Bachelor of Technology', branch_id=cse.id, duration_years=4)
    db_session.add(btech)
    await db_session.flush()

    first_year = Year(year=1, program_id=btech.id)
    db_session.add(first_year)
    await db_session.flush()

    sem1 = Semester(number=1, year_id=first_year.id)
    sem2 = Semester(number=2, year_id=first_year.id)
    db_session.add_all([sem1, sem2])
    await db_session.flush()

    cs101 = Subject(code='CS101', name='Programming in C', branch_id=cse.id,
                    semester_id=sem1.id, credits=4, topics=['Basics', 'Loops', 'Functions'])
    cs102 = Subject(code='CS102', name='Data Structures', branch_id=cse.id,
                    semester_id=sem2.id, credits=4, topics=['Arrays', 'Linked Lists', 'Trees'])
    ece101 = Subject(code='ECE101', name='Basic Electronics', branch_id=ece.id,
                     semester_id=sem1.id, credits=3, topics=['Diodes', 'Transistors'])
    db_session.add_all([cs101, cs102, ece101])
    await db_session.commit()

    return Catalog(
        cse=cse, ece=ece, btech=btech, first_year=first_year,
        sem1=sem1, sem2=sem2, cs101=cs101, cs102=cs102, ece101=ece101,
    )


async def _create_resource(db: AsyncSession, subject: Subject, **overrides) -> Resource:
    resource = Resource(
        type=overrides.pop('type', ResourceType.LECTURE),
        title=overrides.pop('title', fake.sentence(nb_words=4)),
        url=overrides.pop('url', fake.url()),
        description=overrides.pop('description', None),
        provider=overrides.pop('provider', None),
        subject_id=subject.id,
        topics=overrides.pop('topics', []),
        tags=overrides.pop('tags', []),
        prerequisites=[],
        added_by_id=overrides.pop('added_by_id', None),
        is_approved=overrides.pop('is_approved', True),
        quality_score=overrides.pop('quality_score', 50),
        rating_distribution=empty_rating_distribution(),
    )
    db.add(resource)
    await db.commit()
    return resource


@pytest.fixture
def make_resource(db_session: AsyncSession):
    """Factory: await make_resource(subject, title=..., is_approved=...)"""
    async def _make(subject: Subject, **overrides) -> Resource:
        return await _create_resource(db_session, subject, **overrides)
    return _make


@pytest.fixture
def make_user(db_session: AsyncSession):
    """Factory: await make_user(UserRole.STUDENT, email=...)"""
    async def _make(role: UserRole = UserRole.STUDENT, **overrides) -> User:
        return await create_user(db_session, role, **overrides)
    return _make


@pytest.fixture
def auth_headers():
    """Factory: auth_headers(user) -> Authorization header dict"""
    return headers_for
