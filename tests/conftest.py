"""
CampusOps - Test Configuration and Fixtures
"""
import os
import itertools
from datetime import datetime, timedelta
from decimal import Decimal
from typing import AsyncGenerator, Callable, Dict

# Set testing environment before the app reads its settings
os.environ['TESTING'] = 'true'
os.environ['ENVIRONMENT'] = 'testing'
os.environ['STORAGE_BACKEND'] = 'memory'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BOOTSTRAP_ADMIN_USERNAME'] = ''
os.environ['LOG_LEVEL'] = 'WARNING'

import pytest
from faker import Faker
from httpx import AsyncClient, ASGITransport

from app.core.config import Settings
from app.core.security import get_password_hash, issue_token_pair
from app.main import create_app
from app.models import ProjectStatus, TaskStatus, UserRole, ContentType
from app.storage import InMemoryStorage, Row, Storage
from app.storage.database import DatabaseStorage

fake = Faker()

TEST_PASSWORD = 'testpassword123'
TEST_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)

_sequence = itertools.count(1)


def database_settings(tmp_path) -> Settings:
    """Settings pointing the database store at a throwaway SQLite file"""
    return Settings(
        STORAGE_BACKEND='database',
        DATABASE_URL=f"sqlite:///{tmp_path / 'campusops-test.db'}",
    )


def build_storage(backend: str, tmp_path) -> Storage:
    if backend == 'memory':
        return InMemoryStorage()
    return DatabaseStorage(database_settings(tmp_path))


@pytest.fixture(params=['memory', 'database'])
async def any_storage(request, tmp_path) -> AsyncGenerator[Storage, None]:
    """Each store implementation in turn, started fresh"""
    storage = build_storage(request.param, tmp_path)
    await storage.startup()
    yield storage
    await storage.shutdown()


@pytest.fixture(params=['memory', 'database'])
async def storage(request, tmp_path) -> AsyncGenerator[Storage, None]:
    """
    Store behind the API and service tests.

    Runs every test against the in-memory store and against SQLite through
    SQLAlchemy, so the HTTP behaviour is the same on both backends.
    """
    storage = build_storage(request.param, tmp_path)
    await storage.startup()
    yield storage
    await storage.shutdown()


@pytest.fixture
async def client(storage: Storage) -> AsyncGenerator[AsyncClient, None]:
    """Create test client bound to the test store"""
    app = create_app(storage=storage)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[Row], Dict[str, str]]:
    """Build bearer headers for a stored user"""
    def _headers(user: Row) -> Dict[str, str]:
        return {'Authorization': f"Bearer {issue_token_pair(user)['access_token']}"}
    return _headers


# ==================== Users ====================

@pytest.fixture
def make_user(storage: Storage):
    """Create a user straight in the store; password is TEST_PASSWORD"""
    async def _make_user(role: UserRole = UserRole.STUDENT, **overrides) -> Row:
        n = next(_sequence)
        values = {
            'username': f"{fake.user_name()}{n}",
            'password': TEST_PASSWORD_HASH,
            'name': fake.name(),
            'email': f"user{n}@campusops.io",
            'role': role,
        }
        values.update(overrides)
        return await storage.users.create(values)
    return _make_user


@pytest.fixture
async def admin(make_user) -> Row:
    return await make_user(UserRole.ADMIN)


@pytest.fixture
async def instructor(make_user) -> Row:
    return await make_user(UserRole.INSTRUCTOR)


@pytest.fixture
async def student(make_user) -> Row:
    return await make_user(UserRole.STUDENT)


@pytest.fixture
async def other_student(make_user) -> Row:
    return await make_user(UserRole.STUDENT)


@pytest.fixture
async def project_manager(make_user) -> Row:
    return await make_user(UserRole.PROJECT_MANAGER)


@pytest.fixture
async def employee(make_user) -> Row:
    return await make_user(UserRole.EMPLOYEE)


@pytest.fixture
async def other_employee(make_user) -> Row:
    return await make_user(UserRole.EMPLOYEE)


@pytest.fixture
async def finance(make_user) -> Row:
    return await make_user(UserRole.FINANCE)


# ==================== Learning ====================

@pytest.fixture
async def course(storage: Storage, instructor: Row) -> Row:
    return await storage.courses.create({
        'title': fake.catch_phrase(),
        'description': fake.sentence(),
        'fee': Decimal('49.99'),
        'instructor_id': instructor['id'],
    })


@pytest.fixture
async def content(storage: Storage, course: Row) -> Row:
    return await storage.course_contents.create({
        'course_id': course['id'],
        'title': 'Welcome',
        'type': ContentType.VIDEO,
        'content': 'https://videos.campusops.io/welcome.mp4',
        'order': 1,
    })


@pytest.fixture
async def quiz(storage: Storage, course: Row) -> Row:
    return await storage.quizzes.create({
        'course_id': course['id'],
        'title': 'Week one check-in',
    })


# ==================== Projects ====================

@pytest.fixture
async def client_company(storage: Storage) -> Row:
    return await storage.clients.create({
        'name': fake.company(),
        'email': 'contact@client.io',
        'industry': 'Software',
    })


@pytest.fixture
async def project(storage: Storage, client_company: Row, project_manager: Row) -> Row:
    return await storage.projects.create({
        'title': fake.catch_phrase(),
        'client_id': client_company['id'],
        'budget': Decimal('10000.00'),
        'start_date': datetime(2024, 1, 1),
        'status': ProjectStatus.ACTIVE,
        'manager_id': project_manager['id'],
    })


@pytest.fixture
async def task(storage: Storage, project: Row, employee: Row) -> Row:
    return await storage.tasks.create({
        'project_id': project['id'],
        'title': 'Build login page',
        'description': 'Form plus validation',
        'assigned_to': employee['id'],
        'status': TaskStatus.ASSIGNED,
        'due_date': datetime(2024, 3, 1) + timedelta(hours=12),
    })
