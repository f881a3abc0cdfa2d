"""
Pytest configuration and fixtures for all tests.
"""

import os
import uuid
from datetime import date
from unittest.mock import MagicMock

# In-memory database for every test module; must be set before the package is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from aiocache import Cache
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from curriculum_backend.model import Base, Course, Enrollment, Program, User
from curriculum_backend.model.role import ROLE_ADMIN, ROLE_USER
from curriculum_backend.permissions.principal import Principal
from curriculum_backend.repositories.user import UserRepository
from curriculum_backend.search.index import SearchIndex


@pytest.fixture
def engine():
    """Fresh in-memory SQLite engine shared across threads (TestClient runs sync deps in a pool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def Session(engine):
    """Create session factory."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def session(Session):
    """Create a new database session for a test."""
    session = Session()
    try:
        yield session
    finally:
        session.close()


def make_db():
    """Create a MagicMock DB session with common methods."""
    db = MagicMock()
    q = MagicMock()
    q.filter.return_value = q
    q.options.return_value = q
    q.join.return_value = q
    q.order_by.return_value = q
    q.limit.return_value = q
    q.offset.return_value = q
    q.all.return_value = []
    q.first.return_value = None
    q.count.return_value = 0
    db.query.return_value = q
    return db


@pytest.fixture
def mock_db():
    return make_db()


@pytest.fixture
def admin_principal():
    """The reserved admin account."""
    return Principal(user_id=1, login="admin", roles=[ROLE_ADMIN, ROLE_USER])


@pytest.fixture
def alice_principal():
    return Principal(user_id=2, login="alice", roles=[ROLE_USER])


@pytest.fixture
def bob_principal():
    return Principal(user_id=3, login="bob", roles=[ROLE_USER])


@pytest.fixture
def operator_principal():
    """Holds the ADMIN role but is not the reserved admin login."""
    return Principal(user_id=4, login="ops", roles=[ROLE_ADMIN])


@pytest.fixture
def guest_principal():
    """Authenticated, but without any role."""
    return Principal(user_id=5, login="guest", roles=[])


@pytest.fixture
def anonymous_principal():
    return Principal.anonymous()


@pytest.fixture
def search_index():
    """Memory-backed search index in its own namespace."""
    return SearchIndex(Cache(Cache.MEMORY), f"test-{uuid.uuid4().hex}")


@pytest.fixture
def seeded(session):
    """
    Users admin/alice/bob/ops, one program with two courses and
    three enrollments: two owned by alice, one by bob.
    """
    users = {}
    repository = UserRepository(session)
    for user_id, login, roles in (
        (1, "admin", [ROLE_ADMIN, ROLE_USER]),
        (2, "alice", [ROLE_USER]),
        (3, "bob", [ROLE_USER]),
        (4, "ops", [ROLE_ADMIN]),
    ):
        user = User(id=user_id, login=login, password=f"{login}-password", email=f"{login}@example.org")
        session.add(user)
        session.commit()
        users[login] = repository.grant_roles(user, roles)

    program = Program(name="Computer Science", description="Bachelor programme")
    session.add(program)
    session.commit()

    foobar = Course(title="Foundations", description="foobar", program_id=program.id)
    baz = Course(title="Algorithms", description="baz", program_id=program.id)
    session.add_all([foobar, baz])
    session.commit()

    enrollments = [
        Enrollment(user_id=users["alice"].id, program_id=program.id, comments="alice first year",
                   status="ACTIVE", enrolled_at=date(2024, 9, 1), courses=[foobar]),
        Enrollment(user_id=users["alice"].id, program_id=program.id, comments="alice second year",
                   status="PENDING", courses=[foobar, baz]),
        Enrollment(user_id=users["bob"].id, program_id=program.id, comments="bob first year",
                   status="ACTIVE", courses=[baz]),
    ]
    session.add_all(enrollments)
    session.commit()

    return {
        "users": users,
        "program": program,
        "courses": {"foobar": foobar, "baz": baz},
        "enrollments": {
            "alice_first": enrollments[0],
            "alice_second": enrollments[1],
            "bob_first": enrollments[2],
        },
    }
