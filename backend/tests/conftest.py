"""
Pytest configuration and fixtures.

Points the app at SQLite before any plantomeet import, and provides in-memory and SQL
repositories plus a TestClient wired to a fresh database per test.
"""
import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"

# Add backend/ to Python path
backend_root = Path(__file__).parent.parent
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import plantomeet.models  # noqa: E402,F401
from plantomeet.db.base import Base  # noqa: E402
from plantomeet.db.session import get_db  # noqa: E402
from plantomeet.main import app  # noqa: E402
from plantomeet.services.polls import InMemoryPollRepository, PollLifecycle, SqlAlchemyPollRepository  # noqa: E402


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def repository(request):
    """Every lifecycle test runs against both adapters."""
    if request.param == "memory":
        yield InMemoryPollRepository()
    else:
        yield SqlAlchemyPollRepository(request.getfixturevalue("db_session"))


@pytest.fixture
def lifecycle(repository):
    return PollLifecycle(repository, max_range_days=31)


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)
