import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from shortlinks.core.config import Settings
from shortlinks.db import database
from shortlinks.db.models import Base
from shortlinks.main import create_app
from shortlinks.services.registry import LinkRegistry


# Create in-memory SQLite database for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = database.build_engine(SQLALCHEMY_TEST_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = database.build_session_factory(engine)


@pytest.fixture
def test_engine():
    return engine


@pytest.fixture
def db_session():
    """Creates a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def registry(db_session):
    return LinkRegistry(db_session)


@pytest.fixture
def client(db_session):
    """Creates a test client with overridden database dependency."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app = create_app(Settings(DATABASE_URL=SQLALCHEMY_TEST_DATABASE_URL), engine=engine)
    app.dependency_overrides[database.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def file_session_factory(tmp_path):
    """Session factory over a file-backed SQLite database shared by threads."""
    file_engine = database.build_engine(f"sqlite:///{tmp_path / 'links.db'}")
    Base.metadata.create_all(bind=file_engine)
    try:
        yield database.build_session_factory(file_engine)
    finally:
        file_engine.dispose()


@pytest.fixture
def sample_urls():
    """Provides sample URLs for testing."""
    return [
        "https://example.com/test1",
        "https://google.com/search?q=test",
        "https://github.com/user/repo",
    ]
