import os

# Must happen before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test_secret_key")

from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import NotFoundError
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.modules.posts.services.memory_store import InMemoryPostStore
from app.modules.posts.services.post import PostService
from app.modules.user_management.models.user import User

USERS = {"alice": "Alice", "bob": "Bob", "carol": "Carol"}


class FakeUserDirectory:
    def __init__(self, names):
        self.names = dict(names)

    def get_display_name(self, user_id):
        if user_id not in self.names:
            raise NotFoundError("User not found")
        return self.names[user_id]


class TickingClock:
    """Returns a strictly increasing timestamp on every call"""

    def __init__(self):
        self._ticks = count()
        self._start = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self):
        return self._start + timedelta(seconds=next(self._ticks))


@pytest.fixture
def memory_store():
    return InMemoryPostStore()


@pytest.fixture
def service(memory_store):
    return PostService(memory_store, FakeUserDirectory(USERS), clock=TickingClock())


@pytest.fixture
def engine(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'posts.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    db.add_all([User(id=user_id, name=name) for user_id, name in USERS.items()])
    db.commit()
    db.close()
    return TestingSessionLocal


@pytest.fixture
def db(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def make(user_id):
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}
    return make
