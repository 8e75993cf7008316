import os

# Point the app at a throwaway in-memory database before anything imports it
os.environ["SQLITE_URL"] = "sqlite://"
os.environ["USE_SQLITE"] = "true"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["GEMINI_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from sitebook.core.security import create_access_token, get_password_hash
from sitebook.db.base import Base
from sitebook.db.models.user import User
from sitebook.db.session import SessionLocal, engine
from sitebook.main import app
from sitebook.services.store import LedgerStore


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return LedgerStore(db, seed_demo=False)


def make_user(db, username, role):
    user = User(
        username=username,
        hashed_password=get_password_hash(f"{username}-pass"),
        full_name=username.title(),
        role=role,
    )
    db.add(user)
    db.commit()
    return user


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token({'sub': user.username})}"}


@pytest.fixture
def admin(db):
    return make_user(db, "admin", "admin")


@pytest.fixture
def viewer(db):
    return make_user(db, "viewer", "viewer")


@pytest.fixture
def anon_client(db):
    return TestClient(app)


@pytest.fixture
def client(db, admin):
    test_client = TestClient(app)
    test_client.headers.update(auth_headers(admin))
    return test_client


@pytest.fixture
def viewer_client(db, viewer):
    test_client = TestClient(app)
    test_client.headers.update(auth_headers(viewer))
    return test_client
