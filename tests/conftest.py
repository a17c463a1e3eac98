import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from minisocial.api.deps import get_db
from minisocial.crud import crud_post, crud_user
from minisocial.database import Base
from minisocial.main import app
from minisocial.models import Post, PostLike, User  # noqa: F401
from minisocial.schemas.user import UserCreate


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Create a user directly through the CRUD layer"""
    def _make_user(username: str) -> User:
        return crud_user.create_user(db, user_in=UserCreate(
            username=username,
            email=f"{username}@example.com",
            password="password123",
        ))
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def post(db, alice):
    return crud_post.create_post(db, author_user_id=alice.id, content="hello")


@pytest.fixture
def register(client):
    """Register through the API; returns (user_id, auth headers)"""
    def _register(username: str, password: str = "password123"):
        response = client.post("/api/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
            "firstName": username.capitalize(),
        })
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"]["_id"], {"Authorization": f"Bearer {body['token']}"}
    return _register