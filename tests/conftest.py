import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# must be in place before docman.config builds its settings
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from docman.auth.deps import get_db
from docman.auth.permissions import admin_role_id
from docman.db.session import Base, init_db
from docman.main import create_app
from docman.models.user import User
from docman.utils.security import hash_password

ADMIN_PASSWORD = "adminpass"
USER_PASSWORD = "secret123"


def user_payload(name: str, **overrides) -> dict:
    data = {
        "username": name,
        "firstName": name.title(),
        "lastName": "Tester",
        "email": f"{name}@mail.com",
        "password": USER_PASSWORD,
    }
    data.update(overrides)
    return data


@pytest.fixture
def engine():
    """Fresh in-memory database per test, roles already seeded."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory):
    app = create_app(init_database=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def signup(client):
    """Sign a user up through the API and return (user, token)."""

    def _signup(name: str, **overrides):
        response = client.post("/users", json=user_payload(name, **overrides))
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user"], body["token"]

    return _signup


@pytest.fixture
def admin(client, db):
    """An admin account (admins cannot sign up) logged in through the API."""
    user = User(
        username="admin",
        first_name="Ada",
        last_name="Admin",
        email="admin@mail.com",
        password_hash=hash_password(ADMIN_PASSWORD),
        role_id=admin_role_id(db),
    )
    db.add(user)
    db.commit()

    response = client.post("/login", json={"username": "admin", "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    body = response.json()
    return body["user"], body["token"]


@pytest.fixture
def payload():
    return user_payload
