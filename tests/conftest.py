import itertools
import os
import time

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DEV_MODE", "true")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from triptech.core.config import get_settings
from triptech.core.security import create_access_token, get_password_hash
from triptech.main import create_app
from triptech.models.types import UserRole, UserStatus
from triptech.models.users import User
from triptech.services import invitation_service
from triptech.services.email_services import get_email_service


DEFAULT_PASSWORD = "secret123"


class FakeEmailService:
    def __init__(self):
        self.sent = []

    def send_credentials_email(self, to_email, full_name, username, password):
        self.sent.append({
            "to_email": to_email,
            "full_name": full_name,
            "username": username,
            "password": password,
        })


@pytest.fixture
def engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
def app(engine, email_service):
    app = create_app(engine=engine)
    app.dependency_overrides[get_email_service] = lambda: email_service
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def session(engine, client):
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def distinct_invitation_stamps(monkeypatch):
    # Invitation ids embed epoch millis; keep them distinct within a fast test
    stamps = itertools.count(int(time.time() * 1000))
    monkeypatch.setattr(invitation_service, "_epoch_millis", lambda: next(stamps))


@pytest.fixture
def create_user(session):
    def _create_user(
        role: UserRole,
        email: str,
        full_name: str = "Test User",
        company_name: str = "Test Co",
        password: str = DEFAULT_PASSWORD,
    ) -> User:
        user = User(
            email=email,
            username=email.split("@")[0],
            password_hash=get_password_hash(password),
            full_name=full_name,
            company_name=company_name,
            role=role,
            status=UserStatus.ACTIVE,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user
    return _create_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        token = create_access_token(user.id, user.username, user.role)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def process_settings(monkeypatch):
    """Change the environment behind get_settings() for the rest of one test."""
    def _process_settings(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()
    yield _process_settings
    get_settings.cache_clear()
