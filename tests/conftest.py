import os

os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("JWT_ALGORITHM", "HS256")
os.environ.setdefault("PUBLIC_FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("PUBLIC_BACKEND_URL", "http://backend.test")

import re

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from twilight.controllers import user_controller
from twilight.core.db import Database, get_db
from twilight.core.security import create_access_token, hash_password
from twilight.main import create_app
from twilight.models.user_model import User


@pytest.fixture()
def database():
    database = Database(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database.create_all()
    try:
        yield database
    finally:
        database.engine.dispose()


@pytest.fixture()
def db_session(database):
    db = database.session()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(database, db_session):
    app = create_app(database=database)

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def outbox(monkeypatch):
    sent = []

    def fake_send_email(to_email, subject, html_body):
        sent.append({"to": to_email, "subject": subject, "html": html_body})

    monkeypatch.setattr(user_controller, "send_email", fake_send_email)
    return sent


def link_token(html: str) -> str:
    match = re.search(r'href="[^"]*/([^/"]+)"', html)
    assert match, html
    return match.group(1)


def seed_user(db, username="alice", email="alice@example.com", password="correct-password", is_verified=True):
    user = User(
        username=username,
        email=email,
        first_name=username.capitalize(),
        password=hash_password(password),
        is_verified=is_verified,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.user_id)}"}
