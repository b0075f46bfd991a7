from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from backend.api.app import create_app
from backend.api.limiter import limiter
from backend.auth.passwords import hash_password
from backend.auth.tokens import TokenCodec
from backend.config import Settings
from backend.db import Job, User

TEST_USER_ID = "5f0b8a52-0c1d-4d8e-9a55-3a9f6f1f7c10"
PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite:///{tmp_path / 'jobs.sqlite3'}",
        jwt_secret="test-secret",
        test_user_id=TEST_USER_ID,
    )


@pytest.fixture
def codec(settings: Settings) -> TokenCodec:
    return TokenCodec(settings)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI):
    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(app: FastAPI, client: TestClient) -> Callable[..., User]:
    """Insert a user directly; ``client`` ensures tables exist."""

    def _make_user(email: str | None = None, user_id: str | None = None) -> User:
        with app.state.session_factory() as db:
            user = User(
                id=user_id or str(uuid.uuid4()),
                name="Test User",
                email=email or f"{uuid.uuid4().hex[:8]}@example.com",
                password_hash=hash_password(PASSWORD),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            db.expunge(user)
            return user

    return _make_user


@pytest.fixture
def auth_headers(codec: TokenCodec) -> Callable[[str], dict[str, str]]:
    def _headers(user_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {codec.issue(user_id)}"}

    return _headers


@pytest.fixture
def insert_job(app: FastAPI, client: TestClient) -> Callable[..., str]:
    """Insert a job with an explicit created_at, returning its id."""

    def _insert_job(owner_id: str, created_at: datetime, **fields) -> str:
        values = {"company": "Acme", "position": "Engineer", "status": "pending"}
        values.update(fields)
        with app.state.session_factory() as db:
            job = Job(created_by=owner_id, created_at=created_at, **values)
            db.add(job)
            db.commit()
            return job.id

    return _insert_job
