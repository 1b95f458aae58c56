from __future__ import annotations

import uuid
from datetime import datetime, timedelta

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from sqlmodel import Session

from crm.api.deps import get_db
from crm.db.session import build_engine, init_db
from crm.main import app
from crm.models.base import utcnow


@pytest.fixture()
def db_engine(tmp_path):
    db_path = tmp_path / f"test_{uuid.uuid4().hex}.db"
    engine = build_engine(f"sqlite:///{db_path}")
    init_db(engine)

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    yield engine

    app.dependency_overrides.pop(get_db, None)
    engine.dispose()


@pytest.fixture()
def client(db_engine) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def db_session(db_engine) -> Session:
    with Session(db_engine) as session:
        yield session


def register_user(
    client: TestClient,
    email: str = "user@example.com",
    password: str = "Senha@123",
    company_name: str | None = "Acme",
) -> tuple[str, dict]:
    unique_email = f"{uuid.uuid4().hex[:8]}_{email}"
    payload = {"name": "Test User", "email": unique_email, "password": password}
    if company_name is not None:
        payload["companyName"] = company_name
    response = client.post("/auth/register", json=payload)
    assert response.status_code == status.HTTP_201_CREATED, response.json()
    body = response.json()
    return body["token"], body["user"]


def login_user(client: TestClient, email: str, password: str) -> dict:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == status.HTTP_200_OK, response.json()
    return response.json()


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def tenant_a(client) -> dict[str, str]:
    token, _ = register_user(client, email="a@example.com", company_name="Tenant A")
    return auth_headers(token)


@pytest.fixture()
def tenant_b(client) -> dict[str, str]:
    token, _ = register_user(client, email="b@example.com", company_name="Tenant B")
    return auth_headers(token)


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def backdate(session: Session, model, record_id: str, days: int = 1) -> None:
    """Push a row's timestamps into the past so a later write is measurable."""
    row = session.get(model, uuid.UUID(record_id))
    past = utcnow() - timedelta(days=days)
    row.created_at = past
    row.updated_at = past
    session.add(row)
    session.commit()
