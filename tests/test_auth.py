"""Authentication endpoint tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.main import app
from storefront.models import User


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _use_test_db(tmp_path: Path, monkeypatch, name: str) -> sessionmaker:
    engine = _build_test_engine(tmp_path / name)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    return testing_session_local


def test_register_creates_customer_and_logs_in(tmp_path: Path, monkeypatch) -> None:
    """Registration should create a CUSTOMER and start a session."""
    session_local = _use_test_db(tmp_path, monkeypatch, "test_register.db")

    with TestClient(app) as client:
        response = client.post(
            "/api/v1/auth/register",
            json={"username": "bold", "email": "Bold@Example.com", "password": "secret123", "phone": "99112233"},
        )
        me_response = client.get("/api/v1/auth/me")

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "bold@example.com"
    assert body["role"] == "CUSTOMER"
    assert me_response.status_code == 200
    assert me_response.json()["username"] == "bold"

    with session_local() as db:
        user = db.scalar(select(User).where(User.username == "bold"))
        assert user is not None
        assert user.password_hash != "secret123"


def test_duplicate_registration_conflicts(tmp_path: Path, monkeypatch) -> None:
    """Username or e-mail reuse should be rejected with 409."""
    _use_test_db(tmp_path, monkeypatch, "test_duplicate.db")

    with TestClient(app) as client:
        first = client.post("/api/v1/auth/register", json={"username": "saraa", "email": "s@example.com", "password": "secret123"})
        second = client.post("/api/v1/auth/register", json={"username": "other", "email": "S@example.com", "password": "secret123"})

    assert first.status_code == 201
    assert second.status_code == 409


def test_login_with_email_and_logout(tmp_path: Path, monkeypatch) -> None:
    """Login accepts e-mail, and logout clears the session."""
    _use_test_db(tmp_path, monkeypatch, "test_login.db")

    with TestClient(app) as client:
        client.post("/api/v1/auth/register", json={"username": "tuya", "email": "tuya@example.com", "password": "secret123"})
        client.post("/api/v1/auth/logout")
        assert client.get("/api/v1/auth/me").status_code == 401

        bad = client.post("/api/v1/auth/login", json={"login": "tuya@example.com", "password": "wrong"})
        good = client.post("/api/v1/auth/login", json={"login": "tuya@example.com", "password": "secret123"})
        me_response = client.get("/api/v1/auth/me")

    assert bad.status_code == 401
    assert good.status_code == 200
    assert me_response.json()["email"] == "tuya@example.com"


def test_bearer_token_authenticates_without_session(tmp_path: Path, monkeypatch) -> None:
    """Tokens from /auth/token are accepted in place of the cookie."""
    _use_test_db(tmp_path, monkeypatch, "test_token.db")

    with TestClient(app) as client:
        token_response = client.post("/api/v1/auth/token", json={"login": "admin", "password": "123"})
        token = token_response.json()["access_token"]
        client.cookies.clear()
        me_response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        garbage = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert token_response.status_code == 200
    assert token_response.json()["token_type"] == "bearer"
    assert me_response.status_code == 200
    assert me_response.json()["role"] == "ADMIN"
    assert garbage.status_code == 401


def test_customer_cannot_reach_admin_routes(tmp_path: Path, monkeypatch) -> None:
    """Admin-only routes should answer 403 to customers and 401 to anonymous users."""
    _use_test_db(tmp_path, monkeypatch, "test_roles.db")

    with TestClient(app) as client:
        anonymous = client.get("/api/v1/admin/users")
        client.post("/api/v1/auth/register", json={"username": "cust", "email": "c@example.com", "password": "secret123"})
        customer = client.get("/api/v1/admin/users")

    assert anonymous.status_code == 401
    assert customer.status_code == 403
