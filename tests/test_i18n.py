"""Language switch and localized delivery estimate tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.main import app


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def test_switching_language_sets_cookie_and_redirects_back(tmp_path: Path, monkeypatch) -> None:
    """Language route should store the cookie and localize the estimate."""
    engine = _build_test_engine(tmp_path / "test_i18n.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    with TestClient(app) as client:
        switch_response = client.get("/lang/ko", headers={"referer": "/products"}, follow_redirects=False)
        assert switch_response.status_code == 303
        assert switch_response.headers["location"] == "/products"
        assert "lang=ko" in switch_response.headers.get("set-cookie", "")

        estimate = client.get("/api/v1/delivery/estimate", cookies={"lang": "ko"})

    assert estimate.status_code == 200
    assert estimate.json()["language"] == "ko"
    assert estimate.json()["message"] == "배송"
    assert "월/" in estimate.json()["formatted"]


def test_unknown_language_falls_back_to_mongolian(tmp_path: Path, monkeypatch) -> None:
    """Unsupported codes degrade to mn for both the cookie and the estimate."""
    engine = _build_test_engine(tmp_path / "test_i18n_fallback.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)

    with TestClient(app) as client:
        switch_response = client.get("/lang/pl", follow_redirects=False)
        estimate = client.get("/api/v1/delivery/estimate", params={"lang": "pl"})

    assert switch_response.headers["location"] == "/"
    assert "lang=mn" in switch_response.headers.get("set-cookie", "")
    assert estimate.json()["language"] == "mn"
    assert estimate.json()["message"] == "хүргэгдэнэ"
    assert " сар/" in estimate.json()["formatted"]
