"""Media library upload tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.core.config import settings
from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.main import app
from storefront.services.media_service import MAX_UPLOAD_BYTES


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def test_upload_list_and_delete(tmp_path: Path, monkeypatch) -> None:
    """Raw uploads land in UPLOAD_DIR and are removed with their row."""
    engine = _build_test_engine(tmp_path / "test_media.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(upload_dir))

    with TestClient(app) as client:
        anonymous = client.post("/api/v1/media?filename=x.jpg", content=b"\xff\xd8")
        client.post("/api/v1/auth/login", json={"login": "admin", "password": "123"})
        uploaded = client.post(
            "/api/v1/media",
            params={"filename": "../hero bg.jpg", "alt_text": "Hero"},
            content=b"\xff\xd8\xff\xe0fake-jpeg",
            headers={"Content-Type": "application/octet-stream"},
        )
        empty = client.post("/api/v1/media", params={"filename": "a.png"}, content=b"")
        no_extension = client.post("/api/v1/media", params={"filename": "README"}, content=b"x")
        listing = client.get("/api/v1/media").json()

        stored = upload_dir / uploaded.json()["url"].removeprefix("/uploads/")
        assert stored.read_bytes().startswith(b"\xff\xd8")

        deleted = client.delete(f"/api/v1/media/{uploaded.json()['id']}")

    assert anonymous.status_code == 401
    assert uploaded.status_code == 201
    body = uploaded.json()
    assert body["name"] == "hero_bg.jpg"
    assert body["type"] == "image"
    assert body["alt_text"] == "Hero"
    assert body["url"].startswith("/uploads/")
    assert empty.status_code == 400
    assert no_extension.status_code == 400
    assert [item["id"] for item in listing] == [body["id"]]
    assert deleted.status_code == 204
    assert not stored.exists()


def test_oversized_upload_is_rejected(tmp_path: Path, monkeypatch) -> None:
    """Uploads past the size cap get 413 and leave nothing behind."""
    engine = _build_test_engine(tmp_path / "test_media_limit.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    upload_dir = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(upload_dir))

    with TestClient(app) as client:
        client.post("/api/v1/auth/login", json={"login": "admin", "password": "123"})
        oversized = client.post("/api/v1/media", params={"filename": "big.jpg"}, content=b"x" * (MAX_UPLOAD_BYTES + 1))
        at_limit = client.post("/api/v1/media", params={"filename": "edge.jpg"}, content=b"x" * MAX_UPLOAD_BYTES)
        listing = client.get("/api/v1/media").json()

    assert oversized.status_code == 413
    assert at_limit.status_code == 201
    assert [item["name"] for item in listing] == ["edge.jpg"]
    assert [path.name.endswith("edge.jpg") for path in upload_dir.iterdir()] == [True]
