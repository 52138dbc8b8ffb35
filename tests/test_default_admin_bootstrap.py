from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from storefront.core.config import settings
from storefront.core.security import verify_password
from storefront.db.base import Base
from storefront.models import User
from storefront.services.account_service import authenticate_user, ensure_default_admin


def _build_session_local() -> sessionmaker:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def test_ensure_default_admin_is_idempotent(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_user", "")
    monkeypatch.setattr(settings, "admin_pass", "")
    session_local = _build_session_local()

    with session_local() as session:
        assert ensure_default_admin(session) is False

    with session_local() as session:
        assert ensure_default_admin(session) is True
        admins = session.scalars(select(User).where(User.username == "admin")).all()
        assert len(admins) == 1
        assert admins[0].role == "ADMIN"
        assert verify_password("123", admins[0].password_hash)


def test_admin_credentials_come_from_environment(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_user", "owner")
    monkeypatch.setattr(settings, "admin_pass", "s3cret-pass")
    session_local = _build_session_local()

    with session_local() as session:
        ensure_default_admin(session)
        assert authenticate_user(session, "owner", "s3cret-pass") is not None
        assert authenticate_user(session, "owner", "123") is None


def test_disabled_admin_is_reactivated(monkeypatch) -> None:
    monkeypatch.setattr(settings, "admin_user", "")
    monkeypatch.setattr(settings, "admin_pass", "")
    session_local = _build_session_local()

    with session_local() as session:
        ensure_default_admin(session)
        admin = session.scalar(select(User).where(User.username == "admin"))
        admin.is_active = False
        admin.role = "CUSTOMER"
        session.commit()

        assert ensure_default_admin(session) is True
        session.refresh(admin)
        assert admin.is_active is True
        assert admin.role == "ADMIN"
