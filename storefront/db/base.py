"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from storefront.models import audit_log as _audit_log  # noqa: E402,F401
from storefront.models import bank_account as _bank_account  # noqa: E402,F401
from storefront.models import catalog as _catalog  # noqa: E402,F401
from storefront.models import cms as _cms  # noqa: E402,F401
from storefront.models import delivery as _delivery  # noqa: E402,F401
from storefront.models import order as _order  # noqa: E402,F401
from storefront.models import review as _review  # noqa: E402,F401
from storefront.models import user as _user  # noqa: E402,F401
