"""Checkout, order visibility and status lifecycle tests."""

from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from storefront.api.v1.endpoints import orders as orders_endpoint
from storefront.db import session as db_session
from storefront.db.base import Base
from storefront.main import app
from storefront.models import AuditLog, BankAccount, NonDeliveryDay, Product

# Tuesday 2026-03-10, 17:00 local: before the default 18:30 cutoff.
FIXED_NOW = datetime(2026, 3, 10, 17, 0, tzinfo=ZoneInfo("Asia/Ulaanbaatar"))


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup(tmp_path: Path, monkeypatch) -> tuple[sessionmaker, int]:
    engine = _build_test_engine(tmp_path / "test_checkout.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(orders_endpoint, "now_local", lambda: FIXED_NOW)

    with testing_session_local() as db:
        product = Product(name="Үхрийн мах", category="beef", price=Decimal("10000"), stock=Decimal("20"))
        db.add(product)
        db.add(BankAccount(bank_name="Хаан банк", account_number="5000123456", account_holder="Арвижих ХХК"))
        db.commit()
        return testing_session_local, product.id


def _register(client: TestClient, username: str, phone: str | None = "99112233") -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": "secret123", "phone": phone},
    )
    assert response.status_code == 201


def _place_order(client: TestClient, product_id: int, quantity: str = "2") -> dict:
    client.post("/api/v1/cart/items", json={"product_id": product_id, "quantity": quantity})
    response = client.post("/api/v1/orders", json={"customer_address": "БЗД, 3-р хороо"})
    assert response.status_code == 201, response.text
    return response.json()


def test_checkout_builds_order_from_cart(tmp_path: Path, monkeypatch) -> None:
    """Order totals, delivery date, stock and cart should all follow checkout."""
    session_local, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _register(client, "bat")
        body = _place_order(client, product_id)
        cart_after = client.get("/api/v1/cart").json()

    order = body["order"]
    assert order["status"] == "pending"
    assert order["payment_method"] == "bank_transfer"
    assert Decimal(order["subtotal_amount"]) == Decimal("20000")
    assert Decimal(order["shipping_fee"]) == Decimal("3000")
    assert Decimal(order["total_amount"]) == Decimal("23000")
    assert order["delivery_date"] == "2026-03-11"
    assert order["customer_phone"] == "99112233"
    assert order["items"][0]["name"] == "Үхрийн мах"
    assert body["bank_account"]["account_number"] == "5000123456"
    assert body["bank_account"]["is_default"] is True
    assert cart_after["items"] == []

    with session_local() as db:
        assert db.get(Product, product_id).stock == Decimal("18")


def test_order_lines_add_up_to_subtotal(tmp_path: Path, monkeypatch) -> None:
    """Stored line totals should sum to the charged subtotal for fractional weights."""
    _, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _register(client, "saraa")
        too_precise = client.post("/api/v1/cart/items", json={"product_id": product_id, "quantity": "1.0006"})
        placed = _place_order(client, product_id, quantity="1.255")
        stored = client.get(f"/api/v1/orders/{placed['order']['id']}").json()

    assert too_precise.status_code == 422
    assert Decimal(stored["subtotal_amount"]) == Decimal("12550.00")
    assert Decimal(stored["items"][0]["quantity"]) == Decimal("1.255")
    line_sum = sum((Decimal(item["line_total"]) for item in stored["items"]), Decimal("0"))
    assert line_sum.quantize(Decimal("0.01")) == Decimal(stored["subtotal_amount"])


def test_checkout_skips_blackout_days(tmp_path: Path, monkeypatch) -> None:
    """A blackout on the next day moves the stored delivery date."""
    session_local, product_id = _setup(tmp_path, monkeypatch)
    with session_local() as db:
        db.add(NonDeliveryDay(date=date(2026, 3, 11), reason="Inventory"))
        db.commit()

    with TestClient(app) as client:
        _register(client, "dorj")
        body = _place_order(client, product_id)

    assert body["order"]["delivery_date"] == "2026-03-12"


def test_checkout_requires_login_and_items(tmp_path: Path, monkeypatch) -> None:
    """Anonymous checkout is 401; an empty cart is 400."""
    _, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        anonymous = client.post("/api/v1/orders", json={"customer_address": "x"})
        _register(client, "enkh")
        empty = client.post("/api/v1/orders", json={"customer_address": "x"})

    assert anonymous.status_code == 401
    assert empty.status_code == 400


def test_customers_only_see_their_own_orders(tmp_path: Path, monkeypatch) -> None:
    """Other customers' orders should look like they do not exist."""
    _, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as owner:
        _register(owner, "owner")
        order_id = _place_order(owner, product_id)["order"]["id"]
        assert owner.get(f"/api/v1/orders/{order_id}").status_code == 200

    with TestClient(app) as stranger:
        _register(stranger, "stranger")
        assert stranger.get(f"/api/v1/orders/{order_id}").status_code == 404
        assert stranger.get("/api/v1/orders").json() == []

    with TestClient(app) as admin:
        admin.post("/api/v1/auth/login", json={"login": "admin", "password": "123"})
        assert [order["id"] for order in admin.get("/api/v1/orders").json()] == [order_id]


def test_status_lifecycle_and_audit(tmp_path: Path, monkeypatch) -> None:
    """Admins move orders forward; illegal transitions are rejected."""
    session_local, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _register(client, "khulan")
        order_id = _place_order(client, product_id)["order"]["id"]

        forbidden = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "processing"})
        assert forbidden.status_code == 403

        client.post("/api/v1/auth/logout")
        client.post("/api/v1/auth/login", json={"login": "admin", "password": "123"})

        skipped = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "completed"})
        paid = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "processing"})
        done = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "completed"})
        reopened = client.patch(f"/api/v1/orders/{order_id}/status", json={"status": "cancelled"})
        pending = client.get("/api/v1/admin/orders/pending-count")

    assert skipped.status_code == 400
    assert paid.status_code == 200
    assert paid.json()["paid_at"] is not None
    assert done.json()["status"] == "completed"
    assert done.json()["completed_at"] is not None
    assert reopened.status_code == 400
    assert pending.json() == {"pending": 0}

    with session_local() as db:
        entries = db.scalars(select(AuditLog).where(AuditLog.order_id == order_id).order_by(AuditLog.id)).all()
        assert [entry.after_snapshot["status"] for entry in entries] == ["processing", "completed"]
        assert entries[0].before_snapshot["status"] == "pending"
        assert entries[0].actor_identifier == "admin@localhost"


def test_admin_filters_orders_by_date(tmp_path: Path, monkeypatch) -> None:
    """Date filters use the shop's local calendar days."""
    _, product_id = _setup(tmp_path, monkeypatch)

    with TestClient(app) as client:
        _register(client, "ganaa")
        _place_order(client, product_id)
        client.post("/api/v1/auth/logout")
        client.post("/api/v1/auth/login", json={"login": "admin", "password": "123"})

        in_range = client.get("/api/v1/orders", params={"start_date": "2026-03-10", "end_date": "2026-03-10"})
        far_past = client.get("/api/v1/orders", params={"start_date": "2000-01-01", "end_date": "2000-01-02"})
        inverted = client.get("/api/v1/orders", params={"start_date": "2000-01-02", "end_date": "2000-01-01"})

    assert len(in_range.json()) == 1
    assert far_past.json() == []
    assert inverted.status_code == 400
