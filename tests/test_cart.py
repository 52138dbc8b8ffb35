from decimal import Decimal

from storefront.services.cart import Cart, CartItem, CartStore, parse_cart_items


def _item(product_id: int = 1, price: str = "10000", quantity: str = "2", **kwargs) -> CartItem:
    return CartItem(product_id=product_id, name=f"Product {product_id}", price=Decimal(price), quantity=Decimal(quantity), **kwargs)


def test_adding_same_product_merges_quantity() -> None:
    cart = Cart().add_item(_item(quantity="2")).add_item(_item(quantity="3"))

    assert cart.item_count == 1
    assert cart.items[0].quantity == Decimal("5")
    assert cart.total_price == Decimal("50000")


def test_merge_keeps_existing_line_snapshot() -> None:
    cart = Cart().add_item(_item(price="10000")).add_item(_item(price="12000", quantity="1"))
    assert cart.items[0].price == Decimal("10000")
    assert cart.items[0].quantity == Decimal("3")


def test_cart_is_immutable() -> None:
    empty = Cart()
    filled = empty.add_item(_item())
    assert empty.is_empty
    assert not filled.is_empty


def test_package_product_is_priced_per_unit_size() -> None:
    lamb = _item(product_id=2, price="96000", quantity="8", unit_size=Decimal("4"))
    beef = _item(product_id=3, price="28000", quantity="1.5")
    cart = Cart().add_item(lamb).add_item(beef)

    assert lamb.line_total == Decimal("192000")
    assert cart.total_price == Decimal("234000")


def test_update_and_remove() -> None:
    cart = Cart().add_item(_item(1)).add_item(_item(2))
    cart = cart.update_quantity(1, Decimal("7"))
    assert cart.find(1).quantity == Decimal("7")

    cart = cart.remove_item(2)
    assert [item.product_id for item in cart.items] == [1]
    assert cart.clear().is_empty


def test_missing_product_leaves_cart_unchanged() -> None:
    cart = Cart().add_item(_item(1)).add_item(_item(2, quantity="3"))

    assert cart.remove_item(99) == cart
    assert cart.update_quantity(99, Decimal("5")) == cart
    assert [item.quantity for item in cart.remove_item(99).items] == [Decimal("2"), Decimal("3")]


def test_parse_cart_items_accepts_serialized_cart() -> None:
    payload = Cart().add_item(_item(unit_size=Decimal("4"))).to_payload()
    result = parse_cart_items(payload)

    assert result.ok
    assert result.items[0].unit_size == Decimal("4")
    assert result.items[0].quantity == Decimal("2")


def test_parse_cart_items_rejects_bad_payloads() -> None:
    assert not parse_cart_items("not a list").ok
    assert not parse_cart_items([{"product_id": 1}]).ok
    assert not parse_cart_items([{"product_id": 1, "name": "x", "price": "1", "quantity": "1", "unit_size": "0"}]).ok
    assert not parse_cart_items([{"product_id": 1, "name": "x", "price": "1", "quantity": "1.0006"}]).ok

    line = {"product_id": 1, "name": "x", "price": "1", "quantity": "1"}
    duplicated = parse_cart_items([line, line])
    assert not duplicated.ok
    assert "duplicate" in duplicated.error


def test_cart_store_discards_corrupt_data() -> None:
    session: dict = {"cart": [{"garbage": True}], "lang": "ko"}
    cart = CartStore(session).load()

    assert cart.is_empty
    assert "cart" not in session
    assert session["lang"] == "ko"


def test_cart_store_round_trips_through_session() -> None:
    session: dict = {}
    store = CartStore(session)
    store.save(Cart().add_item(_item(quantity="1.25")))

    assert CartStore(session).load().items[0].quantity == Decimal("1.25")
