"""
Tests for shopcore: Product, CartLine, OrderRequest, Cart, InMemoryCatalog, CheckoutSettings.
"""

from decimal import Decimal

import pytest

from shopcore import Cart, CartLine, CheckoutSettings, InMemoryCatalog, OrderRequest, Product, build_checkout
from shopcore.checkout import InMemoryInventoryStore, TaskScheduler
from shopcore.config import DEFAULT_LOCK_TIMEOUT


# --- Product ---


def test_product_creation():
    p = Product("A", "Apple", Decimal("1.25"), stock=5)
    assert p.product_id == "A"
    assert p.unit_price == Decimal("1.25")
    assert p.stock == 5


def test_product_coerces_price_to_decimal():
    p = Product("A", "Apple", 2.5)
    assert p.unit_price == Decimal("2.5")
    assert isinstance(p.unit_price, Decimal)


def test_product_rejects_negative_values():
    with pytest.raises(ValueError):
        Product("A", "Apple", Decimal("-1"))
    with pytest.raises(ValueError):
        Product("A", "Apple", Decimal("1"), stock=-1)


def test_product_immutable():
    p = Product("A", "Apple", Decimal("1"))
    with pytest.raises(AttributeError):
        p.stock = 3


# --- CartLine & OrderRequest ---


def test_cart_line_requires_positive_integer_quantity():
    assert CartLine("A", 2).quantity == 2
    with pytest.raises(ValueError):
        CartLine("A", 0)
    with pytest.raises(ValueError):
        CartLine("A", 1.5)


def test_order_request_of_keeps_line_order():
    req = OrderRequest.of(("B", 1), ("A", 2), customer="alice")
    assert [line.product_id for line in req.lines] == ["B", "A"]
    assert req.customer == "alice"
    assert req.product_ids == frozenset({"A", "B"})
    assert req.order_id.startswith("ord-")


def test_order_request_converts_list_to_tuple():
    req = OrderRequest(lines=[CartLine("A", 1)], order_id="o-1")
    assert isinstance(req.lines, tuple)
    assert req.order_id == "o-1"


def test_order_request_requires_lines():
    with pytest.raises(ValueError):
        OrderRequest(lines=())


def test_order_request_ids_are_unique():
    assert OrderRequest.of(("A", 1)).order_id != OrderRequest.of(("A", 1)).order_id


# --- Cart ---


def test_cart_merges_quantities_in_insertion_order():
    cart = Cart()
    cart.add("B", 1)
    cart.add("A", 2)
    cart.add("B", 3)
    assert cart.lines() == [CartLine("B", 4), CartLine("A", 2)]
    assert len(cart) == 2


def test_cart_set_quantity_and_remove():
    cart = Cart([("A", 1), ("B", 1)])
    cart.set_quantity("A", 5)
    cart.set_quantity("B", 0)
    assert cart.lines() == [CartLine("A", 5)]
    cart.remove("A")
    assert cart.is_empty


def test_cart_to_request():
    cart = Cart([("A", 2)])
    req = cart.to_request(customer="bob")
    assert req.lines == (CartLine("A", 2),)
    assert req.customer == "bob"
    assert not cart.is_empty


def test_empty_cart_cannot_check_out():
    with pytest.raises(ValueError):
        Cart().to_request()


def test_cart_rejects_non_positive_add():
    with pytest.raises(ValueError):
        Cart().add("A", 0)


# --- InMemoryCatalog ---


def test_catalog_lookup_and_price():
    catalog = InMemoryCatalog([Product("A", "Apple", Decimal("1.10"))])
    assert catalog.lookup_product("A").name == "Apple"
    assert catalog.lookup_product("Z") is None
    assert catalog.get_unit_price("A") == Decimal("1.10")
    assert "A" in catalog
    assert len(catalog) == 1


def test_catalog_price_for_missing_product_raises_key_error():
    with pytest.raises(KeyError):
        InMemoryCatalog().get_unit_price("Z")


def test_catalog_add_replaces_product():
    catalog = InMemoryCatalog([Product("A", "Apple", Decimal("1"))])
    catalog.add(Product("A", "Apple", Decimal("2")))
    assert catalog.get_unit_price("A") == Decimal("2")
    assert len(catalog.products()) == 1


# --- CheckoutSettings ---


def test_settings_defaults():
    s = CheckoutSettings.from_env({})
    assert s.max_workers is None
    assert s.lock_timeout == DEFAULT_LOCK_TIMEOUT
    assert s.log_level == "INFO"


def test_settings_from_env_values():
    s = CheckoutSettings.from_env(
        {"SHOPCORE_MAX_WORKERS": "4", "SHOPCORE_LOCK_TIMEOUT": "0.5", "SHOPCORE_LOG_LEVEL": "debug"}
    )
    assert s.max_workers == 4
    assert s.lock_timeout == 0.5
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["0", "none", "None", "inf"])
def test_settings_lock_timeout_must_be_bounded(raw):
    with pytest.raises(ValueError):
        CheckoutSettings.from_env({"SHOPCORE_LOCK_TIMEOUT": raw})


@pytest.mark.parametrize(
    "env",
    [
        {"SHOPCORE_MAX_WORKERS": "0"},
        {"SHOPCORE_MAX_WORKERS": "many"},
        {"SHOPCORE_LOCK_TIMEOUT": "-1"},
        {"SHOPCORE_LOCK_TIMEOUT": "soon"},
        {"SHOPCORE_LOG_LEVEL": "LOUD"},
    ],
)
def test_settings_invalid_values_raise(env):
    with pytest.raises(ValueError):
        CheckoutSettings.from_env(env)


def test_build_checkout_wires_shared_locks():
    catalog = InMemoryCatalog([Product("A", "Apple", Decimal("1"), stock=3)])
    inventory = InMemoryInventoryStore({"A": 3})
    scheduler = build_checkout(catalog, inventory, CheckoutSettings(max_workers=2, lock_timeout=1.0))
    assert isinstance(scheduler, TaskScheduler)
    assert scheduler.max_workers == 2
    assert scheduler.processor.locks is inventory.locks
    assert scheduler.processor.lock_timeout == 1.0
