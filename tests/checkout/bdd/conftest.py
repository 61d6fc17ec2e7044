"""Shared BDD fixtures and step definitions for the Checkout domain."""

import pytest
from checkout.cart.cart import Cart
from checkout.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineQuantityUpdated,
    CartLineRemoved,
    DeliveryAddressSelected,
)
from checkout.exceptions import InvalidQuantity, VendorConflict
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup in Then steps
_CART_EVENT_CLASSES = {
    "CartLineAdded": CartLineAdded,
    "CartLineQuantityUpdated": CartLineQuantityUpdated,
    "CartLineRemoved": CartLineRemoved,
    "DeliveryAddressSelected": DeliveryAddressSelected,
    "CartCleared": CartCleared,
}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps: Cart
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart():
    cart = Cart.create(user_id="user-001")
    cart._events.clear()
    return cart


@given(
    parsers.cfparse('the cart holds "{title}" from "{vendor_id}" at {price:f}'),
    target_fixture="cart",
)
def cart_holding(cart, title, vendor_id, price):
    cart.add_line(
        product_id=title.lower().replace(" ", "-"),
        vendor_id=vendor_id,
        title=title,
        unit_price=price,
    )
    cart._events.clear()
    return cart


# ---------------------------------------------------------------------------
# Then steps: Cart
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart has {count:d} line"))
def cart_has_n_lines_singular(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_n_lines(cart, count):
    assert len(cart.lines) == count


@then(parsers.cfparse("the grand total is {total:f}"))
def grand_total_is(cart, total):
    assert cart.grand_total == pytest.approx(total)
    assert cart.grand_total == pytest.approx(sum(line.unit_price * line.quantity for line in cart.lines))


@then("the cart action fails with a vendor conflict")
def cart_action_fails_with_vendor_conflict(error):
    assert isinstance(error["exc"], VendorConflict)


@then("the cart action fails with an invalid quantity")
def cart_action_fails_with_invalid_quantity(error):
    assert isinstance(error["exc"], InvalidQuantity)


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then(parsers.cfparse("a {event_type} cart event is raised"))
def cart_event_raised(cart, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in cart._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in cart._events]}"
