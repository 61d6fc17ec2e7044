"""BDD tests for single-vendor cart line management."""

from protean.exceptions import ValidationError
from pytest_bdd import parsers, scenarios, then, when

scenarios("features/cart_lines.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{title}" from "{vendor_id}" at {price:f} is added with quantity {qty:d}'))
def add_line(cart, title, vendor_id, price, qty, error):
    try:
        cart.add_line(
            product_id=title.lower().replace(" ", "-"),
            vendor_id=vendor_id,
            title=title,
            unit_price=price,
            quantity=qty,
        )
    except ValidationError as exc:
        error["exc"] = exc


@when(parsers.cfparse("the line quantity is set to {qty:d}"))
def set_line_quantity(cart, qty, error):
    try:
        cart.update_line_quantity(str(cart.lines[0].id), qty)
    except ValidationError as exc:
        error["exc"] = exc


@when("the line is removed")
def remove_line(cart):
    cart.remove_line(str(cart.lines[0].id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart vendor is "{vendor_id}"'))
def cart_vendor_is(cart, vendor_id):
    assert cart.vendor_id == vendor_id


@then("the cart has no vendor")
def cart_has_no_vendor(cart):
    assert cart.vendor_id is None


@then(parsers.cfparse("the line quantity is {qty:d}"))
def line_quantity_is(cart, qty):
    assert cart.lines[0].quantity == qty
