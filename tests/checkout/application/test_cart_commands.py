"""Application tests for cart commands processed through the domain."""

import pytest
from checkout.cart.address import SelectDeliveryAddress
from checkout.cart.cart import Cart
from checkout.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from checkout.cart.view import view_cart
from checkout.exceptions import InvalidQuantity, StoreUnavailable, VendorConflict
from protean import current_domain
from protean.exceptions import ObjectNotFoundError


def _add(product_id="prod-biryani", quantity=1, user_id="user-001"):
    return current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, quantity=quantity),
        asynchronous=False,
    )


def _stored_cart(user_id="user-001"):
    return current_domain.repository_for(Cart).for_shopper(user_id)


@pytest.fixture(autouse=True)
def _stock(catalogue, directory):
    yield


class TestAddToCartCommand:
    def test_first_add_creates_the_cart(self):
        assert _stored_cart() is None
        summary = _add()
        cart = _stored_cart()
        assert cart is not None
        assert summary["cart_id"] == str(cart.id)
        assert cart.vendor_id == "vendor-spice"
        assert cart.grand_total == 100.0

    def test_line_price_comes_from_catalogue(self):
        _add(quantity=2)
        cart = _stored_cart()
        assert cart.lines[0].unit_price == 100.0
        assert cart.lines[0].title == "Chicken Biryani"
        assert cart.grand_total == 200.0

    def test_one_cart_per_shopper(self):
        _add()
        _add(product_id="prod-kebab")
        carts = current_domain.repository_for(Cart)._dao.query.all().items
        assert len(carts) == 1
        assert len(carts[0].lines) == 2

    def test_vendor_conflict_leaves_cart_unchanged(self):
        _add(quantity=2)
        with pytest.raises(VendorConflict):
            _add(product_id="prod-dosa")
        cart = _stored_cart()
        assert len(cart.lines) == 1
        assert cart.vendor_id == "vendor-spice"
        assert cart.grand_total == 200.0

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            _add(product_id="prod-missing")

    def test_unknown_shopper(self):
        with pytest.raises(ObjectNotFoundError):
            _add(user_id="user-ghost")

    def test_invalid_quantity(self):
        with pytest.raises(InvalidQuantity):
            _add(quantity=0)
        assert _stored_cart() is None

    def test_catalogue_outage(self, catalogue):
        catalogue.configure(should_succeed=False)
        with pytest.raises(StoreUnavailable):
            _add()

    def test_shoppers_have_separate_carts(self):
        _add()
        _add(product_id="prod-dosa", user_id="user-002")
        assert _stored_cart("user-001").vendor_id == "vendor-spice"
        assert _stored_cart("user-002").vendor_id == "vendor-south"


class TestUpdateCartQuantityCommand:
    def test_quantity_sequence(self):
        _add()
        line_id = str(_stored_cart().lines[0].id)

        for quantity, expected_total in [(2, 200.0), (5, 500.0)]:
            current_domain.process(
                UpdateCartQuantity(user_id="user-001", line_id=line_id, quantity=quantity),
                asynchronous=False,
            )
            assert _stored_cart().grand_total == expected_total

        current_domain.process(
            UpdateCartQuantity(user_id="user-001", line_id=line_id, quantity=0),
            asynchronous=False,
        )
        cart = _stored_cart()
        assert len(cart.lines) == 0
        assert cart.grand_total == 0.0

    def test_negative_quantity_is_refused(self):
        _add(quantity=3)
        line_id = str(_stored_cart().lines[0].id)
        with pytest.raises(InvalidQuantity):
            current_domain.process(
                UpdateCartQuantity(user_id="user-001", line_id=line_id, quantity=-1),
                asynchronous=False,
            )
        assert _stored_cart().lines[0].quantity == 3

    def test_shopper_without_cart(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateCartQuantity(user_id="user-001", line_id="line-001", quantity=2),
                asynchronous=False,
            )


class TestRemoveFromCartCommand:
    def test_remove_line(self):
        _add()
        line_id = str(_stored_cart().lines[0].id)
        current_domain.process(RemoveFromCart(user_id="user-001", line_id=line_id), asynchronous=False)
        cart = _stored_cart()
        assert len(cart.lines) == 0
        assert cart.vendor_id is None

    def test_remove_unknown_line(self):
        _add()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(RemoveFromCart(user_id="user-001", line_id="line-missing"), asynchronous=False)


class TestSelectDeliveryAddressCommand:
    def test_address_is_snapshotted_on_cart(self):
        _add()
        current_domain.process(
            SelectDeliveryAddress(user_id="user-001", address_id="addr-home"),
            asynchronous=False,
        )
        cart = _stored_cart()
        assert cart.delivery_address.street == "12 MG Road"
        assert cart.delivery_address.city == "Bengaluru"

    def test_unknown_address(self):
        _add()
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                SelectDeliveryAddress(user_id="user-001", address_id="addr-missing"),
                asynchronous=False,
            )

    def test_another_shoppers_address(self):
        _add(product_id="prod-dosa", user_id="user-002")
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                SelectDeliveryAddress(user_id="user-002", address_id="addr-home"),
                asynchronous=False,
            )


class TestViewCart:
    def test_view_cart(self):
        _add(quantity=2)
        summary = view_cart("user-001")
        assert summary["grand_total"] == 200.0
        assert summary["lines"][0]["product_id"] == "prod-biryani"

    def test_no_cart_yet(self):
        with pytest.raises(ObjectNotFoundError):
            view_cart("user-001")
