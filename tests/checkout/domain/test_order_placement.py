"""Tests for building an Order from a payment proof and checkout snapshots."""

import pytest
from checkout.directory.port import AddressSnapshot, ContactSnapshot
from checkout.exceptions import PaymentNotVerified
from checkout.order.events import OrderPlaced
from checkout.order.order import Order
from checkout.payment.verifier import SettlementVerifier, compute_signature
from protean.exceptions import ValidationError

SECRET = "order-test-secret"

CONTACT = ContactSnapshot(user_id="user-001", name="Asha Rao", email="asha@example.com", mobile="9000000001")
ADDRESS = AddressSnapshot(
    address_id="addr-home",
    street="12 MG Road",
    city="Bengaluru",
    state="Karnataka",
    landmark="Near Metro",
    pincode="560001",
)


def _proof(intent_id="order_001", settlement_id="pay_001"):
    verifier = SettlementVerifier(SECRET)
    return verifier.verify(intent_id, settlement_id, compute_signature(SECRET, intent_id, settlement_id))


def _lines():
    return [
        {
            "product_id": "prod-biryani",
            "vendor_id": "vendor-spice",
            "title": "Chicken Biryani",
            "image": None,
            "unit_price": 100.0,
            "quantity": 2,
            "line_total": 200.0,
        },
        {
            "product_id": "prod-kebab",
            "vendor_id": "vendor-spice",
            "title": "Seekh Kebab",
            "image": "kebab.jpg",
            "unit_price": 250.0,
            "quantity": 1,
            "line_total": 250.0,
        },
    ]


def _place(**overrides):
    kwargs = {
        "proof": _proof(),
        "user_id": "user-001",
        "cart_id": "cart-001",
        "lines": _lines(),
        "contact": CONTACT,
        "address": ADDRESS,
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


class TestOrderPlacement:
    def test_payment_id_is_the_settlement_id(self):
        order = _place()
        assert order.payment_id == "pay_001"
        assert order.intent_id == "order_001"

    def test_items_are_copied(self):
        order = _place()
        assert len(order.items) == 2
        assert order.items[0].title == "Chicken Biryani"
        assert order.items[1].image == "kebab.jpg"

    def test_total_is_recomputed(self):
        lines = _lines()
        lines[0]["line_total"] = 1.0
        order = _place(lines=lines)
        assert order.total == 450.0
        assert order.items[0].line_total == 200.0

    def test_vendor_comes_from_lines(self):
        order = _place()
        assert order.vendor_id == "vendor-spice"

    def test_contact_and_address_are_snapshotted(self):
        order = _place()
        assert order.contact.name == "Asha Rao"
        assert order.contact.email == "asha@example.com"
        assert order.address.street == "12 MG Road"
        assert order.address.pincode == "560001"

    def test_raises_order_placed_event(self):
        order = _place()
        event = order._events[-1]
        assert isinstance(event, OrderPlaced)
        assert event.payment_id == "pay_001"
        assert event.total == 450.0
        assert event.item_count == 2

    def test_summary(self):
        order = _place()
        summary = order.to_dict_summary()
        assert summary["order_id"] == str(order.id)
        assert summary["total"] == 450.0
        assert len(summary["items"]) == 2
        assert summary["placed_at"] is not None


class TestOrderPreconditions:
    def test_requires_verified_payment(self):
        with pytest.raises(PaymentNotVerified):
            _place(proof={"intent_id": "order_001", "settlement_id": "pay_001"})

    def test_refuses_empty_cart(self):
        with pytest.raises(ValidationError):
            _place(lines=[])

    def test_refuses_mixed_vendors(self):
        lines = _lines()
        lines[1]["vendor_id"] = "vendor-south"
        with pytest.raises(ValidationError):
            _place(lines=lines)

    def test_snapshot_is_independent_of_source_lines(self):
        lines = _lines()
        order = _place(lines=lines)
        lines[0]["quantity"] = 99
        assert order.items[0].quantity == 2
