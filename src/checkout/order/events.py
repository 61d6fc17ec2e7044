"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Order")
class OrderPlaced:
    """A verified payment was turned into an order."""

    __version__ = 1

    order_id = Identifier(required=True)
    payment_id = String(required=True)
    intent_id = String(required=True)
    user_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    total = Float(required=True)
    currency = String(required=True)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
