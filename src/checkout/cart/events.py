"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from checkout.domain import checkout


@checkout.event(part_of="Cart")
class CartLineAdded:
    """A product was added to the cart, or its quantity was increased."""

    __version__ = 1

    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    quantity = Integer(required=True)
    grand_total = Float(required=True)


@checkout.event(part_of="Cart")
class CartLineQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)
    grand_total = Float(required=True)


@checkout.event(part_of="Cart")
class CartLineRemoved:
    """A line was removed from the cart."""

    __version__ = 1

    cart_id = Identifier(required=True)
    line_id = Identifier(required=True)
    product_id = Identifier(required=True)
    grand_total = Float(required=True)


@checkout.event(part_of="Cart")
class DeliveryAddressSelected:
    """The shopper picked one of their saved addresses for delivery."""

    __version__ = 1

    cart_id = Identifier(required=True)
    address_id = Identifier(required=True)


@checkout.event(part_of="Cart")
class CartCleared:
    """Every line was removed, typically because the cart was checked out."""

    __version__ = 1

    cart_id = Identifier(required=True)
    reason = String(required=True, max_length=50)
    lines_cleared = Integer(required=True)
