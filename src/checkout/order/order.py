"""Order aggregate: the immutable record of a paid checkout.

An order is written exactly once, from a verified payment and a by-value
copy of the shopper's cart, contact details and delivery address. It never
points back at the live cart: the cart is emptied and reused after checkout,
while the order keeps what was actually bought and at which price.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from checkout.domain import checkout
from checkout.exceptions import PaymentNotVerified
from checkout.order.events import OrderPlaced
from checkout.payment.verifier import VerifiedPayment


@checkout.value_object(part_of="Order")
class ShopperContact:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=255)
    mobile = String(max_length=20)


@checkout.value_object(part_of="Order")
class OrderAddress:
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    landmark = String(max_length=255)
    pincode = String(max_length=20)


@checkout.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    image = String(max_length=1024)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    line_total = Float(required=True, min_value=0.0)


@checkout.aggregate
class Order:
    payment_id = String(required=True, max_length=255, unique=True)
    intent_id = String(required=True, max_length=255)
    user_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    cart_id = Identifier()  # Provenance only; items are copied by value
    total = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    contact = ValueObject(ShopperContact)
    address = ValueObject(OrderAddress)
    items = HasMany(OrderItem)
    placed_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, proof, user_id, cart_id, lines, contact, address, currency="INR"):
        """Build an order from a payment proof and snapshots of the checkout.

        Args:
            proof: VerifiedPayment issued by the settlement verifier.
            lines: List of dicts as produced by ``Cart.snapshot_lines()``.
            contact: ContactSnapshot from the shopper directory.
            address: AddressSnapshot from the shopper directory.
        """
        if not isinstance(proof, VerifiedPayment):
            raise PaymentNotVerified("An order can only be placed with a verified payment")
        if not lines:
            raise ValidationError({"cart": ["Cannot place an order for an empty cart"]})

        vendors = {str(line["vendor_id"]) for line in lines}
        if len(vendors) > 1:
            raise ValidationError({"vendor_id": ["An order can only contain products from a single vendor"]})

        now = datetime.now(UTC)
        total = round(sum(round(line["unit_price"] * line["quantity"], 2) for line in lines), 2)

        order = cls(
            payment_id=proof.settlement_id,
            intent_id=proof.intent_id,
            user_id=user_id,
            vendor_id=vendors.pop(),
            cart_id=cart_id,
            total=total,
            currency=currency,
            contact=ShopperContact(name=contact.name, email=contact.email, mobile=contact.mobile),
            address=OrderAddress(
                street=address.street,
                city=address.city,
                state=address.state,
                landmark=address.landmark,
                pincode=address.pincode,
            ),
            placed_at=now,
        )
        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=line["product_id"],
                    vendor_id=line["vendor_id"],
                    title=line["title"],
                    image=line.get("image"),
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                    line_total=round(line["unit_price"] * line["quantity"], 2),
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                payment_id=proof.settlement_id,
                intent_id=proof.intent_id,
                user_id=str(user_id),
                vendor_id=str(order.vendor_id),
                total=total,
                currency=currency,
                item_count=len(lines),
                placed_at=now,
            )
        )
        return order

    def to_dict_summary(self) -> dict:
        return {
            "order_id": str(self.id),
            "payment_id": self.payment_id,
            "intent_id": self.intent_id,
            "user_id": str(self.user_id),
            "vendor_id": str(self.vendor_id),
            "total": self.total,
            "currency": self.currency,
            "contact": {
                "name": self.contact.name,
                "email": self.contact.email,
                "mobile": self.contact.mobile,
            },
            "address": {
                "street": self.address.street,
                "city": self.address.city,
                "state": self.address.state,
                "landmark": self.address.landmark,
                "pincode": self.address.pincode,
            },
            "items": [
                {
                    "product_id": str(item.product_id),
                    "vendor_id": str(item.vendor_id),
                    "title": item.title,
                    "image": item.image,
                    "unit_price": item.unit_price,
                    "quantity": item.quantity,
                    "line_total": item.line_total,
                }
                for item in self.items
            ],
            "placed_at": self.placed_at.isoformat() if self.placed_at else None,
        }
