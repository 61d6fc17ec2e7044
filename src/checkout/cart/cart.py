"""Cart aggregate: one active, single-vendor cart per shopper.

The cart copies price, title and vendor from the catalogue onto each line
when the product is added. Line totals and the grand total are derived: they
are rebuilt from scratch after every change and never accepted from callers.

Invariants:
    - every line belongs to the same vendor (``vendor_id``)
    - ``grand_total`` equals the sum of ``unit_price * quantity`` over all lines
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from checkout.cart.events import (
    CartCleared,
    CartLineAdded,
    CartLineQuantityUpdated,
    CartLineRemoved,
    DeliveryAddressSelected,
)
from checkout.domain import checkout
from checkout.exceptions import InvalidQuantity, VendorConflict


def line_total(unit_price: float, quantity: int) -> float:
    return round((unit_price or 0.0) * (quantity or 0), 2)


@checkout.value_object(part_of="Cart")
class DeliveryAddress:
    """Snapshot of the saved address the shopper picked for this cart."""

    address_id = Identifier(required=True)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    landmark = String(max_length=255)
    pincode = String(max_length=20)


@checkout.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    title = String(required=True, max_length=255)
    image = String(max_length=1024)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    line_total = Float(default=0.0)
    added_at = DateTime()


@checkout.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    vendor_id = Identifier()  # Established by the first line, cleared when the cart empties
    lines = HasMany(CartLine)
    grand_total = Float(default=0.0)
    delivery_address = ValueObject(DeliveryAddress)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def lines_must_share_one_vendor(self):
        vendors = {str(line.vendor_id) for line in self.lines}
        if len(vendors) > 1:
            raise VendorConflict({"vendor_id": ["A cart can only hold products from a single vendor"]})

    @invariant.post
    def grand_total_must_match_lines(self):
        expected = round(sum(line_total(line.unit_price, line.quantity) for line in self.lines), 2)
        if abs((self.grand_total or 0.0) - expected) > 0.005:
            raise ValidationError({"grand_total": ["Grand total must equal the sum of line totals"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            grand_total=0.0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------
    def recalculate(self) -> float:
        """Rebuild every line total and the grand total from unit prices and quantities."""
        total = 0.0
        for line in self.lines:
            line.line_total = line_total(line.unit_price, line.quantity)
            total += line.line_total
        self.grand_total = round(total, 2)
        self.vendor_id = str(self.lines[0].vendor_id) if self.lines else None
        return self.grand_total

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def find_line(self, line_id) -> CartLine:
        line = next((line for line in self.lines if str(line.id) == str(line_id)), None)
        if line is None:
            raise ObjectNotFoundError(f"Line {line_id} not found in cart")
        return line

    def add_line(self, product_id, vendor_id, title, unit_price, image=None, quantity=1):
        """Add a product, or increase its quantity when it is already in the cart."""
        if quantity is None or quantity < 1:
            raise InvalidQuantity({"quantity": ["Quantity must be at least 1"]})

        if self.lines:
            established_vendor = str(self.lines[0].vendor_id)
            if established_vendor != str(vendor_id):
                raise VendorConflict(
                    {"vendor_id": [f"Cart already holds products from vendor {established_vendor}; start a new cart"]}
                )

        now = datetime.now(UTC)
        existing = next((line for line in self.lines if str(line.product_id) == str(product_id)), None)

        with atomic_change(self):
            if existing:
                existing.quantity += quantity
                line = existing
            else:
                line = CartLine(
                    product_id=product_id,
                    vendor_id=vendor_id,
                    title=title,
                    image=image,
                    unit_price=unit_price,
                    quantity=quantity,
                    line_total=line_total(unit_price, quantity),
                    added_at=now,
                )
                self.add_lines(line)

            self.recalculate()
            self.updated_at = now

        self.raise_(
            CartLineAdded(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                line_id=str(line.id),
                product_id=str(product_id),
                vendor_id=str(vendor_id),
                quantity=quantity,
                grand_total=self.grand_total,
            )
        )
        return line

    def update_line_quantity(self, line_id, quantity):
        """Set a line's quantity. Zero removes the line; negatives are refused."""
        if quantity is None or quantity < 0:
            raise InvalidQuantity({"quantity": ["Quantity cannot be negative"]})

        line = self.find_line(line_id)
        if quantity == 0:
            self.remove_line(line_id)
            return

        previous_quantity = line.quantity
        with atomic_change(self):
            line.quantity = quantity
            self.recalculate()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineQuantityUpdated(
                cart_id=str(self.id),
                line_id=str(line_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                grand_total=self.grand_total,
            )
        )

    def remove_line(self, line_id):
        line = self.find_line(line_id)
        product_id = str(line.product_id)

        with atomic_change(self):
            self.remove_lines(line)
            self.recalculate()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartLineRemoved(
                cart_id=str(self.id),
                line_id=str(line_id),
                product_id=product_id,
                grand_total=self.grand_total,
            )
        )

    def select_delivery_address(self, address):
        self.delivery_address = DeliveryAddress(
            address_id=address.address_id,
            street=address.street,
            city=address.city,
            state=address.state,
            landmark=address.landmark,
            pincode=address.pincode,
        )
        self.updated_at = datetime.now(UTC)

        self.raise_(
            DeliveryAddressSelected(
                cart_id=str(self.id),
                address_id=str(address.address_id),
            )
        )

    def clear(self, reason="checked_out"):
        """Drop every line. The cart itself stays, ready for the next order."""
        lines = list(self.lines)
        with atomic_change(self):
            for line in lines:
                self.remove_lines(line)
            self.recalculate()
            self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                reason=reason,
                lines_cleared=len(lines),
            )
        )

    # -------------------------------------------------------------------
    # Read helpers
    # -------------------------------------------------------------------
    def snapshot_lines(self) -> list[dict]:
        """Copy the current lines by value, for an order."""
        return [
            {
                "product_id": str(line.product_id),
                "vendor_id": str(line.vendor_id),
                "title": line.title,
                "image": line.image,
                "unit_price": line.unit_price,
                "quantity": line.quantity,
                "line_total": line_total(line.unit_price, line.quantity),
            }
            for line in self.lines
        ]

    def to_dict_summary(self) -> dict:
        return {
            "cart_id": str(self.id),
            "user_id": str(self.user_id),
            "vendor_id": str(self.vendor_id) if self.vendor_id else None,
            "lines": [
                {
                    "line_id": str(line.id),
                    "product_id": str(line.product_id),
                    "vendor_id": str(line.vendor_id),
                    "title": line.title,
                    "image": line.image,
                    "unit_price": line.unit_price,
                    "quantity": line.quantity,
                    "line_total": line.line_total,
                }
                for line in self.lines
            ],
            "grand_total": self.grand_total,
            "delivery_address": (
                {
                    "address_id": str(self.delivery_address.address_id),
                    "street": self.delivery_address.street,
                    "city": self.delivery_address.city,
                    "state": self.delivery_address.state,
                    "landmark": self.delivery_address.landmark,
                    "pincode": self.delivery_address.pincode,
                }
                if self.delivery_address
                else None
            ),
        }
