"""Repository for the Order aggregate."""

from checkout.domain import checkout
from checkout.order.order import Order


@checkout.repository(part_of=Order)
class OrderRepository:
    def for_payment(self, payment_id) -> Order | None:
        """Return the order written for a settlement, if there is one."""
        orders = self._dao.query.filter(payment_id=str(payment_id)).all().items
        return self.get(orders[0].id) if orders else None

    def for_shopper(self, user_id) -> list[Order]:
        """All of a shopper's orders, newest first."""
        orders = self._dao.query.filter(user_id=str(user_id)).order_by("-placed_at").limit(None).all().items
        return [self.get(order.id) for order in orders]
