"""Repository for the Cart aggregate."""

from checkout.cart.cart import Cart
from checkout.domain import checkout


@checkout.repository(part_of=Cart)
class CartRepository:
    """Carts are addressed by the shopper who owns them."""

    def for_shopper(self, user_id) -> Cart | None:
        """Return the shopper's cart, or None when they never added anything."""
        carts = self._dao.query.filter(user_id=str(user_id)).all().items
        return self.get(carts[0].id) if carts else None
