"""Order history read path."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from checkout.order.order import Order


def list_orders(user_id) -> list[dict]:
    return [order.to_dict_summary() for order in current_domain.repository_for(Order).for_shopper(user_id)]


def get_order(user_id, order_id) -> dict:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(user_id):
        raise ObjectNotFoundError(f"Order {order_id} not found")
    return order.to_dict_summary()
