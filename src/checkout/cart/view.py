"""Cart read path: the shopper's current cart and its grand total."""

from checkout.cart.items import ensure_shopper, load_cart


def view_cart(user_id) -> dict:
    ensure_shopper(user_id)
    return load_cart(user_id).to_dict_summary()
