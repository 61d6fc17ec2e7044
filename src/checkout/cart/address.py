"""Delivery address selection: command and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from checkout.cart.cart import Cart
from checkout.cart.items import ensure_shopper, load_cart
from checkout.directory import get_directory
from checkout.domain import checkout


@checkout.command(part_of="Cart")
class SelectDeliveryAddress:
    """Attach one of the shopper's saved addresses to their cart."""

    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@checkout.command_handler(part_of=Cart)
class SelectDeliveryAddressHandler:
    @handle(SelectDeliveryAddress)
    def select_delivery_address(self, command):
        ensure_shopper(command.user_id)

        address = get_directory().get_address(str(command.user_id), str(command.address_id))
        if address is None:
            raise ObjectNotFoundError(f"Address {command.address_id} not found for shopper")

        cart = load_cart(command.user_id)
        cart.select_delivery_address(address)
        current_domain.repository_for(Cart).add(cart)
        return cart.to_dict_summary()
