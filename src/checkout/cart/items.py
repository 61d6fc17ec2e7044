"""Cart line management: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from checkout.cart.cart import Cart
from checkout.catalogue import get_catalogue
from checkout.directory import get_directory
from checkout.domain import checkout

logger = structlog.get_logger(__name__)


@checkout.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(default=1)


@checkout.command(part_of="Cart")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)
    quantity = Integer(required=True)


@checkout.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    line_id = Identifier(required=True)


def ensure_shopper(user_id) -> None:
    if get_directory().get_contact(str(user_id)) is None:
        raise ObjectNotFoundError(f"Shopper {user_id} not found")


def load_cart(user_id) -> Cart:
    cart = current_domain.repository_for(Cart).for_shopper(user_id)
    if cart is None:
        raise ObjectNotFoundError(f"No cart found for shopper {user_id}")
    return cart


@checkout.command_handler(part_of=Cart)
class ManageCartLinesHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        ensure_shopper(command.user_id)

        product = get_catalogue().get_product(str(command.product_id))
        if product is None:
            raise ObjectNotFoundError(f"Product {command.product_id} not found")

        repo = current_domain.repository_for(Cart)
        cart = repo.for_shopper(command.user_id)
        if cart is None:
            logger.info("Creating cart on first add", user_id=str(command.user_id))
            cart = Cart.create(user_id=command.user_id)

        cart.add_line(
            product_id=product.product_id,
            vendor_id=product.vendor_id,
            title=product.title,
            unit_price=product.price,
            image=product.image,
            quantity=command.quantity if command.quantity is not None else 1,
        )
        repo.add(cart)
        return cart.to_dict_summary()

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        ensure_shopper(command.user_id)

        cart = load_cart(command.user_id)
        cart.update_line_quantity(
            line_id=command.line_id,
            quantity=command.quantity,
        )
        current_domain.repository_for(Cart).add(cart)
        return cart.to_dict_summary()

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        ensure_shopper(command.user_id)

        cart = load_cart(command.user_id)
        cart.remove_line(line_id=command.line_id)
        current_domain.repository_for(Cart).add(cart)
        return cart.to_dict_summary()
