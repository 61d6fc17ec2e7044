"""Order placement: command, handler and the proof-taking entry point.

The order and the emptied cart are persisted by the same unit of work, so a
failure anywhere leaves both the cart and the order store untouched.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from checkout.cart.cart import Cart
from checkout.directory import get_directory
from checkout.domain import checkout
from checkout.exceptions import PaymentNotVerified
from checkout.order.order import Order
from checkout.payment.payment import PaymentAttempt
from checkout.payment.verifier import VerifiedPayment, proof_from_attempt

logger = structlog.get_logger(__name__)

AMOUNT_TOLERANCE = 0.005


@checkout.command(part_of="Order")
class CommitOrder:
    intent_id = String(required=True, max_length=255)
    settlement_id = String(required=True, max_length=255)
    cart_id = Identifier(required=True)
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)
    vendor_id = Identifier()
    total = Float()  # Client's figure; compared, never stored


@checkout.command_handler(part_of=Order)
class CommitOrderHandler:
    @handle(CommitOrder)
    def commit_order(self, command):
        user_id = str(command.user_id)
        order_repo = current_domain.repository_for(Order)

        existing = order_repo.for_payment(command.settlement_id)
        if existing is not None:
            if str(existing.user_id) != user_id:
                raise PaymentNotVerified("Settlement belongs to another shopper")
            logger.info(
                "Order already committed for this payment",
                order_id=str(existing.id),
                payment_id=command.settlement_id,
            )
            return existing.to_dict_summary()

        attempt = current_domain.repository_for(PaymentAttempt).for_intent(command.intent_id)
        if attempt is None or str(attempt.user_id) != user_id:
            raise PaymentNotVerified(f"No verified payment for intent {command.intent_id}")
        proof = proof_from_attempt(attempt)
        if proof.settlement_id != command.settlement_id:
            raise PaymentNotVerified(f"Settlement {command.settlement_id} was not verified for this intent")

        directory = get_directory()
        contact = directory.get_contact(user_id)
        if contact is None:
            raise ObjectNotFoundError(f"Shopper {user_id} not found")
        address = directory.get_address(user_id, str(command.address_id))
        if address is None:
            raise ObjectNotFoundError(f"Address {command.address_id} not found for shopper")

        cart_repo = current_domain.repository_for(Cart)
        cart = cart_repo.get(command.cart_id)
        if str(cart.user_id) != user_id:
            raise ObjectNotFoundError(f"Cart {command.cart_id} not found for shopper")

        lines = cart.snapshot_lines()
        if command.vendor_id and lines and str(command.vendor_id) != str(lines[0]["vendor_id"]):
            raise ValidationError({"vendor_id": ["Vendor does not match the cart"]})

        order = Order.place(
            proof=proof,
            user_id=user_id,
            cart_id=str(cart.id),
            lines=lines,
            contact=contact,
            address=address,
            currency=attempt.currency or "INR",
        )

        if abs(order.total - attempt.amount) > AMOUNT_TOLERANCE:
            logger.warning(
                "Settled amount differs from cart total",
                intent_id=command.intent_id,
                settled_amount=attempt.amount,
                cart_total=order.total,
            )
            raise ValidationError({"total": ["Settled amount does not match the cart total"]})

        if command.total is not None and abs(command.total - order.total) > AMOUNT_TOLERANCE:
            logger.warning(
                "Ignoring client-supplied order total",
                claimed_total=command.total,
                computed_total=order.total,
                user_id=user_id,
            )

        order_repo.add(order)
        cart.clear(reason="checked_out")
        cart_repo.add(cart)

        logger.info(
            "Order committed",
            order_id=str(order.id),
            payment_id=order.payment_id,
            user_id=user_id,
            total=order.total,
        )
        return order.to_dict_summary()


def commit_order(
    proof: VerifiedPayment,
    cart_id: str,
    user_id: str,
    address_id: str,
    vendor_id: str | None = None,
    total: float | None = None,
) -> dict:
    """Write the order for a settlement the caller has just verified."""
    if not isinstance(proof, VerifiedPayment):
        raise PaymentNotVerified("An order can only be committed with a verified payment")
    return current_domain.process(
        CommitOrder(
            intent_id=proof.intent_id,
            settlement_id=proof.settlement_id,
            cart_id=cart_id,
            user_id=user_id,
            address_id=address_id,
            vendor_id=vendor_id,
            total=total,
        ),
        asynchronous=False,
    )
