"""Payment intent creation: command and handler.

Asks the gateway for an intent and opens a PaymentAttempt for it.
"""

import json
import os

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.gateway import get_gateway
from checkout.payment.payment import PaymentAttempt

logger = structlog.get_logger(__name__)


def default_currency() -> str:
    return os.environ.get("DEFAULT_CURRENCY", "INR")


@checkout.command(part_of="PaymentAttempt")
class CreatePaymentIntent:
    user_id = Identifier(required=True)
    amount = Float(required=True)
    currency = String(max_length=3)
    receipt = String(max_length=255)
    notes = Text()  # JSON object passed through to the gateway


@checkout.command_handler(part_of=PaymentAttempt)
class CreatePaymentIntentHandler:
    @handle(CreatePaymentIntent)
    def create_payment_intent(self, command):
        gateway = get_gateway()
        currency = command.currency or default_currency()
        notes = json.loads(command.notes) if command.notes else {}
        notes.setdefault("user_id", str(command.user_id))

        intent = gateway.create_intent(
            amount=command.amount,
            currency=currency,
            receipt=command.receipt,
            notes=notes,
        )

        attempt = PaymentAttempt.create(
            intent_id=intent.intent_id,
            user_id=command.user_id,
            amount=intent.amount,
            currency=intent.currency,
            receipt=command.receipt,
            gateway_name=type(gateway).__name__,
        )
        current_domain.repository_for(PaymentAttempt).add(attempt)

        logger.info(
            "Payment intent created",
            intent_id=intent.intent_id,
            user_id=str(command.user_id),
            amount=intent.amount,
            currency=intent.currency,
        )
        return dict(intent.raw)
