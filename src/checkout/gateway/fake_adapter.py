"""Configurable fake payment gateway for development and testing.

This adapter simulates a real payment gateway without any external calls.
It can be configured at runtime to succeed or fail, and it can settle an
intent the way the real gateway does after the shopper pays: by returning a
settlement id signed with the shared signing secret.
"""

from uuid import uuid4

from checkout.exceptions import GatewayError
from checkout.gateway.port import IntentResult, PaymentGateway, Settlement
from checkout.payment.verifier import compute_signature, get_signing_secret


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self, signing_secret: str | None = None) -> None:
        self.signing_secret = signing_secret or get_signing_secret()
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.calls: list[dict] = []
        self.intents: dict[str, IntentResult] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Gateway unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_intent(
        self,
        amount: float,
        currency: str,
        receipt: str | None = None,
        notes: dict | None = None,
    ) -> IntentResult:
        call = {
            "method": "create_intent",
            "amount": amount,
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        self.calls.append(call)

        if not self.should_succeed:
            raise GatewayError(self.failure_reason)
        if amount is None or amount <= 0:
            raise GatewayError(f"Invalid intent amount: {amount}")

        intent_id = f"fake_order_{uuid4().hex[:14]}"
        raw = {
            "id": intent_id,
            "entity": "order",
            "amount": int(round(amount * 100)),
            "amount_paid": 0,
            "amount_due": int(round(amount * 100)),
            "currency": currency,
            "receipt": receipt,
            "status": "created",
            "attempts": 0,
            "notes": notes or {},
        }
        intent = IntentResult(
            intent_id=intent_id,
            amount=amount,
            currency=currency,
            status="created",
            raw=raw,
        )
        self.intents[intent_id] = intent
        return intent

    def settle(self, intent_id: str) -> Settlement:
        """Simulate the shopper paying ``intent_id`` and the gateway signing the result."""
        settlement_id = f"fake_pay_{uuid4().hex[:14]}"
        return Settlement(
            intent_id=intent_id,
            settlement_id=settlement_id,
            signature=compute_signature(self.signing_secret, intent_id, settlement_id),
        )
