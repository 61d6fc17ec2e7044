"""PaymentAttempt aggregate: verifier state for one gateway intent.

The gateway owns the intent itself. This aggregate only remembers enough to
enforce the verification state machine and to let the order writer check
that a settlement was verified for the right shopper and amount.

State Machine:
    CREATED → VERIFIED   (signature matched; terminal)
    CREATED → REJECTED   (signature mismatch; terminal, no second attempt)
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from checkout.domain import checkout
from checkout.payment.events import PaymentIntentCreated, SettlementRejected, SettlementVerified


class AttemptStatus(Enum):
    CREATED = "Created"
    VERIFIED = "Verified"
    REJECTED = "Rejected"


_VALID_TRANSITIONS = {
    AttemptStatus.CREATED: {AttemptStatus.VERIFIED, AttemptStatus.REJECTED},
    AttemptStatus.VERIFIED: set(),  # Terminal
    AttemptStatus.REJECTED: set(),  # Terminal
}


@checkout.aggregate
class PaymentAttempt:
    intent_id = String(required=True, max_length=255, unique=True)
    user_id = Identifier(required=True)
    amount = Float(required=True, min_value=0.0)
    currency = String(max_length=3, default="INR")
    receipt = String(max_length=255)
    gateway_name = String(max_length=50)
    status = String(choices=AttemptStatus, default=AttemptStatus.CREATED.value)
    settlement_id = String(max_length=255)
    created_at = DateTime()
    settled_at = DateTime()

    @classmethod
    def create(cls, intent_id, user_id, amount, currency, receipt=None, gateway_name=None):
        attempt = cls(
            intent_id=intent_id,
            user_id=user_id,
            amount=amount,
            currency=currency,
            receipt=receipt,
            gateway_name=gateway_name,
            status=AttemptStatus.CREATED.value,
            created_at=datetime.now(UTC),
        )
        attempt.raise_(
            PaymentIntentCreated(
                attempt_id=str(attempt.id),
                intent_id=intent_id,
                user_id=str(user_id),
                amount=amount,
                currency=currency,
            )
        )
        return attempt

    @property
    def is_open(self) -> bool:
        return self.status == AttemptStatus.CREATED.value

    def _assert_can_transition(self, target_status: AttemptStatus) -> None:
        current = AttemptStatus(self.status)
        if target_status not in _VALID_TRANSITIONS[current]:
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def mark_verified(self, settlement_id: str) -> None:
        self._assert_can_transition(AttemptStatus.VERIFIED)
        now = datetime.now(UTC)
        self.status = AttemptStatus.VERIFIED.value
        self.settlement_id = settlement_id
        self.settled_at = now

        self.raise_(
            SettlementVerified(
                attempt_id=str(self.id),
                intent_id=self.intent_id,
                settlement_id=settlement_id,
                user_id=str(self.user_id),
                verified_at=now,
            )
        )

    def mark_rejected(self, settlement_id: str | None) -> None:
        self._assert_can_transition(AttemptStatus.REJECTED)
        now = datetime.now(UTC)
        self.status = AttemptStatus.REJECTED.value
        self.settlement_id = settlement_id
        self.settled_at = now

        self.raise_(
            SettlementRejected(
                attempt_id=str(self.id),
                intent_id=self.intent_id,
                settlement_id=settlement_id,
                user_id=str(self.user_id),
                rejected_at=now,
            )
        )
