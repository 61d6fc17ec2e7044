"""Domain events for the PaymentAttempt aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from checkout.domain import checkout


@checkout.event(part_of="PaymentAttempt")
class PaymentIntentCreated:
    """The gateway created an intent and the shopper can now pay it."""

    __version__ = 1

    attempt_id = Identifier(required=True)
    intent_id = String(required=True)
    user_id = Identifier(required=True)
    amount = Float(required=True)
    currency = String(required=True)


@checkout.event(part_of="PaymentAttempt")
class SettlementVerified:
    """A settlement signature matched: the intent has been paid."""

    __version__ = 1

    attempt_id = Identifier(required=True)
    intent_id = String(required=True)
    settlement_id = String(required=True)
    user_id = Identifier(required=True)
    verified_at = DateTime(required=True)


@checkout.event(part_of="PaymentAttempt")
class SettlementRejected:
    """A settlement signature did not match. The attempt is closed for good."""

    __version__ = 1

    attempt_id = Identifier(required=True)
    intent_id = String(required=True)
    settlement_id = String()
    user_id = Identifier(required=True)
    rejected_at = DateTime(required=True)
