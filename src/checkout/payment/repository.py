"""Repository for the PaymentAttempt aggregate."""

from checkout.domain import checkout
from checkout.payment.payment import PaymentAttempt


@checkout.repository(part_of=PaymentAttempt)
class PaymentAttemptRepository:
    def for_intent(self, intent_id) -> PaymentAttempt | None:
        attempts = self._dao.query.filter(intent_id=str(intent_id)).all().items
        return self.get(attempts[0].id) if attempts else None
