"""Settlement verification: command, handler and the caller-facing helper.

A rejection has to be remembered even though the caller sees an error, so the
handler records the outcome and returns normally; ``verify_settlement`` turns
a missing proof into ``InvalidSignature`` after the unit of work committed.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from checkout.domain import checkout
from checkout.exceptions import InvalidSignature
from checkout.payment.payment import AttemptStatus, PaymentAttempt
from checkout.payment.verifier import VerifiedPayment, get_verifier

logger = structlog.get_logger(__name__)


@checkout.command(part_of="PaymentAttempt")
class VerifySettlement:
    intent_id = String(required=True, max_length=255)
    settlement_id = String(required=True, max_length=255)
    signature = String(required=True, max_length=512)
    user_id = Identifier()  # Shopper presenting the settlement; unset for trusted callers


@checkout.command_handler(part_of=PaymentAttempt)
class VerifySettlementHandler:
    @handle(VerifySettlement)
    def verify_settlement(self, command) -> VerifiedPayment | None:
        repo = current_domain.repository_for(PaymentAttempt)
        attempt = repo.for_intent(command.intent_id)
        if attempt is None:
            raise ObjectNotFoundError(f"No payment intent {command.intent_id}")

        # Another shopper's intent is reported as missing and left untouched
        if command.user_id and str(attempt.user_id) != str(command.user_id):
            logger.warning(
                "Settlement offered for another shopper's intent",
                intent_id=command.intent_id,
                user_id=str(command.user_id),
            )
            raise ObjectNotFoundError(f"No payment intent {command.intent_id}")

        if attempt.status == AttemptStatus.REJECTED.value:
            logger.warning(
                "Refusing to re-verify a rejected settlement",
                intent_id=command.intent_id,
                settlement_id=command.settlement_id,
            )
            return None

        verifier = get_verifier()
        authentic = verifier.is_authentic(command.intent_id, command.settlement_id, command.signature)

        if attempt.status == AttemptStatus.VERIFIED.value:
            if authentic and attempt.settlement_id == command.settlement_id:
                return verifier.verify(command.intent_id, command.settlement_id, command.signature)
            logger.warning(
                "Second settlement offered for an already verified intent",
                intent_id=command.intent_id,
                settlement_id=command.settlement_id,
            )
            return None

        if not authentic:
            attempt.mark_rejected(command.settlement_id)
            repo.add(attempt)
            logger.warning(
                "Settlement rejected; flagging as potential fraud",
                intent_id=command.intent_id,
                settlement_id=command.settlement_id,
                user_id=str(attempt.user_id),
            )
            return None

        proof = verifier.verify(command.intent_id, command.settlement_id, command.signature)
        attempt.mark_verified(command.settlement_id)
        repo.add(attempt)
        logger.info(
            "Settlement verified",
            intent_id=command.intent_id,
            settlement_id=command.settlement_id,
            user_id=str(attempt.user_id),
        )
        return proof


def verify_settlement(intent_id: str, settlement_id: str, signature: str, user_id: str | None = None) -> VerifiedPayment:
    """Verify a settlement and return its proof, or raise InvalidSignature.

    When ``user_id`` is given, only the shopper who created the intent may
    settle it; anyone else gets ``ObjectNotFoundError``.
    """
    proof = current_domain.process(
        VerifySettlement(
            intent_id=intent_id,
            settlement_id=settlement_id,
            signature=signature,
            user_id=user_id,
        ),
        asynchronous=False,
    )
    if proof is None:
        raise InvalidSignature({"signature": ["Settlement signature is not valid"]})
    return proof
