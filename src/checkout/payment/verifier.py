"""Settlement signature verification.

After a shopper pays out-of-band, the gateway returns the intent id, its own
settlement id and a signature: the hex HMAC-SHA256 of
``"<intent_id>|<settlement_id>"`` keyed with the shared signing secret. The
verifier recomputes that digest and compares it in constant time.

A successful verification yields a ``VerifiedPayment``. It is the only thing
the order writer accepts as evidence that money moved, and it cannot be built
outside this module.
"""

import hashlib
import hmac
import os
from dataclasses import dataclass, field

import structlog

from checkout.exceptions import InvalidSignature, PaymentNotVerified

logger = structlog.get_logger(__name__)

DEV_SIGNING_SECRET = "dev-signing-secret"

_PROOF_KEY = object()


def get_signing_secret() -> str:
    """Load the shared signing secret from the environment.

    ``PAYMENT_SIGNING_SECRET`` wins; the Razorpay key secret is the fallback
    because Razorpay signs settlements with it. Outside production a fixed
    development secret is used when neither is set.
    """
    secret = os.environ.get("PAYMENT_SIGNING_SECRET") or os.environ.get("RAZORPAY_KEY_SECRET")
    if secret:
        return secret
    if os.environ.get("PROTEAN_ENV") == "production":
        raise ValueError("PAYMENT_SIGNING_SECRET must be set in production")
    return DEV_SIGNING_SECRET


def compute_signature(secret: str, intent_id: str, settlement_id: str) -> str:
    message = f"{intent_id}|{settlement_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


@dataclass(frozen=True)
class VerifiedPayment:
    """Proof that ``settlement_id`` authentically settled ``intent_id``."""

    intent_id: str
    settlement_id: str
    _key: object = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        if self._key is not _PROOF_KEY:
            raise PaymentNotVerified("Payment proofs can only be issued by the settlement verifier")


def proof_from_attempt(attempt) -> VerifiedPayment:
    """Re-issue the proof for a previously verified PaymentAttempt."""
    from checkout.payment.payment import AttemptStatus

    if attempt.status != AttemptStatus.VERIFIED.value or not attempt.settlement_id:
        raise PaymentNotVerified(f"Payment for intent {attempt.intent_id} has not been verified")
    return VerifiedPayment(
        intent_id=attempt.intent_id,
        settlement_id=attempt.settlement_id,
        _key=_PROOF_KEY,
    )


class SettlementVerifier:
    """Stateless HMAC check with an explicitly supplied secret."""

    def __init__(self, secret: str) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret

    def expected_signature(self, intent_id: str, settlement_id: str) -> str:
        return compute_signature(self._secret, intent_id, settlement_id)

    def is_authentic(self, intent_id: str, settlement_id: str, signature: str) -> bool:
        expected = self.expected_signature(intent_id, settlement_id)
        return hmac.compare_digest(expected.encode(), (signature or "").encode())

    def verify(self, intent_id: str, settlement_id: str, signature: str) -> VerifiedPayment:
        if not self.is_authentic(intent_id, settlement_id, signature):
            logger.warning(
                "Rejected settlement with a forged or corrupted signature",
                intent_id=intent_id,
                settlement_id=settlement_id,
            )
            raise InvalidSignature({"signature": ["Settlement signature is not valid"]})
        return VerifiedPayment(intent_id=intent_id, settlement_id=settlement_id, _key=_PROOF_KEY)


_current_verifier: SettlementVerifier | None = None


def get_verifier() -> SettlementVerifier:
    """Return the process-wide verifier, built once from the environment."""
    global _current_verifier
    if _current_verifier is None:
        _current_verifier = SettlementVerifier(get_signing_secret())
    return _current_verifier


def set_verifier(verifier: SettlementVerifier) -> None:
    global _current_verifier
    _current_verifier = verifier


def reset_verifier() -> None:
    global _current_verifier
    _current_verifier = None
