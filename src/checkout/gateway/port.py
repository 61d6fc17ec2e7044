"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement.
This enables swapping between FakeGateway (dev/test) and RazorpayGateway
(production) without changing any domain or application code.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class IntentResult:
    """A payment intent as created by the gateway.

    ``raw`` is the gateway's own record, passed back to the shopper's client
    untouched so it can open the gateway's checkout widget.
    """

    intent_id: str
    amount: float
    currency: str
    status: str
    raw: dict = field(default_factory=dict)


@dataclass(frozen=True)
class Settlement:
    """What the gateway hands back after the shopper pays out-of-band."""

    intent_id: str
    settlement_id: str
    signature: str


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_intent(
        self,
        amount: float,
        currency: str,
        receipt: str | None = None,
        notes: dict | None = None,
    ) -> IntentResult:
        """Create a payment intent for ``amount`` (major currency units).

        Raises GatewayError when the gateway is unreachable or refuses the
        request.
        """
        ...
