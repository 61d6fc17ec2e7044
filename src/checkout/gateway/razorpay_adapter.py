"""Razorpay payment gateway adapter.

Creates Razorpay orders (the gateway's payment intents) over the REST API.
Amounts travel in the smallest currency unit, so a 249.50 INR cart becomes
24950 paise. Settlement signatures are verified by SettlementVerifier with
the same key secret; the adapter itself never sees them.
"""

import os

import requests
import structlog

from checkout.exceptions import GatewayError
from checkout.gateway.port import IntentResult, PaymentGateway

logger = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://api.razorpay.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class RazorpayGateway(PaymentGateway):
    """Production Razorpay gateway adapter."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.key_id = key_id
        self.key_secret = key_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_env(cls) -> "RazorpayGateway":
        key_id = os.environ.get("RAZORPAY_KEY_ID")
        key_secret = os.environ.get("RAZORPAY_KEY_SECRET")
        if not key_id or not key_secret:
            raise GatewayError("RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET must be set")
        return cls(
            key_id=key_id,
            key_secret=key_secret,
            base_url=os.environ.get("RAZORPAY_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.environ.get("GATEWAY_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
        )

    def create_intent(
        self,
        amount: float,
        currency: str,
        receipt: str | None = None,
        notes: dict | None = None,
    ) -> IntentResult:
        if amount is None or amount <= 0:
            raise GatewayError(f"Invalid intent amount: {amount}")

        payload = {
            "amount": int(round(amount * 100)),
            "currency": currency,
            "notes": notes or {},
        }
        if receipt:
            payload["receipt"] = receipt

        try:
            response = self.session.post(
                f"{self.base_url}/v1/orders",
                json=payload,
                auth=(self.key_id, self.key_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("Razorpay order creation failed", error=str(exc))
            raise GatewayError(f"Payment gateway unreachable: {exc}") from exc

        if response.status_code >= 400:
            try:
                description = response.json().get("error", {}).get("description", response.text)
            except ValueError:
                description = response.text
            logger.error(
                "Razorpay rejected order creation",
                status_code=response.status_code,
                description=description,
            )
            raise GatewayError(f"Payment gateway rejected the intent: {description}")

        data = response.json()
        return IntentResult(
            intent_id=data["id"],
            amount=data["amount"] / 100,
            currency=data.get("currency", currency),
            status=data.get("status", "created"),
            raw=data,
        )
