"""Pydantic request/response schemas for the Checkout API.

These are external contracts (anti-corruption layer), kept apart from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CartLineSchema(BaseModel):
    line_id: str
    product_id: str
    vendor_id: str
    title: str
    image: str | None = None
    unit_price: float
    quantity: int
    line_total: float


class AddressSchema(BaseModel):
    address_id: str | None = None
    street: str
    city: str
    state: str | None = None
    landmark: str | None = None
    pincode: str | None = None


class ContactSchema(BaseModel):
    name: str
    email: str
    mobile: str | None = None


class OrderItemSchema(BaseModel):
    product_id: str
    vendor_id: str
    title: str
    image: str | None = None
    unit_price: float
    quantity: int
    line_total: float


# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1

    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-biryani-001", "quantity": 1}]}}


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartResponse(BaseModel):
    cart_id: str
    user_id: str
    vendor_id: str | None = None
    lines: list[CartLineSchema] = Field(default_factory=list)
    grand_total: float = 0.0
    delivery_address: AddressSchema | None = None


# ---------------------------------------------------------------------------
# Payment Schemas
# ---------------------------------------------------------------------------
class CreateIntentRequest(BaseModel):
    amount: float | None = Field(default=None, gt=0)  # Defaults to the cart's grand total
    currency: str | None = None
    receipt: str | None = None
    notes: dict | None = None


class IntentResponse(BaseModel):
    intent_id: str
    gateway_record: dict


class VerifySettlementRequest(BaseModel):
    intent_id: str
    settlement_id: str
    signature: str


class VerifiedPaymentResponse(BaseModel):
    status: str = "verified"
    intent_id: str
    settlement_id: str


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool = True
    failure_reason: str = "Gateway unavailable"


class GatewayConfigResponse(BaseModel):
    gateway: str
    should_succeed: bool
    failure_reason: str


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class CommitOrderRequest(BaseModel):
    intent_id: str
    settlement_id: str
    cart_id: str
    address_id: str
    vendor_id: str | None = None
    total: float | None = None


class OrderResponse(BaseModel):
    order_id: str
    payment_id: str
    intent_id: str
    user_id: str
    vendor_id: str
    total: float
    currency: str
    contact: ContactSchema
    address: AddressSchema
    items: list[OrderItemSchema]
    placed_at: str | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
