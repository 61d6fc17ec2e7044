"""FastAPI routes for the Checkout domain: cart, payments and orders.

Every route acts on behalf of the shopper named in the ``X-User-Id`` header.
"""

import json
import os

from fastapi import APIRouter, Depends, Header, HTTPException
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from checkout.api.schemas import (
    AddToCartRequest,
    CartResponse,
    CommitOrderRequest,
    ConfigureGatewayRequest,
    CreateIntentRequest,
    GatewayConfigResponse,
    IntentResponse,
    OrderListResponse,
    OrderResponse,
    UpdateCartQuantityRequest,
    VerifiedPaymentResponse,
    VerifySettlementRequest,
)
from checkout.cart.address import SelectDeliveryAddress
from checkout.cart.items import AddToCart, RemoveFromCart, UpdateCartQuantity
from checkout.cart.view import view_cart
from checkout.gateway import get_gateway
from checkout.gateway.fake_adapter import FakeGateway
from checkout.order.history import get_order, list_orders
from checkout.order.placement import CommitOrder
from checkout.payment.intent import CreatePaymentIntent
from checkout.payment.settlement import verify_settlement
from checkout.utils.logging import bind_request_context
from checkout.utils.retry import process_with_retry


async def current_shopper(x_user_id: str = Header(default="")) -> str:
    """Resolve the authenticated shopper, or refuse the request."""
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    bind_request_context(user_id=user_id)
    return user_id


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def get_cart(user_id: str = Depends(current_shopper)) -> CartResponse:
    return CartResponse(**view_cart(user_id))


@cart_router.post("/items", response_model=CartResponse)
async def add_cart_item(body: AddToCartRequest, user_id: str = Depends(current_shopper)) -> CartResponse:
    command = AddToCart(
        user_id=user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    return CartResponse(**await process_with_retry(command))


@cart_router.put("/items/{line_id}", response_model=CartResponse)
async def update_cart_item(
    line_id: str,
    body: UpdateCartQuantityRequest,
    user_id: str = Depends(current_shopper),
) -> CartResponse:
    command = UpdateCartQuantity(
        user_id=user_id,
        line_id=line_id,
        quantity=body.quantity,
    )
    return CartResponse(**await process_with_retry(command))


@cart_router.delete("/items/{line_id}", response_model=CartResponse)
async def remove_cart_item(line_id: str, user_id: str = Depends(current_shopper)) -> CartResponse:
    command = RemoveFromCart(user_id=user_id, line_id=line_id)
    return CartResponse(**await process_with_retry(command))


@cart_router.put("/address/{address_id}", response_model=CartResponse)
async def select_delivery_address(address_id: str, user_id: str = Depends(current_shopper)) -> CartResponse:
    command = SelectDeliveryAddress(user_id=user_id, address_id=address_id)
    return CartResponse(**await process_with_retry(command))


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/payments", tags=["payments"])


@payment_router.post("/intents", status_code=201, response_model=IntentResponse)
async def create_intent(body: CreateIntentRequest, user_id: str = Depends(current_shopper)) -> IntentResponse:
    amount = body.amount
    if amount is None:
        amount = view_cart(user_id)["grand_total"]
        if not amount:
            raise ValidationError({"cart": ["Cannot pay for an empty cart"]})

    command = CreatePaymentIntent(
        user_id=user_id,
        amount=amount,
        currency=body.currency,
        receipt=body.receipt,
        notes=json.dumps(body.notes) if body.notes else None,
    )
    record = current_domain.process(command, asynchronous=False)
    return IntentResponse(intent_id=record["id"], gateway_record=record)


@payment_router.post("/verify", response_model=VerifiedPaymentResponse)
async def verify_payment(
    body: VerifySettlementRequest,
    user_id: str = Depends(current_shopper),
) -> VerifiedPaymentResponse:
    proof = verify_settlement(
        intent_id=body.intent_id,
        settlement_id=body.settlement_id,
        signature=body.signature,
        user_id=user_id,
    )
    return VerifiedPaymentResponse(intent_id=proof.intent_id, settlement_id=proof.settlement_id)


@payment_router.post("/gateway/configure", response_model=GatewayConfigResponse)
async def configure_gateway(body: ConfigureGatewayRequest) -> GatewayConfigResponse:
    """Configure the FakeGateway behavior (non-production only)."""
    if os.environ.get("PROTEAN_ENV") == "production":
        raise HTTPException(status_code=403, detail="Gateway configuration not available in production")

    gateway = get_gateway()
    if not isinstance(gateway, FakeGateway):
        raise HTTPException(status_code=400, detail="Gateway configuration only available for FakeGateway")

    gateway.configure(
        should_succeed=body.should_succeed,
        failure_reason=body.failure_reason,
    )
    return GatewayConfigResponse(
        gateway=type(gateway).__name__,
        should_succeed=gateway.should_succeed,
        failure_reason=gateway.failure_reason,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def commit_order(body: CommitOrderRequest, user_id: str = Depends(current_shopper)) -> OrderResponse:
    """Commit the order for a settlement verified through ``/payments/verify``."""
    command = CommitOrder(
        intent_id=body.intent_id,
        settlement_id=body.settlement_id,
        cart_id=body.cart_id,
        user_id=user_id,
        address_id=body.address_id,
        vendor_id=body.vendor_id,
        total=body.total,
    )
    return OrderResponse(**current_domain.process(command, asynchronous=False))


@order_router.get("", response_model=OrderListResponse)
async def get_orders(user_id: str = Depends(current_shopper)) -> OrderListResponse:
    return OrderListResponse(orders=[OrderResponse(**order) for order in list_orders(user_id)])


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(order_id: str, user_id: str = Depends(current_shopper)) -> OrderResponse:
    return OrderResponse(**get_order(user_id, order_id))
