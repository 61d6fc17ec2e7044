"""Map checkout errors onto HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from checkout.exceptions import (
    GatewayError,
    InvalidQuantity,
    InvalidSignature,
    PaymentNotVerified,
    StoreUnavailable,
    VendorConflict,
)

logger = structlog.get_logger(__name__)


def _messages(exc: Exception) -> dict:
    messages = getattr(exc, "messages", None)
    return messages if isinstance(messages, dict) else {"error": [str(exc)]}


def register_error_handlers(app: FastAPI) -> None:
    """Install the HTTP mapping for every checkout error."""

    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": _messages(exc)})

    @app.exception_handler(VendorConflict)
    async def vendor_conflict(request: Request, exc: VendorConflict):
        return JSONResponse(status_code=409, content={"error": _messages(exc)})

    @app.exception_handler(InvalidQuantity)
    async def invalid_quantity(request: Request, exc: InvalidQuantity):
        return JSONResponse(status_code=422, content={"error": _messages(exc)})

    @app.exception_handler(InvalidSignature)
    async def invalid_signature(request: Request, exc: InvalidSignature):
        return JSONResponse(status_code=400, content={"error": _messages(exc)})

    @app.exception_handler(ObjectNotFoundError)
    async def not_found(request: Request, exc: ObjectNotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(PaymentNotVerified)
    async def payment_not_verified(request: Request, exc: PaymentNotVerified):
        return JSONResponse(status_code=403, content={"error": str(exc)})

    @app.exception_handler(GatewayError)
    async def gateway_error(request: Request, exc: GatewayError):
        logger.warning("Payment gateway failure", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=502, content={"error": "Payment gateway error", "detail": str(exc)})

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable(request: Request, exc: StoreUnavailable):
        logger.warning("Store unavailable", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=503, content={"error": "Service temporarily unavailable"})

    @app.exception_handler(Exception)
    async def server_fault(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})
