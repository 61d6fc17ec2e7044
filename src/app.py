"""FoodHub Checkout FastAPI application.

Web server for the shopper-facing checkout flow: the single-vendor cart,
payment intent creation and settlement verification, and order commit.
Commands are processed synchronously within each HTTP request.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

import os
from uuid import uuid4

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from checkout.domain import checkout  # noqa: E402
from checkout.utils.logging import bind_request_context, clear_request_context, configure_logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

configure_logging()
checkout.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="FoodHub Checkout API",
    description="Multi-vendor food ordering: cart, payment verification and orders",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.environ.get("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the checkout domain context and tag log lines with a request id."""
    clear_request_context()
    bind_request_context(
        request_id=request.headers.get("X-Request-Id") or uuid4().hex,
        path=request.url.path,
    )
    try:
        with checkout.domain_context():
            response = await call_next(request)
    finally:
        clear_request_context()
    return response


# ---------------------------------------------------------------------------
# Routers and error handlers
# ---------------------------------------------------------------------------
from checkout.api.errors import register_error_handlers  # noqa: E402
from checkout.api.routes import cart_router, order_router, payment_router  # noqa: E402

register_error_handlers(app)
app.include_router(cart_router)
app.include_router(payment_router)
app.include_router(order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "checkout": {"name": checkout.name},
            },
        }
    )
