import pytest
from checkout.api.errors import register_error_handlers
from checkout.api.routes import cart_router, order_router, payment_router
from fastapi import FastAPI
from fastapi.testclient import TestClient


@pytest.fixture()
def client(catalogue, directory):
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(payment_router)
    app.include_router(order_router)
    return TestClient(app)


@pytest.fixture()
def shopper():
    return {"X-User-Id": "user-001"}
