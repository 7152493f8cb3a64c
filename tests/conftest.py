"""Pytest fixtures for the order API tests."""

from pathlib import Path

import jwt
import pytest

from config import OrderApiConfig
from ordering.db.session import create_db_engine, init_db, make_session_factory
from ordering.services.auth import AuthUser
from ordering.services.order_service import OrderService


SECRET = "order-api-test-secret-0123456789abcdef"

PAYLOAD = {
    "line_items": [
        {"product_name": "Widget Pro", "quantity": 2, "unit_price": 100},
        {"product_name": "Service Plan", "quantity": 1, "unit_price": 50},
    ],
    "total_amount": 250.00,
}


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def service(session_factory):
    return OrderService(session_factory, page_size=15)


@pytest.fixture
def alice():
    return AuthUser(id="1", display_name="Alice")


@pytest.fixture
def bob():
    return AuthUser(id="2", display_name="Bob")


@pytest.fixture
def config(tmp_path):
    return OrderApiConfig(
        secret_key=SECRET,
        database_url="sqlite:///:memory:",
        log_level="WARNING",
        page_size=15,
        jwt_algorithm="HS256",
        project_root=Path(tmp_path),
    )


@pytest.fixture
def app(config):
    from app import create_app

    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def make_token(user: AuthUser, secret: str = SECRET) -> str:
    return jwt.encode({"sub": user.id, "name": user.display_name}, secret, algorithm="HS256")


def auth_headers(user: AuthUser) -> dict:
    return {"Authorization": f"Bearer {make_token(user)}"}
