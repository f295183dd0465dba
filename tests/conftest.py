import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay so that importing the domain picks it up.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from storefront.auth.identity import reset_identity_provider
    from storefront.config import reset_settings
    from storefront.upload import reset_storage

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()

    reset_storage()
    reset_identity_provider()
    reset_settings()


# ---------------------------------------------------------------------------
# Shared records, created through the same commands the API uses
# ---------------------------------------------------------------------------
@pytest.fixture()
def category_id():
    from protean import current_domain
    from storefront.category.management import CreateCategory

    return current_domain.process(CreateCategory(name="Camisas", color="#FF5733"), asynchronous=False)


@pytest.fixture()
def product_id(category_id):
    from protean import current_domain
    from storefront.product.creation import CreateProduct

    command = CreateProduct(
        name="Camisa Básica",
        description="Camisa de algodón",
        category_id=category_id,
    )
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def variant_id(product_id):
    """A medium black men's variant: 10 in stock at 12.50."""
    from protean import current_domain
    from storefront.variant.management import CreateVariant

    command = CreateVariant(
        product_id=product_id,
        gender="MEN",
        size="M",
        color="Negro",
        color_hex="#000000",
        sku="CAM-BAS-M-NEG",
        stock=10,
        price=12.50,
    )
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def shopper_id():
    from protean import current_domain
    from storefront.user.registration import SignInWithGoogle

    command = SignInWithGoogle(google_id="google-shopper", email="shopper@example.com", name="Ana Shopper")
    return current_domain.process(command, asynchronous=False)


@pytest.fixture()
def admin_id():
    from protean import current_domain
    from storefront.user.registration import ChangeUserRole, SignInWithGoogle

    command = SignInWithGoogle(google_id="google-admin", email="admin@example.com", name="Store Admin")
    user_id = current_domain.process(command, asynchronous=False)
    current_domain.process(ChangeUserRole(email="admin@example.com", role="ADMIN"), asynchronous=False)
    return user_id


@pytest.fixture()
def address_id(shopper_id):
    from protean import current_domain
    from storefront.user.addresses import AddAddress

    command = AddAddress(
        user_id=shopper_id,
        alias="Casa",
        full_name="Ana Shopper",
        phone="+58 412-1234567",
        state="Miranda",
        city="Los Teques",
        address_line="Calle 5, Edificio Sol",
        is_default=True,
    )
    return current_domain.process(command, asynchronous=False)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from storefront.api.errors import register_error_handlers
    from storefront.api.routes import routers

    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


def _bearer(user_id):
    from protean import current_domain
    from storefront.auth.tokens import issue_access_token
    from storefront.user.user import User

    user = current_domain.repository_for(User).get(user_id)
    return {"Authorization": f"Bearer {issue_access_token(user)['access_token']}"}


@pytest.fixture()
def shopper_headers(shopper_id):
    return _bearer(shopper_id)


@pytest.fixture()
def admin_headers(admin_id):
    return _bearer(admin_id)
