"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

This setup uses a manual, async-native approach to database initialization
to ensure that each test runs against a fresh, isolated in-memory database.
HTTP tests talk to the app through httpx's ASGI transport on the same event
loop as Tortoise, so the production lifespan never runs during tests.

Key Fixtures:
- `initialize_test_db`: (autouse) Creates a fresh DB schema and the seed users for each test.
- `client`: Provides a non-authenticated AsyncClient.
- `user_client`: Provides an AsyncClient authenticated as the seeded USER.
- `other_user_client`: Provides an AsyncClient authenticated as a second USER.
- `admin_client`: Provides an AsyncClient authenticated as the seeded ADMIN.
- `super_client`: Provides an AsyncClient authenticated as the seeded SUPER user.
- `product_factory`: Creates products directly in the database.
"""

from functools import lru_cache
from typing import Any, AsyncGenerator

import httpx
import pytest_asyncio
from tortoise import Tortoise

from coffee_shop.core.config import MODEL_MODULES
from coffee_shop.features.auth.security import get_password_hash
from coffee_shop.features.products.models import Product, ProductCategory
from coffee_shop.features.users.models import Role, User

# Import the app
from coffee_shop.main import app

API = "/api/v1"

CUSTOMER_EMAIL = "customer@example.com"
CUSTOMER_PASSWORD = "Customer#123"
OTHER_CUSTOMER_EMAIL = "other.customer@example.com"
OTHER_CUSTOMER_PASSWORD = "Other#12345"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Admin#12345"
SUPER_EMAIL = "super@example.com"
SUPER_PASSWORD = "Super#12345"

SEED_USERS = (
    (CUSTOMER_EMAIL, CUSTOMER_PASSWORD, Role.USER),
    (OTHER_CUSTOMER_EMAIL, OTHER_CUSTOMER_PASSWORD, Role.USER),
    (ADMIN_EMAIL, ADMIN_PASSWORD, Role.ADMIN),
    (SUPER_EMAIL, SUPER_PASSWORD, Role.SUPER),
)


@lru_cache(maxsize=None)
def _cached_hash(password: str) -> str:
    # hash each seed password once per session
    return get_password_hash(password)


async def add_user(email: str, password: str, role: Role = Role.USER) -> User:
    return await User.create(email=email, hashed_password=_cached_hash(password), role=role)


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test, seeds one account per role (plus a second USER) and tears
    it down afterwards.
    """
    test_db_config = {
        "connections": {"default": "sqlite://:memory:"},
        "apps": {
            "models": {
                "models": [*MODEL_MODULES, "aerich.models"],
                "default_connection": "default",
            }
        },
    }
    await Tortoise.init(config=test_db_config)
    await Tortoise.generate_schemas()
    for email, password, role in SEED_USERS:
        await add_user(email, password, role)

    yield

    await Tortoise.close_connections()


def _new_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")


async def _authenticated_client(email: str, password: str) -> AsyncGenerator[httpx.AsyncClient, Any]:
    async with _new_client() as ac:
        response = await ac.post(f"{API}/users/login", json={"email": email, "password": password})
        if response.status_code != 200:
            raise Exception(f"Authentication failed for {email}: {response.text}")
        token = response.json()["data"]["token"]
        ac.headers["Authorization"] = f"Bearer {token}"
        yield ac


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    """
    Provides a non-authenticated AsyncClient.
    """
    async with _new_client() as ac:
        yield ac


@pytest_asyncio.fixture(scope="function")
async def user_client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    async for ac in _authenticated_client(CUSTOMER_EMAIL, CUSTOMER_PASSWORD):
        yield ac


@pytest_asyncio.fixture(scope="function")
async def other_user_client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    async for ac in _authenticated_client(OTHER_CUSTOMER_EMAIL, OTHER_CUSTOMER_PASSWORD):
        yield ac


@pytest_asyncio.fixture(scope="function")
async def admin_client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    async for ac in _authenticated_client(ADMIN_EMAIL, ADMIN_PASSWORD):
        yield ac


@pytest_asyncio.fixture(scope="function")
async def super_client() -> AsyncGenerator[httpx.AsyncClient, Any]:
    async for ac in _authenticated_client(SUPER_EMAIL, SUPER_PASSWORD):
        yield ac


@pytest_asyncio.fixture
async def product_factory():
    """A factory to create products."""

    async def _factory(
        name: str,
        price: float = 3.5,
        category: ProductCategory = ProductCategory.DRINK,
        description: str = "A tasty product",
    ) -> Product:
        return await Product.create(
            name=name, description=description, price=price, category=category
        )

    return _factory
