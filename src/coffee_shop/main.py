import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from tortoise import Tortoise

from .common.schemas import envelope
from .core.config import API_V1_PREFIX, DATABASE_URL, TORTOISE_ORM_CONFIG
from .core.exceptions import register_exception_handlers
from .core.logging_config import setup_logging
from .features.auth.middleware import auth_pipeline
from .features.users.router import router as users_router
from .features.products.router import router as products_router
from .features.orders.router import router as orders_router

setup_logging()
logger = logging.getLogger("coffee_shop.main")  # This logger will inherit from 'coffee_shop'


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Opens the Tortoise connections for the life of the process and closes them on shutdown."""
    logger.info("Coffee Shop API starting up")
    await Tortoise.init(config=TORTOISE_ORM_CONFIG)
    logger.info(f"Database ready ({DATABASE_URL.split(':', 1)[0]})")

    yield

    await Tortoise.close_connections()
    logger.info("Database connections closed, shutting down")


app = FastAPI(
    title="Coffee Shop API",
    description="API for managing users, products and orders of a coffee shop.",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
app.middleware("http")(auth_pipeline)


@app.get("/")
async def welcome(request: Request):
    """Public welcome message, also usable as a liveness check."""
    client_host = request.client.host if request.client else "-"
    logger.debug(f"Welcome page requested by {client_host}")
    return envelope(200, "Welcome to the Coffee Shop API!")


# Every feature router lives under the versioned API prefix
app.include_router(users_router, prefix=API_V1_PREFIX)
app.include_router(products_router, prefix=API_V1_PREFIX)
app.include_router(orders_router, prefix=API_V1_PREFIX)
