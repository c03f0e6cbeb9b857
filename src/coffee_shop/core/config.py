import os

# In a real deployment, load from environment variables or a secrets manager
SECRET_KEY: str = os.getenv(
    "SECRET_KEY", "coffee-shop-secret-key-for-jwt-!ChangeMe!"
)
ALGORITHM: str = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "120"))

API_V1_PREFIX: str = "/api/v1"

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://./coffee_shop.sqlite3")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Comma separated logger prefixes, e.g. "coffee_shop.features.orders,coffee_shop.main"
LOG_NAMESPACES: list[str] = [
    ns.strip() for ns in os.getenv("LOG_NAMESPACES", "").split(",") if ns.strip()
]

MODEL_MODULES: list[str] = [
    "coffee_shop.features.users.models",
    "coffee_shop.features.products.models",
    "coffee_shop.features.orders.models",
]

TORTOISE_ORM_CONFIG = {
    "connections": {"default": DATABASE_URL},
    "apps": {
        "models": {  # This is an app label, can be anything
            "models": [*MODEL_MODULES, "aerich.models"],  # aerich for migrations
            "default_connection": "default",
        }
    },
}
