import logging
import sys

from .config import LOG_LEVEL, LOG_NAMESPACES


class NamespaceFilter(logging.Filter):
    def __init__(self, allowed_namespaces=None):
        super().__init__()
        self.allowed_namespaces = allowed_namespaces if allowed_namespaces is not None else []

    def filter(self, record):
        if not self.allowed_namespaces:
            return True # If no namespaces are specified, allow all records
        # Allow record if its name starts with any of the allowed namespaces
        return any(record.name.startswith(ns) for ns in self.allowed_namespaces)


log_formatter = logging.Formatter(
    fmt="%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def setup_logging(level: str = LOG_LEVEL, allowed_namespaces=None) -> logging.Logger:
    """Configure the ``coffee_shop`` logger tree.

    Modules log through ``logging.getLogger(__name__)`` so every logger in the
    package inherits the handler and level configured here. Calling this more
    than once replaces the handler instead of stacking duplicates.
    """
    app_logger = logging.getLogger("coffee_shop")
    app_logger.setLevel(level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(log_formatter)

    namespaces = allowed_namespaces if allowed_namespaces is not None else LOG_NAMESPACES
    if namespaces:
        console_handler.addFilter(NamespaceFilter(namespaces))

    app_logger.handlers = [console_handler]

    # Order lifecycle is the busiest part of the service, keep its detail visible
    logging.getLogger("coffee_shop.features.orders").setLevel(logging.DEBUG)

    # SQL statements can be surfaced the same way:
    # logging.getLogger("tortoise.db_client").setLevel(logging.DEBUG)
    return app_logger
