"""Composition root for the cart system.

This module is the single place where configuration is loaded and the
core registry is wired. Surrounding applications call ``bootstrap()``
and program against the returned CartRegistryPort.
"""

import json
import logging
import sys

from carts.config import Settings, load_settings
from carts.core.ports import CartRegistryPort
from carts.core.registry import CartRegistry

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """One JSON object per record, including ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_obj[key] = value

        return json.dumps(log_obj, default=str)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    logging.basicConfig(level=level, handlers=[handler])


def bootstrap(settings: Settings | None = None) -> CartRegistryPort:
    """Load configuration, configure logging, and build a cart registry.

    Args:
        settings: Pre-built settings. If None, settings are loaded from
            the environment.

    Returns:
        A new, empty registry. Every call returns an independent one.

    Raises:
        ValidationError: If settings loaded from the environment are invalid.
    """
    if settings is None:
        settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    registry = CartRegistry(ticket_places=settings.ticket_decimal_places)
    logger.info(
        "Cart registry ready",
        extra={"ticket_places": settings.ticket_decimal_places},
    )
    return registry
