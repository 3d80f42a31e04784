"""Composition root for the cart builder.

This module is the ONLY location that imports both core logic and
concrete adapter implementations. Request handlers get their builders
from a CartBuilderFactory created here.
"""

import logging
import sys

from cartkit.adapters.repository.memory import InMemoryCartRepository
from cartkit.config import Settings, load_settings
from cartkit.core.cart_builder import CartBuilder
from cartkit.core.ports import (
    CartRepositoryPort,
    CustomerLookupPort,
    StoreLookupPort,
)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


class CartBuilderFactory:
    """Creates one CartBuilder per request, wired to shared collaborators.

    Builders are cheap and hold per-session state (the cart and the
    memoized store), so they are never shared between requests.
    """

    def __init__(
        self,
        settings: Settings,
        store_lookup: StoreLookupPort,
        customer_lookup: CustomerLookupPort,
        repository: CartRepositoryPort | None = None,
    ):
        self.settings = settings
        self.store_lookup = store_lookup
        self.customer_lookup = customer_lookup
        self.repository = repository if repository is not None else InMemoryCartRepository()

    def create(self) -> CartBuilder:
        return CartBuilder(
            repository=self.repository,
            store_lookup=self.store_lookup,
            customer_lookup=self.customer_lookup,
            anonymous_customer_name=self.settings.anonymous_customer_name,
            rollback_on_unknown_method=self.settings.rollback_on_unknown_method,
        )

    def for_customer(
        self,
        store_id: str,
        customer_id: str,
        cart_name: str | None = None,
        currency: str | None = None,
        culture_name: str | None = None,
    ) -> CartBuilder:
        """Create a builder already holding the customer's cart.

        Missing cart name, currency and culture fall back to the
        configured defaults.
        """
        return self.create().get_or_create_cart(
            store_id=store_id,
            customer_id=customer_id,
            cart_name=cart_name or self.settings.default_cart_name,
            currency=currency or self.settings.default_currency,
            culture_name=culture_name or self.settings.default_language,
        )


def bootstrap(
    store_lookup: StoreLookupPort,
    customer_lookup: CustomerLookupPort,
    repository: CartRepositoryPort | None = None,
    env_file: str | None = None,
) -> CartBuilderFactory:
    """Load configuration, configure logging and wire the builder factory.

    Store and customer lookups belong to the hosting application and are
    always supplied by the caller. The repository defaults to in-memory
    storage.
    """
    settings = load_settings(env_file)

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    factory = CartBuilderFactory(
        settings=settings,
        store_lookup=store_lookup,
        customer_lookup=customer_lookup,
        repository=repository,
    )
    logger.info(
        f"Cart builder ready (repository: {type(factory.repository).__name__})"
    )
    return factory


__all__ = ["CartBuilderFactory", "bootstrap", "configure_logging"]
