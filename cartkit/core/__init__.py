"""Core domain logic for the cart builder.

This package contains zero external dependencies and represents
the pure cart logic. Storage, store configuration and shipping
integrations are handled by the adapters package.
"""

from .exceptions import (
    CartBuilderError,
    CartNotLoadedError,
    InvalidArgumentError,
    UnknownPaymentMethodError,
    UnknownShippingMethodError,
)
from .models import (
    Cart,
    CartSearchCriteria,
    Contact,
    LineItem,
    Payment,
    PaymentMethod,
    ShippingEvaluationContext,
    ShippingRate,
    Shipment,
    Store,
    is_transient,
)

__all__ = [
    "Cart",
    "CartBuilderError",
    "CartNotLoadedError",
    "CartSearchCriteria",
    "Contact",
    "InvalidArgumentError",
    "LineItem",
    "Payment",
    "PaymentMethod",
    "ShippingEvaluationContext",
    "ShippingRate",
    "Shipment",
    "Store",
    "UnknownPaymentMethodError",
    "UnknownShippingMethodError",
    "is_transient",
]
