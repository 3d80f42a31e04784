"""Exceptions raised by the cart builder.

Collaborator failures (repository, store lookup) are never wrapped in
these types; they propagate to the caller unchanged.
"""


class CartBuilderError(Exception):
    """Base class for all cart builder failures."""


class InvalidArgumentError(CartBuilderError, ValueError):
    """A required input was missing or unusable."""


class CartNotLoadedError(CartBuilderError):
    """An operation needed a cart before one was taken or created."""

    def __init__(self, operation: str):
        super().__init__(
            f"No cart is loaded; call take_cart or get_or_create_cart before {operation}"
        )
        self.operation = operation


class UnknownShippingMethodError(CartBuilderError):
    """The requested shipment method and option are not among the available rates."""

    def __init__(self, method_code: str, method_option: str | None):
        super().__init__(
            f"Unknown shipment method: {method_code} with option: {method_option}"
        )
        self.method_code = method_code
        self.method_option = method_option


class UnknownPaymentMethodError(CartBuilderError):
    """The requested payment gateway is not an active store payment method."""

    def __init__(self, gateway_code: str):
        super().__init__(f"Unknown payment method {gateway_code}")
        self.gateway_code = gateway_code


__all__ = [
    "CartBuilderError",
    "CartNotLoadedError",
    "InvalidArgumentError",
    "UnknownPaymentMethodError",
    "UnknownShippingMethodError",
]
