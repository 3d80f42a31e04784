"""Shipping method adapters."""

from .fixed_rate import FixedRateShippingMethod

__all__ = ["FixedRateShippingMethod"]
