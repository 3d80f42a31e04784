"""Fixed-rate shipping method adapter.

Prices every cart the same way: one configured rate per option, with
no dependency on cart contents.
"""

from collections.abc import Mapping
from decimal import Decimal

from cartkit.core.models import ShippingEvaluationContext, ShippingRate
from cartkit.core.ports import ShippingMethod


class FixedRateShippingMethod(ShippingMethod):
    """Shipping method with a static price list keyed by option name."""

    def __init__(
        self,
        code: str,
        rates: Mapping[str, Decimal | int | str],
        name: str = "",
        is_active: bool = True,
        tax_type: str | None = None,
    ):
        """Initialize the method.

        Args:
            code: Shipping method code, e.g. "GROUND".
            rates: Option name to price, e.g. {"STD": "5.00"}.
            name: Display name; defaults to the code.
            is_active: Whether the store offers this method.
            tax_type: Tax type copied onto shipments using this method.
        """
        super().__init__(code=code, name=name, is_active=is_active, tax_type=tax_type)
        self.rates = {option: Decimal(str(price)) for option, price in rates.items()}

    def calculate_rates(
        self, context: ShippingEvaluationContext
    ) -> list[ShippingRate]:
        return [
            ShippingRate(shipping_method=self, option_name=option, rate=price)
            for option, price in self.rates.items()
        ]
