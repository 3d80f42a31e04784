"""Tests for the fixed-rate shipping method adapter."""

from decimal import Decimal

import pytest

from cartkit.adapters.repository.memory import InMemoryCartRepository
from cartkit.adapters.shipping.fixed_rate import FixedRateShippingMethod
from cartkit.core.cart_builder import CartBuilder
from cartkit.core.exceptions import UnknownShippingMethodError
from cartkit.core.models import Cart, ShippingEvaluationContext, Shipment, Store
from cartkit.tests.fakes import FakeCustomerLookupPort, FakeStoreLookupPort


@pytest.fixture
def method() -> FixedRateShippingMethod:
    return FixedRateShippingMethod(
        "GROUND", {"STD": "5.00", "EXPRESS": 12}, tax_type="Shipping"
    )


@pytest.fixture
def cart() -> Cart:
    return Cart(store_id="store-1", customer_id="cust-1", name="default", currency="USD")


def test_one_rate_per_option(method: FixedRateShippingMethod, cart: Cart) -> None:
    rates = method.calculate_rates(ShippingEvaluationContext(cart=cart))

    assert [(r.option_name, r.rate) for r in rates] == [
        ("STD", Decimal("5.00")),
        ("EXPRESS", Decimal("12")),
    ]
    assert all(r.shipping_method is method for r in rates)
    assert all(r.discount_amount == Decimal("0") for r in rates)


def test_name_defaults_to_code(method: FixedRateShippingMethod) -> None:
    assert method.name == "GROUND"


def test_builder_resolves_fixed_rate(
    method: FixedRateShippingMethod, cart: Cart
) -> None:
    inactive = FixedRateShippingMethod("AIR", {"STD": "30"}, is_active=False)
    builder = CartBuilder(
        InMemoryCartRepository(),
        FakeStoreLookupPort(Store(id="store-1", shipping_methods=[method, inactive])),
        FakeCustomerLookupPort(),
    ).take_cart(cart)

    builder.add_or_update_shipment(
        Shipment(shipment_method_code="Ground", shipment_method_option="express")
    )

    shipment = cart.shipments[0]
    assert shipment.price == Decimal("12")
    assert shipment.shipment_method_option == "EXPRESS"
    assert shipment.tax_type == "Shipping"

    with pytest.raises(UnknownShippingMethodError):
        builder.add_or_update_shipment(
            Shipment(shipment_method_code="AIR", shipment_method_option="STD")
        )
