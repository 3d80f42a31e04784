"""Integration tests for configuration and the composition root.

These tests verify that settings load and validate correctly and that
the builder factory wires configured behavior into every builder.
"""

import os
from decimal import Decimal
from pathlib import Path
from unittest.mock import patch

import pytest

from cartkit.adapters.repository.memory import InMemoryCartRepository
from cartkit.adapters.shipping.fixed_rate import FixedRateShippingMethod
from cartkit.config import Settings, load_settings
from cartkit.core.exceptions import UnknownPaymentMethodError
from cartkit.core.models import Contact, LineItem, Payment, PaymentMethod, Shipment, Store
from cartkit.main import CartBuilderFactory, bootstrap
from cartkit.tests.fakes import FakeCustomerLookupPort, FakeStoreLookupPort


@pytest.fixture
def store_lookup() -> FakeStoreLookupPort:
    return FakeStoreLookupPort(
        Store(
            id="store-1",
            shipping_methods=[FixedRateShippingMethod("GROUND", {"STD": "5.0"})],
            payment_methods=[PaymentMethod(code="COD")],
        )
    )


@pytest.fixture
def customer_lookup() -> FakeCustomerLookupPort:
    return FakeCustomerLookupPort(Contact(id="cust-1", full_name="Jane Doe"))


class TestConfigurationLoading:
    """Test configuration loading and validation."""

    def test_load_settings_with_defaults(self) -> None:
        settings = load_settings()
        assert settings.anonymous_customer_name == "Anonymous"
        assert settings.default_cart_name == "default"
        assert settings.default_currency == "USD"
        assert settings.default_language == "en-US"
        assert settings.rollback_on_unknown_method is False
        assert settings.log_level == "INFO"

    def test_load_settings_from_env(self) -> None:
        with patch.dict(
            os.environ,
            {
                "ANONYMOUS_CUSTOMER_NAME": "Guest",
                "DEFAULT_CURRENCY": "eur",
                "ROLLBACK_ON_UNKNOWN_METHOD": "true",
                "LOG_LEVEL": "DEBUG",
            },
        ):
            settings = load_settings()
            assert settings.anonymous_customer_name == "Guest"
            assert settings.default_currency == "EUR"
            assert settings.rollback_on_unknown_method is True
            assert settings.log_level == "DEBUG"

    def test_load_settings_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "cart.env"
        env_file.write_text("DEFAULT_CART_NAME=wishlist\n")

        settings = load_settings(str(env_file))

        assert settings.default_cart_name == "wishlist"

    def test_rejects_invalid_currency(self) -> None:
        with patch.dict(os.environ, {"DEFAULT_CURRENCY": "DOLLARS"}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()

    def test_rejects_blank_anonymous_name(self) -> None:
        with patch.dict(os.environ, {"ANONYMOUS_CUSTOMER_NAME": "   "}):
            with pytest.raises(Exception):  # ValidationError
                load_settings()


class TestCartBuilderFactory:
    """Test builder wiring."""

    def test_builders_are_fresh_but_share_repository(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        factory = CartBuilderFactory(Settings(), store_lookup, customer_lookup)

        first, second = factory.create(), factory.create()

        assert first is not second
        assert first.repository is second.repository
        assert isinstance(factory.repository, InMemoryCartRepository)

    def test_for_customer_applies_defaults(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        factory = CartBuilderFactory(Settings(), store_lookup, customer_lookup)

        builder = factory.for_customer("store-1", "cust-1")

        assert builder.cart.name == "default"
        assert builder.cart.currency == "USD"
        assert builder.cart.language_code == "en-US"
        assert builder.cart.customer_name == "Jane Doe"

    def test_settings_flow_into_builder(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        settings = Settings(anonymous_customer_name="Guest", rollback_on_unknown_method=True)
        factory = CartBuilderFactory(settings, store_lookup, customer_lookup)

        builder = factory.for_customer("store-1", "visitor")
        assert builder.cart.customer_name == "Guest"
        assert builder.cart.is_anonymous is True

        with pytest.raises(UnknownPaymentMethodError):
            builder.add_or_update_payment(Payment(payment_gateway_code="WIRE"))
        assert builder.cart.payments == []

    def test_session_round_trip(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        factory = CartBuilderFactory(Settings(), store_lookup, customer_lookup)

        (
            factory.for_customer("store-1", "cust-1")
            .add_item(LineItem(product_id="P1", quantity=2))
            .add_or_update_shipment(
                Shipment(shipment_method_code="ground", shipment_method_option="std")
            )
            .add_or_update_payment(Payment(payment_gateway_code="cod"))
            .save()
        )

        reloaded = factory.for_customer("store-1", "cust-1").cart
        assert [(i.product_id, i.quantity) for i in reloaded.items] == [("P1", 2)]
        assert reloaded.shipments[0].price == Decimal("5.0")
        assert reloaded.shipments[0].currency == "USD"
        assert reloaded.payments[0].payment_gateway_code == "cod"
        assert len(factory.repository) == 1


class TestBootstrap:
    """Test the bootstrap entry point."""

    def test_bootstrap_wires_factory(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        with patch("cartkit.main.configure_logging") as configure:
            factory = bootstrap(store_lookup, customer_lookup)

        configure.assert_called_once_with("INFO", "text")
        assert factory.store_lookup is store_lookup
        assert isinstance(factory.repository, InMemoryCartRepository)

    def test_bootstrap_uses_given_repository(
        self, store_lookup: FakeStoreLookupPort, customer_lookup: FakeCustomerLookupPort
    ) -> None:
        repository = InMemoryCartRepository()

        with patch("cartkit.main.configure_logging"):
            factory = bootstrap(store_lookup, customer_lookup, repository=repository)

        assert factory.repository is repository
