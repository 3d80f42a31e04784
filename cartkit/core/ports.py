"""Port interfaces for the cart builder.

These abstract base classes define the boundaries between the core
cart logic and external adapters. Implementations live in the
adapters/ package (and in tests/fakes for unit tests).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - CartRepositoryPort: Search, load, save and delete carts
   - StoreLookupPort: Resolve store configuration
   - CustomerLookupPort: Resolve customer display names
   - ShippingMethod: Calculate shipping rates for a cart

2. **Driving Ports** (request handlers call into core)
   - CartBuilderPort: Fluent cart construction and mutation
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

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
)


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class CartRepositoryPort(ABC):
    """Port for persisting and querying cart aggregates.

    A cart is always read and written as a whole: items, shipments and
    payments travel with it.

    Implementations must handle:
    - Assigning ids to transient carts and their children on save
    - Upsert semantics (saving a cart with a known id replaces it)
    """

    @abstractmethod
    def search(self, criteria: CartSearchCriteria) -> list[Cart]:
        """Find carts matching the given criteria.

        Args:
            criteria: Customer, store, cart name and currency to match.

        Returns:
            Matching carts in repository-defined order. Empty list if none.

        Raises:
            Exception: If the storage backend is unavailable.
        """

    @abstractmethod
    def get_by_ids(self, cart_ids: Sequence[str]) -> list[Cart]:
        """Load carts by id.

        Args:
            cart_ids: Ids of the carts to load.

        Returns:
            The carts that exist. Unknown ids are skipped.

        Raises:
            Exception: If the storage backend is unavailable.
        """

    @abstractmethod
    def save(self, carts: Sequence[Cart]) -> None:
        """Insert or update carts.

        Transient carts (and transient children) are assigned ids in place.

        Args:
            carts: Carts to persist in full.

        Raises:
            Exception: If the storage backend is unavailable.
        """

    @abstractmethod
    def delete(self, cart_ids: Sequence[str]) -> None:
        """Delete carts by id. Unknown ids are ignored.

        Raises:
            Exception: If the storage backend is unavailable.
        """


class StoreLookupPort(ABC):
    """Port for resolving store configuration."""

    @abstractmethod
    def get_by_id(self, store_id: str) -> Store:
        """Retrieve a store by id.

        Raises:
            Exception: If the store does not exist. The builder does not
                catch this; it reaches the caller unchanged.
        """


class CustomerLookupPort(ABC):
    """Port for resolving registered customers."""

    @abstractmethod
    def get_by_ids(self, customer_ids: Sequence[str]) -> list[Contact]:
        """Retrieve contacts by id.

        Returns:
            The contacts found. An empty list is a normal outcome and
            means the customer is anonymous.
        """


class ShippingMethod(ABC):
    """A store shipping method capable of pricing a cart.

    Concrete methods carry their own configuration (flat rates, carrier
    credentials, ...) and are registered on a Store.
    """

    def __init__(
        self,
        code: str,
        name: str = "",
        is_active: bool = True,
        tax_type: str | None = None,
    ):
        self.code = code
        self.name = name or code
        self.is_active = is_active
        self.tax_type = tax_type

    @abstractmethod
    def calculate_rates(
        self, context: ShippingEvaluationContext
    ) -> list[ShippingRate]:
        """Price the cart in the context for every option this method offers.

        Args:
            context: Evaluation context holding the cart to price.

        Returns:
            One ShippingRate per available option.
        """

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, "
            f"is_active={self.is_active!r})"
        )


# ============================================================================
# DRIVING PORTS (Request handlers call into core)
# ============================================================================


class CartBuilderPort(ABC):
    """Port for building and mutating a single cart.

    Driving port: request handlers obtain a builder, acquire a cart with
    take_cart or get_or_create_cart, chain mutations, then call save.

    Every mutating method returns the builder so calls can be chained.
    A builder is not safe for concurrent use; use one per request.
    """

    @property
    @abstractmethod
    def cart(self) -> Cart | None:
        """The cart currently held by the builder, or None."""

    @abstractmethod
    def take_cart(self, cart: Cart) -> "CartBuilderPort":
        """Adopt an already constructed cart."""

    @abstractmethod
    def get_or_create_cart(
        self,
        store_id: str,
        customer_id: str,
        cart_name: str,
        currency: str,
        culture_name: str | None = None,
    ) -> "CartBuilderPort":
        """Load the customer's matching cart or create and persist a new one."""

    @abstractmethod
    def add_item(self, line_item: LineItem) -> "CartBuilderPort":
        """Add a line item, merging quantities by product id."""

    @abstractmethod
    def change_item_quantity(
        self, line_item_id: str, quantity: int
    ) -> "CartBuilderPort":
        """Set an item's quantity; non-positive quantities remove the item."""

    @abstractmethod
    def remove_item(self, line_item_id: str) -> "CartBuilderPort":
        """Remove a line item by id."""

    @abstractmethod
    def clear(self) -> "CartBuilderPort":
        """Remove every line item."""

    @abstractmethod
    def add_coupon(self, coupon_code: str) -> "CartBuilderPort":
        """Set the cart coupon."""

    @abstractmethod
    def remove_coupon(self) -> "CartBuilderPort":
        """Clear the cart coupon."""

    @abstractmethod
    def add_or_update_shipment(self, shipment: Shipment) -> "CartBuilderPort":
        """Attach a shipment, replacing one with the same id."""

    @abstractmethod
    def remove_shipment(self, shipment_id: str) -> "CartBuilderPort":
        """Remove a shipment by id."""

    @abstractmethod
    def add_or_update_payment(self, payment: Payment) -> "CartBuilderPort":
        """Attach a payment, replacing one with the same id."""

    @abstractmethod
    def merge_with_cart(self, cart: Cart) -> "CartBuilderPort":
        """Absorb another cart into the current one and delete it."""

    @abstractmethod
    def remove_cart(self) -> "CartBuilderPort":
        """Delete the current cart from the repository."""

    @abstractmethod
    def get_available_shipping_rates(self) -> list[ShippingRate]:
        """Calculate the shipping rates currently available for the cart."""

    @abstractmethod
    def get_available_payment_methods(self) -> list[PaymentMethod]:
        """Return the store's active payment methods."""

    @abstractmethod
    def save(self) -> None:
        """Persist the full current cart."""
