"""Domain models for the cart builder.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .ports import ShippingMethod


def is_transient(entity: Any) -> bool:
    """True when the entity has not been assigned a persisted id yet."""
    return not getattr(entity, "id", None)


@dataclass
class LineItem:
    """A product row inside a cart.

    At most one line item per product id is kept in a cart; adding the
    same product again increases the quantity of the existing row.
    """

    product_id: str
    quantity: int = 1
    id: str | None = None

    def __post_init__(self) -> None:
        """Validate line item invariants on creation."""
        if not self.product_id or not self.product_id.strip():
            raise ValueError("product_id must be a non-empty string")
        if self.quantity < 0:
            raise ValueError(f"quantity must be non-negative, got {self.quantity}")


@dataclass
class Shipment:
    """A shipment attached to a cart.

    Price, discount and tax type are owned by rate resolution: whatever
    the caller supplies is overwritten once the method code resolves.
    """

    shipment_method_code: str | None = None
    shipment_method_option: str | None = None
    id: str | None = None
    currency: str | None = None
    price: Decimal = Decimal("0")
    discount_amount: Decimal = Decimal("0")
    tax_type: str | None = None


@dataclass
class Payment:
    """A payment attached to a cart."""

    payment_gateway_code: str | None = None
    id: str | None = None
    amount: Decimal = Decimal("0")


@dataclass
class Cart:
    """The shopping cart aggregate root.

    Items, shipments and payments are owned by the cart and saved or
    loaded together with it as a single unit.

    Note: This dataclass is intentionally mutable; the builder edits it
    in place during a session and hands it to the repository on save.
    """

    store_id: str
    customer_id: str
    name: str
    currency: str
    id: str | None = None
    customer_name: str | None = None
    is_anonymous: bool = False
    language_code: str | None = None
    coupon: str | None = None
    items: list[LineItem] = field(default_factory=list)
    shipments: list[Shipment] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)

    def find_item(self, line_item_id: str) -> LineItem | None:
        """Return the line item with the given persisted id, if any.

        An empty id never matches, so unsaved rows cannot be addressed.
        """
        if not line_item_id:
            return None
        return next((i for i in self.items if i.id == line_item_id), None)

    def find_item_by_product(self, product_id: str) -> LineItem | None:
        """Return the line item for the given product, if any."""
        return next((i for i in self.items if i.product_id == product_id), None)


@dataclass(frozen=True)
class PaymentMethod:
    """A payment method configured on a store."""

    code: str
    name: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class ShippingRate:
    """A single priced option returned by a shipping method.

    shipping_method may be None for rates produced without a backing
    method; such rates are listed but can never be selected.
    """

    shipping_method: "ShippingMethod | None"
    option_name: str | None
    rate: Decimal
    discount_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class ShippingEvaluationContext:
    """Input handed to shipping methods when calculating rates.

    WARNING: While this dataclass is frozen, the contained Cart is mutable.
    Rates reflect the cart at the moment they are calculated.
    """

    cart: Cart


@dataclass
class Store:
    """Read-only store configuration consumed by the builder."""

    id: str
    shipping_methods: list["ShippingMethod"] = field(default_factory=list)
    payment_methods: list[PaymentMethod] = field(default_factory=list)


@dataclass(frozen=True)
class CartSearchCriteria:
    """Filter used to look up an existing cart for a customer."""

    customer_id: str
    store_id: str
    name: str
    currency: str

    def matches(self, cart: Cart) -> bool:
        """Exact match on customer, store, cart name and currency."""
        return (
            cart.customer_id == self.customer_id
            and cart.store_id == self.store_id
            and cart.name == self.name
            and cart.currency == self.currency
        )


@dataclass(frozen=True)
class Contact:
    """A registered customer as seen by the customer lookup."""

    id: str
    full_name: str
