"""Cart builder: implements CartBuilderPort over a single cart aggregate.

The builder holds one cart for the length of a session (usually one
request), applies mutations with validation, and only writes to the
repository on get_or_create_cart misses, merges, removal and save.

The store configuration is resolved on first use and memoized for the
lifetime of the builder. Changes made to the store during a session are
not observed; a new builder sees them.
"""

import logging
from typing import TypeVar

from .exceptions import (
    CartNotLoadedError,
    InvalidArgumentError,
    UnknownPaymentMethodError,
    UnknownShippingMethodError,
)
from .models import (
    Cart,
    CartSearchCriteria,
    LineItem,
    Payment,
    PaymentMethod,
    ShippingEvaluationContext,
    ShippingRate,
    Shipment,
    Store,
    is_transient,
)
from .ports import (
    CartBuilderPort,
    CartRepositoryPort,
    CustomerLookupPort,
    StoreLookupPort,
)

logger = logging.getLogger(__name__)

_Entity = TypeVar("_Entity", Shipment, Payment)


def _same_code(left: str | None, right: str | None) -> bool:
    # None only equals None; "" is a distinct value.
    if left is None or right is None:
        return left is right
    return left.lower() == right.lower()


def _remove_by_id(collection: list[_Entity], entity_id: str | None) -> None:
    if not entity_id:
        return
    for index, existing in enumerate(collection):
        if existing.id == entity_id:
            del collection[index]
            return


def _remove_instance(collection: list[_Entity], entity: _Entity) -> None:
    for index, existing in enumerate(collection):
        if existing is entity:
            del collection[index]
            return


class CartBuilder(CartBuilderPort):
    """Core implementation of CartBuilderPort.

    Not safe for concurrent use: it holds one mutable cart and one
    memoized store with no locking. Create one builder per request.
    """

    def __init__(
        self,
        repository: CartRepositoryPort,
        store_lookup: StoreLookupPort,
        customer_lookup: CustomerLookupPort,
        anonymous_customer_name: str = "Anonymous",
        rollback_on_unknown_method: bool = False,
    ):
        """Initialize the cart builder.

        Args:
            repository: CartRepositoryPort implementation for persistence.
            store_lookup: StoreLookupPort used to resolve the cart's store.
            customer_lookup: CustomerLookupPort used to name new carts.
            anonymous_customer_name: Name given to carts of unknown customers.
            rollback_on_unknown_method: Detach a shipment or payment whose
                method fails to resolve before raising. Off by default, in
                which case the invalid entity stays attached to the cart.
        """
        self.repository = repository
        self.store_lookup = store_lookup
        self.customer_lookup = customer_lookup
        self.anonymous_customer_name = anonymous_customer_name
        self.rollback_on_unknown_method = rollback_on_unknown_method
        self._cart: Cart | None = None
        self._store: Store | None = None

    @property
    def cart(self) -> Cart | None:
        return self._cart

    @property
    def store(self) -> Store:
        """The current cart's store, resolved once per builder."""
        if self._store is None:
            cart = self._require_cart("resolving the store")
            self._store = self.store_lookup.get_by_id(cart.store_id)
        return self._store

    def _require_cart(self, operation: str) -> Cart:
        if self._cart is None:
            raise CartNotLoadedError(operation)
        return self._cart

    def _set_cart(self, cart: Cart | None) -> None:
        if cart is not self._cart:
            self._store = None
        self._cart = cart

    # ------------------------------------------------------------------
    # Acquiring a cart
    # ------------------------------------------------------------------

    def take_cart(self, cart: Cart) -> "CartBuilder":
        if cart is None:
            raise InvalidArgumentError("cart must not be None")

        self._set_cart(cart)
        return self

    def get_or_create_cart(
        self,
        store_id: str,
        customer_id: str,
        cart_name: str,
        currency: str,
        culture_name: str | None = None,
    ) -> "CartBuilder":
        """Load the customer's cart, creating and persisting it on a miss.

        When several carts match, the first one in repository order wins.
        A new cart is saved immediately and then read back so repository
        assigned fields (id, defaults) are present on the returned cart.
        """
        criteria = CartSearchCriteria(
            customer_id=customer_id,
            store_id=store_id,
            name=cart_name,
            currency=currency,
        )
        found = self.repository.search(criteria)
        if found:
            self._set_cart(found[0])
            logger.debug(
                f"Loaded existing cart {found[0].id}",
                extra={"cart_id": found[0].id, "store_id": store_id},
            )
            return self

        contacts = self.customer_lookup.get_by_ids([customer_id])
        contact = contacts[0] if contacts else None

        cart = Cart(
            store_id=store_id,
            customer_id=customer_id,
            name=cart_name,
            currency=currency,
            language_code=culture_name,
            customer_name=contact.full_name if contact else self.anonymous_customer_name,
            is_anonymous=contact is None,
        )
        self.repository.save([cart])

        reloaded = self.repository.get_by_ids([cart.id]) if cart.id else []
        self._set_cart(reloaded[0] if reloaded else None)

        logger.info(
            f"Created cart {cart.id} for customer {customer_id}",
            extra={
                "cart_id": cart.id,
                "store_id": store_id,
                "customer_id": customer_id,
                "is_anonymous": cart.is_anonymous,
            },
        )
        return self

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------

    def add_item(self, line_item: LineItem) -> "CartBuilder":
        if line_item is None:
            raise InvalidArgumentError("line_item must not be None")

        self._add_line_item(self._require_cart("add_item"), line_item)
        return self

    def change_item_quantity(self, line_item_id: str, quantity: int) -> "CartBuilder":
        cart = self._require_cart("change_item_quantity")
        line_item = cart.find_item(line_item_id)
        if line_item is not None:
            if quantity > 0:
                line_item.quantity = quantity
            else:
                cart.items.remove(line_item)
                logger.debug(
                    f"Removed line item {line_item_id} by zero quantity",
                    extra={"cart_id": cart.id, "line_item_id": line_item_id},
                )
        return self

    def remove_item(self, line_item_id: str) -> "CartBuilder":
        cart = self._require_cart("remove_item")
        line_item = cart.find_item(line_item_id)
        if line_item is not None:
            cart.items.remove(line_item)
        return self

    def clear(self) -> "CartBuilder":
        self._require_cart("clear").items.clear()
        return self

    def _add_line_item(self, cart: Cart, line_item: LineItem) -> None:
        existing = cart.find_item_by_product(line_item.product_id)
        if existing is not None:
            existing.quantity += line_item.quantity
        else:
            # Force the repository to treat it as a new row.
            line_item.id = None
            cart.items.append(line_item)

        logger.debug(
            f"Added {line_item.quantity} x {line_item.product_id}",
            extra={"cart_id": cart.id, "product_id": line_item.product_id},
        )

    # ------------------------------------------------------------------
    # Coupon
    # ------------------------------------------------------------------

    def add_coupon(self, coupon_code: str) -> "CartBuilder":
        self._require_cart("add_coupon").coupon = coupon_code
        return self

    def remove_coupon(self) -> "CartBuilder":
        self._require_cart("remove_coupon").coupon = None
        return self

    # ------------------------------------------------------------------
    # Shipments and payments
    # ------------------------------------------------------------------

    def add_or_update_shipment(self, shipment: Shipment) -> "CartBuilder":
        """Attach a shipment and resolve its method against current rates.

        A shipment with a persisted id replaces the existing one with that
        id; the replacement moves to the end of the list.

        Raises:
            UnknownShippingMethodError: If the method code and option do not
                match any available rate. The shipment is already attached
                at that point unless rollback_on_unknown_method is set.
        """
        if shipment is None:
            raise InvalidArgumentError("shipment must not be None")

        cart = self._require_cart("add_or_update_shipment")
        if not is_transient(shipment):
            _remove_by_id(cart.shipments, shipment.id)

        shipment.currency = cart.currency
        cart.shipments.append(shipment)

        if shipment.shipment_method_code:
            rate = self._find_shipping_rate(shipment)
            if rate is None:
                logger.warning(
                    f"Unknown shipment method {shipment.shipment_method_code} "
                    f"with option {shipment.shipment_method_option}",
                    extra={
                        "cart_id": cart.id,
                        "method_code": shipment.shipment_method_code,
                        "method_option": shipment.shipment_method_option,
                    },
                )
                if self.rollback_on_unknown_method:
                    _remove_instance(cart.shipments, shipment)
                raise UnknownShippingMethodError(
                    shipment.shipment_method_code, shipment.shipment_method_option
                )

            method = rate.shipping_method
            shipment.shipment_method_code = method.code
            shipment.shipment_method_option = rate.option_name
            shipment.price = rate.rate
            shipment.discount_amount = rate.discount_amount
            shipment.tax_type = method.tax_type

        return self

    def _find_shipping_rate(self, shipment: Shipment) -> ShippingRate | None:
        for rate in self.get_available_shipping_rates():
            if rate.shipping_method is None:
                continue
            if _same_code(
                shipment.shipment_method_code, rate.shipping_method.code
            ) and _same_code(shipment.shipment_method_option, rate.option_name):
                return rate
        return None

    def remove_shipment(self, shipment_id: str) -> "CartBuilder":
        _remove_by_id(self._require_cart("remove_shipment").shipments, shipment_id)
        return self

    def add_or_update_payment(self, payment: Payment) -> "CartBuilder":
        """Attach a payment and check its gateway against the store.

        Raises:
            UnknownPaymentMethodError: If the gateway code matches no active
                payment method. The payment is already attached at that
                point unless rollback_on_unknown_method is set.
        """
        if payment is None:
            raise InvalidArgumentError("payment must not be None")

        cart = self._require_cart("add_or_update_payment")
        if not is_transient(payment):
            _remove_by_id(cart.payments, payment.id)

        cart.payments.append(payment)

        if payment.payment_gateway_code:
            known = any(
                _same_code(method.code, payment.payment_gateway_code)
                for method in self.get_available_payment_methods()
            )
            if not known:
                logger.warning(
                    f"Unknown payment method {payment.payment_gateway_code}",
                    extra={
                        "cart_id": cart.id,
                        "gateway_code": payment.payment_gateway_code,
                    },
                )
                if self.rollback_on_unknown_method:
                    _remove_instance(cart.payments, payment)
                raise UnknownPaymentMethodError(payment.payment_gateway_code)

        return self

    # ------------------------------------------------------------------
    # Whole-cart operations
    # ------------------------------------------------------------------

    def merge_with_cart(self, cart: Cart) -> "CartBuilder":
        """Absorb another cart and delete it from the repository.

        Items merge by product id; coupon, shipments and payments are
        taken from the other cart wholesale.
        """
        if cart is None:
            raise InvalidArgumentError("cart must not be None")

        current = self._require_cart("merge_with_cart")
        if cart is current or (cart.id and cart.id == current.id):
            raise InvalidArgumentError("Cannot merge a cart into itself")

        for line_item in list(cart.items):
            self._add_line_item(current, line_item)

        current.coupon = cart.coupon
        current.shipments = list(cart.shipments)
        current.payments = list(cart.payments)

        if not is_transient(cart):
            self.repository.delete([cart.id])

        logger.info(
            f"Merged cart {cart.id} into {current.id}",
            extra={"cart_id": current.id, "merged_cart_id": cart.id},
        )
        return self

    def remove_cart(self) -> "CartBuilder":
        cart = self._require_cart("remove_cart")
        self.repository.delete([cart.id])
        logger.info(f"Removed cart {cart.id}", extra={"cart_id": cart.id})
        return self

    def get_available_shipping_rates(self) -> list[ShippingRate]:
        context = ShippingEvaluationContext(
            cart=self._require_cart("get_available_shipping_rates")
        )

        active_methods = [m for m in self.store.shipping_methods if m.is_active]

        return [
            rate
            for method in active_methods
            for rate in method.calculate_rates(context)
            if rate.shipping_method is None or rate.shipping_method.is_active
        ]

    def get_available_payment_methods(self) -> list[PaymentMethod]:
        self._require_cart("get_available_payment_methods")
        return [m for m in self.store.payment_methods if m.is_active]

    def save(self) -> None:
        cart = self._require_cart("save")
        self.repository.save([cart])
        logger.info(
            f"Saved cart {cart.id}",
            extra={"cart_id": cart.id, "item_count": len(cart.items)},
        )
