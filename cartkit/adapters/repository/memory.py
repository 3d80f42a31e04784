"""In-memory cart repository adapter.

Implements CartRepositoryPort on a plain dict. Carts are deep-copied on
the way in and on the way out so the stored state only changes through
save() and delete(), the same way a database-backed repository behaves.
"""

import copy
import logging
import uuid
from collections.abc import Sequence

from cartkit.core.models import Cart, CartSearchCriteria, is_transient
from cartkit.core.ports import CartRepositoryPort

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


class InMemoryCartRepository(CartRepositoryPort):
    """Process-local cart storage, ordered by first insertion."""

    def __init__(self) -> None:
        self._carts: dict[str, Cart] = {}

    def __len__(self) -> int:
        return len(self._carts)

    def search(self, criteria: CartSearchCriteria) -> list[Cart]:
        return [
            copy.deepcopy(cart)
            for cart in self._carts.values()
            if criteria.matches(cart)
        ]

    def get_by_ids(self, cart_ids: Sequence[str]) -> list[Cart]:
        return [
            copy.deepcopy(self._carts[cart_id])
            for cart_id in cart_ids
            if cart_id in self._carts
        ]

    def save(self, carts: Sequence[Cart]) -> None:
        for cart in carts:
            self._assign_ids(cart)
            self._carts[cart.id] = copy.deepcopy(cart)
            logger.debug(
                f"Stored cart {cart.id}",
                extra={"cart_id": cart.id, "item_count": len(cart.items)},
            )

    def delete(self, cart_ids: Sequence[str]) -> None:
        for cart_id in cart_ids:
            if self._carts.pop(cart_id, None) is not None:
                logger.debug(f"Deleted cart {cart_id}", extra={"cart_id": cart_id})

    @staticmethod
    def _assign_ids(cart: Cart) -> None:
        """Give the cart and its children ids in place, as a database would."""
        for entity in (cart, *cart.items, *cart.shipments, *cart.payments):
            if is_transient(entity):
                entity.id = _new_id()
