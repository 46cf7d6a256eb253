"""
Use case: Load the session cart for display.

Input: cart id bound to the session (may be None)
Output: Cart
Side effects: None.
Failure cases: None. An absent or unresolved cart id yields the empty cart.
"""

from ninjacoders.domain.storefront.entities import Cart
from ninjacoders.domain.storefront.ports import DataStoreGateway


class GetCartUseCase:
    """Resolves the session cart id to a cart, falling back to an empty one."""

    def __init__(self, store: DataStoreGateway) -> None:
        self._store = store

    def execute(self, cart_id: str | None) -> Cart:
        if not cart_id:
            return Cart.empty()
        return self._store.get_cart(cart_id) or Cart.empty()
