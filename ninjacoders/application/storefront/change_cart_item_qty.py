"""
Use case: Overwrite the quantity of a line item.

Input: ChangeCartItemQtyCommand (cart_id, product_id, qty)
Output: the updated Cart
Side effects: Updates or deletes the line item.
Failure cases: CartNotFoundError, LineItemNotFoundError (cart left unchanged).
"""

import logging

from ninjacoders.application.storefront.dtos import ChangeCartItemQtyCommand
from ninjacoders.domain.storefront.entities import Cart
from ninjacoders.domain.storefront.errors import (
    CartNotFoundError,
    LineItemNotFoundError,
)
from ninjacoders.domain.storefront.ports import DataStoreGateway

logger = logging.getLogger(__name__)


class ChangeCartItemQtyUseCase:
    """Sets a line item quantity. A quantity below 1 removes the item."""

    def __init__(self, store: DataStoreGateway) -> None:
        self._store = store

    def execute(self, command: ChangeCartItemQtyCommand) -> Cart:
        """Run the change.

        Raises:
            CartNotFoundError: If the session holds no active cart.
            LineItemNotFoundError: If the product is not in the cart.
        """
        cart = self._store.get_cart(command.cart_id) if command.cart_id else None
        if cart is None:
            raise CartNotFoundError(command.cart_id)
        if cart.find(command.product_id) is None:
            raise LineItemNotFoundError(cart.id, command.product_id)

        if command.qty < 1:
            logger.info(
                "Quantity %d for product=%s in cart=%s, deleting line item",
                command.qty,
                command.product_id,
                cart.id,
            )
            self._store.delete_item(cart.id, command.product_id)
        elif not self._store.set_item_qty(cart.id, command.product_id, command.qty):
            # Deleted by a concurrent request between the read and the write.
            raise LineItemNotFoundError(cart.id, command.product_id)

        return self._store.get_cart(cart.id) or Cart.empty()
