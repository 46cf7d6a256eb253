"""
Use case: Remove a product from the session cart.

Input: DeleteFromCartCommand (cart_id, product_id)
Output: None
Side effects: Deletes the line item.
Failure cases: None. Missing carts and items are a no-op.
"""

import logging

from ninjacoders.application.storefront.dtos import DeleteFromCartCommand
from ninjacoders.domain.storefront.ports import DataStoreGateway

logger = logging.getLogger(__name__)


class DeleteFromCartUseCase:
    def __init__(self, store: DataStoreGateway) -> None:
        self._store = store

    def execute(self, command: DeleteFromCartCommand) -> None:
        if not command.cart_id:
            return
        self._store.delete_item(command.cart_id, command.product_id)
        logger.info(
            "Deleted product=%s from cart=%s", command.product_id, command.cart_id
        )
