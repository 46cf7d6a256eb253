"""
Use case: Add a product to the session cart.

Input: AddToCartCommand (cart_id, product_id)
Output: the cart id the session must hold afterwards
Side effects: May create a cart. Appends or increments a line item.
Failure cases: ProductNotFoundError.
"""

import logging

from ninjacoders.application.storefront.dtos import AddToCartCommand
from ninjacoders.domain.storefront.errors import ProductNotFoundError
from ninjacoders.domain.storefront.ports import DataStoreGateway

logger = logging.getLogger(__name__)


class AddToCartUseCase:
    """Orchestrates lazy cart creation and line item insertion.

    A cart id that no longer resolves to an active cart (for example
    one that was checked out) is treated as absent and replaced.
    """

    def __init__(self, store: DataStoreGateway) -> None:
        self._store = store

    def execute(self, command: AddToCartCommand) -> str:
        """Add one unit of the product to the cart.

        Args:
            command: The session cart id and the product to add.

        Returns:
            The id of the cart the product was added to.

        Raises:
            ProductNotFoundError: If the product is not in the catalogue.
        """
        if self._store.get_product(command.product_id) is None:
            raise ProductNotFoundError(command.product_id)

        cart_id = command.cart_id
        # The store refuses the add when the cart is no longer active,
        # including a checkout that committed a moment ago.
        if not cart_id or not self._store.add_item(cart_id, command.product_id):
            cart_id = self._store.create_cart()
            logger.info("Created cart %s", cart_id)
            self._store.add_item(cart_id, command.product_id)

        logger.info("Added product=%s to cart=%s", command.product_id, cart_id)
        return cart_id
