"""
Use case: List the masterclass catalogue.

Input: None
Output: list of Product
Side effects: None.
"""

import logging

from ninjacoders.domain.storefront.entities import Product
from ninjacoders.domain.storefront.ports import DataStoreGateway

logger = logging.getLogger(__name__)


class ListProductsUseCase:
    """Returns every product in the catalogue."""

    def __init__(self, store: DataStoreGateway) -> None:
        self._store = store

    def execute(self) -> list[Product]:
        products = self._store.get_products()
        logger.debug("Loaded %d products.", len(products))
        return products
