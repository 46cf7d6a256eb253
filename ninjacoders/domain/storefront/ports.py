"""
Port interfaces (ABCs) for the storefront bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ninjacoders.domain.storefront.entities import Cart, Product


class DataStoreGateway(ABC):
    """Port for product and cart persistence.

    Every per-cart mutation must be atomic in the underlying store:
    concurrent requests against the same cart rely on it, there is
    no in-process locking.

    ``get_cart`` and the mutations only see *active* carts. A cart that
    has been checked out behaves exactly like a missing one.
    """

    @abstractmethod
    def get_products(self) -> list[Product]:
        """Return the full catalogue ordered by name."""
        raise NotImplementedError

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        """Return a product by id, or None if not in the catalogue."""
        raise NotImplementedError

    @abstractmethod
    def create_cart(self) -> str:
        """Create an empty active cart and return its id."""
        raise NotImplementedError

    @abstractmethod
    def get_cart(self, cart_id: str) -> Optional[Cart]:
        """Return the active cart with its line items, or None."""
        raise NotImplementedError

    @abstractmethod
    def add_item(self, cart_id: str, product_id: str) -> bool:
        """Append the product with qty 1, or increment its qty by 1.

        Returns:
            False if the cart is not active; nothing is written then.
        """
        raise NotImplementedError

    @abstractmethod
    def set_item_qty(self, cart_id: str, product_id: str, qty: int) -> bool:
        """Overwrite the quantity of an existing line item.

        Returns:
            False if the product has no line item in the cart.
        """
        raise NotImplementedError

    @abstractmethod
    def delete_item(self, cart_id: str, product_id: str) -> None:
        """Remove the line item. Missing carts or items are ignored."""
        raise NotImplementedError

    @abstractmethod
    def checkout(self, cart_id: str, email: str) -> Optional[Cart]:
        """Mark the cart checked out and return a snapshot of its contents.

        Returns:
            The snapshot, or None if the cart is not active.
        """
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        raise NotImplementedError


class MailGateway(ABC):
    """Port for sending transactional email."""

    @abstractmethod
    def send(self, to: str, subject: str, body: str, html: bool = False) -> None:
        """Send one message.

        Raises:
            MailDeliveryError: If the transport rejects the message.
        """
        raise NotImplementedError


class ReceiptRenderer(ABC):
    """Port for rendering the purchase receipt email body."""

    @abstractmethod
    def render(self, cart: Cart) -> str:
        """Return the HTML receipt for a checked-out cart snapshot.

        Raises:
            ReceiptRenderError: If the template cannot be rendered.
        """
        raise NotImplementedError


class PhotoStorage(ABC):
    """Port for contest photo storage partitioned by year and month."""

    @abstractmethod
    def ensure_partition(self, year: int, month: int) -> Path:
        """Create the partition directory if missing and return it.

        Must treat an already existing directory as success so that
        concurrent uploads to the same partition do not fail.
        """
        raise NotImplementedError

    @abstractmethod
    def move_into(self, partition: Path, temp_path: Path, filename: str) -> Path:
        """Move a temporary file into the partition under ``filename``."""
        raise NotImplementedError

    @abstractmethod
    def discard(self, temp_path: Path) -> None:
        """Remove whatever remains of the temporary file."""
        raise NotImplementedError
