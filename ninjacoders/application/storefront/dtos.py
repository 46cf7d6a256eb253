"""
Data Transfer Objects for the storefront application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from pathlib import Path

from ninjacoders.domain.storefront.entities import Cart


@dataclass(frozen=True)
class AddToCartCommand:
    """Input DTO for adding a product to the session cart.

    Attributes:
        cart_id: Cart id currently bound to the session, if any.
        product_id: Catalogue id of the product to add.
    """

    cart_id: str | None
    product_id: str


@dataclass(frozen=True)
class ChangeCartItemQtyCommand:
    """Input DTO for overwriting a line item quantity.

    Attributes:
        cart_id: Cart id bound to the session.
        product_id: Product whose line item changes.
        qty: New quantity. Zero or less deletes the line item.
    """

    cart_id: str | None
    product_id: str
    qty: int


@dataclass(frozen=True)
class DeleteFromCartCommand:
    cart_id: str | None
    product_id: str


@dataclass(frozen=True)
class CheckoutCommand:
    """Input DTO for checking out the session cart."""

    cart_id: str | None
    email: str


@dataclass(frozen=True)
class CheckoutResult:
    """Output DTO for a checkout.

    Attributes:
        cart: Snapshot of the cart as it was finalized.
        email: Address the receipt was addressed to.
        receipt_sent: False if rendering or sending the receipt failed.
    """

    cart: Cart
    email: str
    receipt_sent: bool


@dataclass(frozen=True)
class NewsletterSignupCommand:
    name: str
    email: str


@dataclass(frozen=True)
class StoreContestPhotoCommand:
    """Input DTO for storing a contest photo.

    Attributes:
        year: Partition year.
        month: Partition month (1-12).
        temp_path: Where the multipart upload was spooled.
        original_filename: Filename sent by the client.
    """

    year: int
    month: int
    temp_path: Path
    original_filename: str


@dataclass(frozen=True)
class StoreContestPhotoResult:
    path: Path
