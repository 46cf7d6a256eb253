"""
Domain entities for the storefront bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path

CENTS = Decimal("0.01")
MAX_LINE_ITEM_QTY = 99


class CartStatus(Enum):
    """Lifecycle status of a persisted cart."""

    ACTIVE = "active"
    CHECKED_OUT = "checked_out"


@dataclass(frozen=True)
class Product:
    """A masterclass offered in the catalogue. Read-only from the cart's side."""

    id: str
    sku: str
    name: str
    description: str
    featured_image: str
    requires_deposit: bool
    price: Decimal

    def display_price(self, currency_symbol: str = "€") -> str:
        """Return the price formatted for rendering, e.g. ``€450.00``."""
        return f"{currency_symbol}{self.price.quantize(CENTS, rounding=ROUND_HALF_UP)}"


@dataclass(frozen=True)
class LineItem:
    """One product entry in a cart.

    The quantity is always at least 1. A quantity of zero or less
    means the line item is deleted, never kept.
    """

    product: Product
    qty: int

    def __post_init__(self) -> None:
        if self.qty < 1:
            raise ValueError(f"Line item quantity must be >= 1, got {self.qty}")

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.qty


@dataclass(frozen=True)
class Cart:
    """A session-scoped cart.

    Line items keep the order in which products were first added.
    ``id`` is None for the empty cart handed out when the session has none.
    """

    id: str | None
    items: list[LineItem] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Cart":
        return cls(id=None, items=[])

    @property
    def total(self) -> Decimal:
        return sum((item.subtotal for item in self.items), Decimal("0"))

    @property
    def size(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def requires_deposit(self) -> bool:
        """True if any product in the cart requires a deposit."""
        return any(item.product.requires_deposit for item in self.items)

    def find(self, product_id: str) -> LineItem | None:
        for item in self.items:
            if item.product.id == product_id:
                return item
        return None


@dataclass(frozen=True)
class ContestUpload:
    """A contest photo waiting to be moved into its year/month partition.

    Lives only for the duration of one request.
    """

    year: int
    month: int
    temp_path: Path
    original_filename: str

    @property
    def partition(self) -> tuple[int, int]:
        return (self.year, self.month)

    @property
    def filename(self) -> str:
        """Original filename with any directory components stripped."""
        return Path(self.original_filename.replace("\\", "/")).name
