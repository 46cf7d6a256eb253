"""
Domain-specific errors for the storefront bounded context.

All errors raised from the domain and application layers are defined here.
Infrastructure adapters translate library exceptions into these types.
They are mapped to JSON envelopes and error pages at the interface layer.
No framework imports allowed.
"""


class StorefrontDomainError(Exception):
    """Base error for all storefront domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(StorefrontDomainError):
    """Raised when user input fails a business validation rule."""


class InvalidEmailError(ValidationError):
    """Raised when an email address does not match the accepted pattern."""

    def __init__(self, email: str) -> None:
        super().__init__("Email is invalid!")
        self.email = email


class NotFoundError(StorefrontDomainError):
    """Base error for missing carts, line items, and products."""


class CartNotFoundError(NotFoundError):
    """Raised when a cart id does not resolve to an active cart."""

    def __init__(self, cart_id: str | None) -> None:
        super().__init__(f"Cart not found: {cart_id}")
        self.cart_id = cart_id


class LineItemNotFoundError(NotFoundError):
    """Raised when a product has no line item in the given cart."""

    def __init__(self, cart_id: str, product_id: str) -> None:
        super().__init__(f"Product {product_id} is not in cart {cart_id}")
        self.cart_id = cart_id
        self.product_id = product_id


class ProductNotFoundError(NotFoundError):
    """Raised when a product id is not in the catalogue."""

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class StorageIOError(StorefrontDomainError):
    """Raised when a filesystem step of the contest upload fails.

    The message is the underlying OS error message.
    """


class DependencyError(StorefrontDomainError):
    """Base error for failures of external collaborators."""


class DataStoreError(DependencyError):
    """Raised when the data store cannot complete an operation."""


class MailDeliveryError(DependencyError):
    """Raised when an email could not be handed to the mail transport."""

    def __init__(self, reason: str) -> None:
        super().__init__("Failed to send email.")
        self.reason = reason


class ReceiptRenderError(DependencyError):
    """Raised when the purchase receipt template fails to render."""
