"""
Use case: Check out the session cart.

Input: CheckoutCommand (cart_id, email)
Output: CheckoutResult (snapshot, email, receipt_sent)
Side effects:
    - Marks the cart checked out in the data store.
    - Sends the purchase receipt by email.
Failure cases:
    - InvalidEmailError before anything is touched.
    - Receipt render/send failures are logged and reported through
      ``receipt_sent``; they never roll back the checkout.

Ordering is finalize, then email. The caller clears the session cart
after this use case returns, whether or not the receipt went out,
because a checked-out cart can no longer be mutated.
"""

import logging

from ninjacoders.application.storefront.dtos import CheckoutCommand, CheckoutResult
from ninjacoders.domain.storefront.entities import Cart
from ninjacoders.domain.storefront.errors import DependencyError
from ninjacoders.domain.storefront.ports import (
    DataStoreGateway,
    MailGateway,
    ReceiptRenderer,
)
from ninjacoders.domain.storefront.validation import require_valid_email

logger = logging.getLogger(__name__)

RECEIPT_SUBJECT = "NinjaCoders - Thank You For Your Purchase"


class CheckoutUseCase:
    """Orchestrates cart finalization and the receipt email."""

    def __init__(
        self,
        store: DataStoreGateway,
        mailer: MailGateway,
        renderer: ReceiptRenderer,
    ) -> None:
        self._store = store
        self._mailer = mailer
        self._renderer = renderer

    def execute(self, command: CheckoutCommand) -> CheckoutResult:
        """Run the checkout.

        Args:
            command: The session cart id and the buyer's email.

        Returns:
            The finalized snapshot. An absent cart yields an empty
            snapshot with total 0 and no email.

        Raises:
            InvalidEmailError: If the email is malformed.
        """
        email = require_valid_email(command.email)

        snapshot = self._store.checkout(command.cart_id, email) if command.cart_id else None
        if snapshot is None:
            logger.info("Checkout without an active cart (cart=%s)", command.cart_id)
            return CheckoutResult(cart=Cart.empty(), email=email, receipt_sent=False)

        logger.info(
            "Checked out cart=%s items=%d total=%s",
            snapshot.id,
            snapshot.size,
            snapshot.total,
        )
        return CheckoutResult(
            cart=snapshot, email=email, receipt_sent=self._send_receipt(snapshot, email)
        )

    def _send_receipt(self, snapshot: Cart, email: str) -> bool:
        try:
            body = self._renderer.render(snapshot)
            self._mailer.send(email, RECEIPT_SUBJECT, body, html=True)
        except DependencyError as exc:
            logger.error("Unable to send confirmation for cart=%s: %s", snapshot.id, exc.message)
            return False
        return True
