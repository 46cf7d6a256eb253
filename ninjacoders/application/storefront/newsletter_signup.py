"""
Use case: Sign a visitor up for the newsletter.

Input: NewsletterSignupCommand (name, email)
Output: None
Side effects: Sends the welcome email.
Failure cases: InvalidEmailError (no mail sent), MailDeliveryError.
"""

import logging

from ninjacoders.application.storefront.dtos import NewsletterSignupCommand
from ninjacoders.domain.storefront.ports import MailGateway
from ninjacoders.domain.storefront.validation import require_valid_email

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "NinjaCoders Newsletter Subscription"
WELCOME_BODY = (
    "Hi {name}, \n"
    "Thank you for signing up to the NinjaCoders Newsletter. "
    "You'll be hearing from us soon!"
)


class NewsletterSignupUseCase:
    """Validates the address and sends the welcome email once."""

    def __init__(self, mailer: MailGateway) -> None:
        self._mailer = mailer

    def execute(self, command: NewsletterSignupCommand) -> None:
        """Run the signup.

        Raises:
            InvalidEmailError: If the email is malformed.
            MailDeliveryError: If the welcome email could not be sent.
        """
        email = require_valid_email(command.email)
        self._mailer.send(email, WELCOME_SUBJECT, WELCOME_BODY.format(name=command.name))
        logger.info("Newsletter welcome email sent.")
