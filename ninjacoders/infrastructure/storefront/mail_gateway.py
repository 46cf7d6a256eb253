"""
Adapters: Transactional mail.

SmtpMailGateway hands messages to an SMTP relay.
LoggingMailGateway only logs them; it is used in development when no
SMTP host is configured.
"""

import logging
import smtplib
from email.message import EmailMessage
from typing import Optional

from ninjacoders.domain.storefront.errors import MailDeliveryError
from ninjacoders.domain.storefront.ports import MailGateway

logger = logging.getLogger(__name__)


def _build_message(sender: str, to: str, subject: str, body: str, html: bool) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = to
    message["Subject"] = subject
    if html:
        message.set_content("Please view this message in an HTML capable mail client.")
        message.add_alternative(body, subtype="html")
    else:
        message.set_content(body)
    return message


class SmtpMailGateway(MailGateway):
    """Sends mail through an SMTP relay, one connection per message.

    Every call is attempted once. Transport failures surface as
    MailDeliveryError with the underlying reason attached.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        user: Optional[str] = None,
        password: Optional[str] = None,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._user = user
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    def send(self, to: str, subject: str, body: str, html: bool = False) -> None:
        message = _build_message(self._sender, to, subject, body, html)
        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
                if self._use_tls:
                    smtp.starttls()
                if self._user:
                    smtp.login(self._user, self._password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Failed to send mail via %s:%d: %s", self._host, self._port, exc)
            raise MailDeliveryError(str(exc)) from exc
        logger.info("Sent mail %r via %s", subject, self._host)


class LoggingMailGateway(MailGateway):
    """Development transport: writes the message to the log instead of sending it."""

    def __init__(self, sender: str) -> None:
        self._sender = sender

    def send(self, to: str, subject: str, body: str, html: bool = False) -> None:
        message = _build_message(self._sender, to, subject, body, html)
        logger.info("Mail not sent (no SMTP host configured): %r", message["Subject"])
        logger.debug("Unsent message is %d bytes", len(message.as_bytes()))
