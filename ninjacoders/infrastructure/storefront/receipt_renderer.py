"""
Adapter: Purchase receipt rendering with Jinja2.

Implements the ReceiptRenderer port using the ``email/cart-thank-you.html``
template shared with the web templates directory.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from ninjacoders.domain.storefront.entities import Cart
from ninjacoders.domain.storefront.errors import ReceiptRenderError
from ninjacoders.domain.storefront.ports import ReceiptRenderer

RECEIPT_TEMPLATE = "email/cart-thank-you.html"


class JinjaReceiptRenderer(ReceiptRenderer):
    def __init__(self, templates_dir: Path, currency_symbol: str = "€") -> None:
        self._env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html"]),
        )
        self._currency_symbol = currency_symbol

    def render(self, cart: Cart) -> str:
        try:
            template = self._env.get_template(RECEIPT_TEMPLATE)
            return template.render(cart=cart, currency=self._currency_symbol)
        except TemplateError as exc:
            raise ReceiptRenderError(f"Error in email template: {exc}") from exc
