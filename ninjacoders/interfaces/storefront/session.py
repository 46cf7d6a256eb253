"""
Session helpers for the storefront routers.

The signed session cookie carries two keys:
    - ``cart``: opaque id of the visitor's active cart.
    - ``flash``: a one-shot notice shown on the next rendered page.

Only routers touch the session. Use cases receive the cart id
as an explicit argument.
"""

from typing import Optional

from starlette.requests import Request

CART_KEY = "cart"
FLASH_KEY = "flash"


def get_cart_id(request: Request) -> Optional[str]:
    cart_id = request.session.get(CART_KEY)
    return cart_id if isinstance(cart_id, str) and cart_id else None


def bind_cart_id(request: Request, cart_id: str) -> None:
    request.session[CART_KEY] = cart_id


def clear_cart(request: Request) -> None:
    request.session.pop(CART_KEY, None)


def set_flash(request: Request, kind: str, intro: str, message: str) -> None:
    request.session[FLASH_KEY] = {"type": kind, "intro": intro, "message": message}


def pop_flash(request: Request) -> Optional[dict]:
    """Return the pending flash notice and forget it."""
    if "session" not in request.scope:
        return None
    return request.session.pop(FLASH_KEY, None)
