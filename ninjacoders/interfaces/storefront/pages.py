"""
FastAPI router for the storefront HTML pages.

All routes delegate to use cases. No business logic here.
This is the only place that reads or writes the session cart id;
use cases receive it as an argument.
Error mapping is handled by centralized error handlers.
"""

from datetime import date
from typing import Literal

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from ninjacoders.application.storefront.add_to_cart import AddToCartUseCase
from ninjacoders.application.storefront.change_cart_item_qty import (
    ChangeCartItemQtyUseCase,
)
from ninjacoders.application.storefront.checkout import CheckoutUseCase
from ninjacoders.application.storefront.delete_from_cart import DeleteFromCartUseCase
from ninjacoders.application.storefront.dtos import (
    AddToCartCommand,
    ChangeCartItemQtyCommand,
    CheckoutCommand,
    DeleteFromCartCommand,
)
from ninjacoders.application.storefront.get_cart import GetCartUseCase
from ninjacoders.application.storefront.list_products import ListProductsUseCase
from ninjacoders.domain.storefront.entities import MAX_LINE_ITEM_QTY
from ninjacoders.domain.storefront.taglines import get_tagline
from ninjacoders.interfaces.rendering import render
from ninjacoders.interfaces.storefront.dependencies import (
    get_add_to_cart_use_case,
    get_cart_use_case,
    get_change_cart_item_qty_use_case,
    get_checkout_use_case,
    get_delete_from_cart_use_case,
    get_list_products_use_case,
)
from ninjacoders.interfaces.storefront.session import (
    bind_cart_id,
    clear_cart,
    get_cart_id,
)

router = APIRouter(tags=["pages"])

COLOR_MODE_MAX_AGE = 30 * 24 * 60 * 60


def _to_cart(status_code: int = 303) -> RedirectResponse:
    return RedirectResponse(url="/cart", status_code=status_code)


# ---------------- main pages ----------------


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return render(request, "home.html")


@router.get("/about", response_class=HTMLResponse)
def about(request: Request):
    return render(request, "about.html", {"tagline": get_tagline()})


@router.get("/colormode/{mode}")
def color_mode(request: Request, mode: Literal["light", "dark"]):
    referer = request.headers.get("referer", "")
    # Only bounce back to pages of this site.
    target = referer if referer.startswith(str(request.base_url)) else "/"
    response = RedirectResponse(url=target, status_code=303)
    response.set_cookie("color_mode", mode, max_age=COLOR_MODE_MAX_AGE, samesite="lax")
    return response


@router.get("/masterclass", response_class=HTMLResponse)
def masterclass(
    request: Request,
    use_case: ListProductsUseCase = Depends(get_list_products_use_case),
):
    return render(request, "masterclass.html", {"products": use_case.execute()})


# ---------------- shopping cart ----------------


@router.get("/cart", response_class=HTMLResponse)
def cart(
    request: Request,
    use_case: GetCartUseCase = Depends(get_cart_use_case),
):
    current = use_case.execute(get_cart_id(request))
    return render(
        request,
        "cart.html",
        {"cart": current, "cart_size": current.size, "max_qty": MAX_LINE_ITEM_QTY},
    )


@router.post("/add-to-cart")
def add_to_cart(
    request: Request,
    product_id: str = Form(..., alias="productId"),
    use_case: AddToCartUseCase = Depends(get_add_to_cart_use_case),
):
    cart_id = use_case.execute(
        AddToCartCommand(cart_id=get_cart_id(request), product_id=product_id)
    )
    bind_cart_id(request, cart_id)
    return _to_cart()


@router.post("/change-cart-item-qty")
def change_cart_item_qty(
    request: Request,
    product_id: str = Form(..., alias="productId"),
    qty: int = Form(..., le=MAX_LINE_ITEM_QTY),
    use_case: ChangeCartItemQtyUseCase = Depends(get_change_cart_item_qty_use_case),
):
    use_case.execute(
        ChangeCartItemQtyCommand(
            cart_id=get_cart_id(request), product_id=product_id, qty=qty
        )
    )
    return _to_cart()


@router.post("/delete-from-cart")
def delete_from_cart(
    request: Request,
    product_id: str = Form(..., alias="productId"),
    use_case: DeleteFromCartUseCase = Depends(get_delete_from_cart_use_case),
):
    use_case.execute(
        DeleteFromCartCommand(cart_id=get_cart_id(request), product_id=product_id)
    )
    return _to_cart()


@router.post("/checkout", response_class=HTMLResponse)
def checkout(
    request: Request,
    email: str = Form(""),
    use_case: CheckoutUseCase = Depends(get_checkout_use_case),
):
    result = use_case.execute(CheckoutCommand(cart_id=get_cart_id(request), email=email))
    # The cart is checked out in the store even if the receipt failed,
    # so the session must not keep pointing at it.
    clear_cart(request)
    return render(
        request,
        "cart-thank-you.html",
        {
            "email": result.email,
            "cart": result.cart,
            "receipt_sent": result.receipt_sent,
        },
    )


# ---------------- newsletter ----------------


@router.get("/newsletter", response_class=HTMLResponse)
def newsletter(request: Request):
    return render(request, "newsletter.html")


@router.get("/newsletter/archive", response_class=HTMLResponse)
def newsletter_archive(request: Request):
    return render(request, "newsletter-archive.html")


# ---------------- photo contest ----------------


@router.get("/contest/setup-photo", response_class=HTMLResponse)
def setup_photo_contest(request: Request):
    today = date.today()
    return render(
        request, "contest/setup-photo.html", {"year": today.year, "month": today.month}
    )
