"""
Template rendering for HTML pages.

Every page gets the same base context: the pending flash notice,
the visitor's colour mode, and site-wide constants.
"""

from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ninjacoders.core.config import settings
from ninjacoders.interfaces.storefront.session import pop_flash

PACKAGE_DIR = Path(__file__).resolve().parent.parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
STATIC_DIR = PACKAGE_DIR / "static"

COLOR_MODES = ("light", "dark")

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render(
    request: Request,
    name: str,
    ctx: Optional[dict[str, Any]] = None,
    status_code: int = 200,
) -> HTMLResponse:
    color_mode = request.cookies.get("color_mode")
    base = {
        "site_name": settings.project_name,
        "currency": settings.currency_symbol,
        "color_mode": color_mode if color_mode in COLOR_MODES else "light",
        "flash": pop_flash(request),
    }
    base.update(ctx or {})
    return templates.TemplateResponse(request, name, base, status_code=status_code)
