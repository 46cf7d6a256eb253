"""
Centralized error handlers for FastAPI.

Maps domain-specific errors to responses. Two audiences:

- ``/api/*`` callers get the JSON result envelope
  ``{"result": "error", "error": <message>}``.
- Page requests get a flash notice and a redirect back to the cart for
  recoverable errors, the 404 page for unknown routes, and the generic
  500 page for everything else.

No stack traces or internal details are exposed to clients; only the
messages of domain errors are shown.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ninjacoders.domain.storefront.errors import (
    DependencyError,
    NotFoundError,
    StorefrontDomainError,
    ValidationError,
)
from ninjacoders.interfaces.rendering import render
from ninjacoders.interfaces.storefront.session import set_flash

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_422 = 422
HTTP_500 = 500
HTTP_502 = 502

API_PREFIX = "/api/"


def _is_api(request: Request) -> bool:
    return request.url.path.startswith(API_PREFIX)


def error_envelope(status_code: int, error: str) -> JSONResponse:
    """Build the JSON error envelope used by every API endpoint."""
    return JSONResponse(status_code=status_code, content={"result": "error", "error": error})


def _status_for(exc: StorefrontDomainError) -> int:
    if isinstance(exc, ValidationError):
        return HTTP_400
    if isinstance(exc, NotFoundError):
        return HTTP_404
    if isinstance(exc, DependencyError):
        return HTTP_502
    return HTTP_500


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(StorefrontDomainError)
    async def handle_domain_error(
        request: Request, exc: StorefrontDomainError
    ) -> Response:
        """Map a domain error to an envelope (API) or a page response."""
        status_code = _status_for(exc)
        if status_code >= HTTP_500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        else:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)

        if _is_api(request):
            return error_envelope(status_code, exc.message)

        if isinstance(exc, (ValidationError, NotFoundError)):
            set_flash(request, "warning", "Sorry!", exc.message)
            return RedirectResponse(url="/cart", status_code=303)
        return render(request, "500.html", status_code=HTTP_500)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Render the 404 page for unknown pages, envelopes for the API."""
        if _is_api(request):
            return error_envelope(exc.status_code, str(exc.detail))
        if exc.status_code == HTTP_404:
            return render(request, "404.html", status_code=HTTP_404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Report the first invalid field to API callers."""
        if not _is_api(request):
            return await request_validation_exception_handler(request, exc)
        errors = exc.errors()
        if not errors:
            return error_envelope(HTTP_422, "Invalid request")
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or "request"
        return error_envelope(HTTP_422, f"{field}: {first.get('msg', 'invalid')}")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        if _is_api(request):
            return error_envelope(HTTP_500, "Internal server error")
        return render(request, "500.html", status_code=HTTP_500)

