"""
Logging configuration for the application.

Sets up structured logging with a consistent format and an access log
middleware that writes one line per request.
Logging must not change program behavior.
Never logs sensitive data (request bodies, email addresses, secrets).
"""

import logging
import sys
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

access_logger = logging.getLogger("ninjacoders.access")


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # The access log middleware replaces uvicorn's own access lines.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.error").setLevel(logging.WARNING)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes an access log line for every request.

    In verbose mode the client address and user agent are included,
    which is what the production log keeps.
    """

    def __init__(self, app, verbose: bool = False) -> None:
        super().__init__(app)
        self._verbose = verbose

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if self._verbose:
            access_logger.info(
                '%s "%s %s" %d %.1fms "%s"',
                request.client.host if request.client else "-",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
                request.headers.get("user-agent", "-"),
            )
        else:
            access_logger.info(
                "%s %s %d %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
        return response
