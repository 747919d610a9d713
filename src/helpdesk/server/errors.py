"""Turns exceptions into sanitized JSON error responses.

Clients get a fixed message per error family and a reference code; the
exception itself, with its traceback, only goes to the server log.
"""

import logging
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from helpdesk.core.errors import ConfigError, HelpdeskError, TransportError, TreeError

logger = logging.getLogger(__name__)

# Most specific class first
PUBLIC_ERRORS: list[tuple[type[Exception], int, str]] = [
    (TransportError, 502, "Chat backend error. Please try again."),
    (TreeError, 500, "Dialogue tree error. Please contact support."),
    (ConfigError, 500, "Configuration error. Please contact support."),
]

DEFAULT_ERROR_MESSAGE = "An internal error occurred. Please try again later."
SUPPORT_HINT = "If this problem persists, contact support with the reference code."


def create_error_reference() -> str:
    """Short id shown to the client and written to the log."""
    return f"ERR-{uuid.uuid4().hex[:8].upper()}"


def _classify(exception: Exception) -> tuple[int, str]:
    if isinstance(exception, HelpdeskError):
        for error_type, status_code, message in PUBLIC_ERRORS:
            if isinstance(exception, error_type):
                return status_code, message
    return 500, DEFAULT_ERROR_MESSAGE


def get_safe_error_message(exception: Exception) -> str:
    return _classify(exception)[1]


def get_http_status_for_exception(exception: Exception) -> int:
    return _classify(exception)[0]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log exc under a fresh reference and answer with the sanitized error."""
    reference = create_error_reference()
    logger.error(
        f"[{reference}] {request.method} {request.url.path} failed: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"error_reference": reference, "endpoint": request.url.path},
    )

    status_code, message = _classify(exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "reference": reference, "message": SUPPORT_HINT},
    )
