"""Global exception handlers — map SDK exceptions to HTTP status codes.

The SDK raises ``KeyError`` for unknown templates and specialties.  Rather
than catching it in every route, we install global handlers that pick the
right HTTP status code.  Route handlers stay on the happy path.

Request bodies are parsed by FastAPI before any route runs, so malformed
schemas surface as 422 and never reach these handlers.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map a ``ValueError`` raised inside a route to 400.

    The raw exception message is logged server-side; the client gets a
    generic description.
    """
    logger.warning("ValueError at %s: %s", request.url, exc)
    return JSONResponse(status_code=400, content={"detail": "Invalid request"})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    """Map ``KeyError`` (unknown template or specialty) to 404."""
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
