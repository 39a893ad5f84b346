"""
Exception handlers - Map domain errors to HTTP responses.

Each domain error kind gets its own status code. The response body
is ``{"detail": <message>}``, the same shape FastAPI uses for
HTTPException, so clients parse one error format.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    RegistryError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[RegistryError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


async def registry_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = next(
        (code for kind, code in STATUS_BY_ERROR.items() if isinstance(exc, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    logger.info(
        "%s %s -> %d %s", request.method, request.url.path, status_code, type(exc).__name__
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Install one handler per domain error kind on the application."""
    for kind in STATUS_BY_ERROR:
        app.add_exception_handler(kind, registry_error_handler)
