"""
Domain error translation.

The single place where domain failures become HTTP responses. Routes let
AuthError propagate; the handler installed here maps its type to a status
code and renders ``{"status": false, "message": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.domain.exceptions import AuthError, Conflict, NotFound, Unauthenticated

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[AuthError], int], ...] = (
    (Conflict, status.HTTP_409_CONFLICT),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Unauthenticated, status.HTTP_401_UNAUTHORIZED),
)


def status_for(error: AuthError) -> int:
    """HTTP status for a domain error; unlisted kinds are client errors."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info("%s %s -> %d %s", request.method, request.url.path, status_code, exc.kind)
    return JSONResponse(status_code=status_code, content={"status": False, "message": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)  # type: ignore[arg-type]
