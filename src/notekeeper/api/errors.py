"""Mapping of domain exceptions to HTTP responses.

Every ``NotekeeperError`` subclass carries its own status code; this module
turns them into ``{"detail": ...}`` bodies (plus ``reason`` for forbidden
note access) and logs server-side failures. Malformed request bodies are
reported as 400 rather than FastAPI's default 422.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from notekeeper.core.errors import ForbiddenError, NotekeeperError, UnauthorizedError

logger = logging.getLogger(__name__)


async def notekeeper_error_handler(request: Request, exc: NotekeeperError) -> JSONResponse:
    content = {"detail": exc.detail}
    if isinstance(exc, ForbiddenError):
        content["reason"] = exc.reason.value
    if exc.status_code >= 500:
        logger.error(
            "request failed: %s",
            type(exc).__name__,
            exc_info=exc.__cause__ or exc,
            extra={"path": request.url.path, "method": request.method},
        )
    else:
        logger.info(
            "request rejected: %s",
            type(exc).__name__,
            extra={"path": request.url.path, "method": request.method, "status": exc.status_code},
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=content, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request format", "errors": _jsonable_errors(exc)},
    )


def _jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotekeeperError, notekeeper_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
