from __future__ import annotations

from datetime import UTC, datetime
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from personapi.errors import PersonApiError
from personapi.logging import get_logger

logger = get_logger(__name__)


def error_body(status_code: int, message: str, path: str) -> dict[str, Any]:
    try:
        reason = HTTPStatus(status_code).phrase
    except ValueError:
        reason = "Error"
    return {
        "timestamp": datetime.now(UTC).isoformat(),
        "status": status_code,
        "error": reason,
        "message": message,
        "path": path,
    }


def _respond(
    request: Request,
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    path = request.url.path
    if status_code >= 500:
        logger.error("%s %s -> %d: %s", request.method, path, status_code, message)
    else:
        logger.warning("%s %s -> %d: %s", request.method, path, status_code, message)
    return JSONResponse(
        status_code=status_code,
        content=error_body(status_code, message, path),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Return every failure as ``{timestamp, status, error, message, path}``."""

    @app.exception_handler(PersonApiError)
    async def person_api_error_handler(request: Request, exc: PersonApiError) -> JSONResponse:
        return _respond(request, exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return _respond(request, exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        return _respond(request, 400, problems or "Request validation failed")
