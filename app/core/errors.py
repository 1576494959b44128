"""
errors.py

Error taxonomy shared by services and routers, and the handlers that turn
every failure into the JSON envelope the frontend expects:

    {"success": false, "message": "...", "error": "..."}

- UnauthorizedError      : 401, missing/invalid token on a protected route
- ForbiddenError         : 403, authenticated but not owner/admin
- NotFoundError          : 404, id does not resolve
- ValidationFailedError  : 400, missing field, malformed array, duplicate DOI ...
- UnexpectedError        : 500, store/transport failure

"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str, error: str | None = None, headers: dict | None = None):
        super().__init__(message)
        self.message = message
        self.error = error
        self.headers = headers


class UnauthorizedError(AppError):
    status_code = 401


class ForbiddenError(AppError):
    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class ValidationFailedError(AppError):
    status_code = 400


class UnexpectedError(AppError):
    status_code = 500


def error_body(message: str, error: str | None = None) -> dict:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return body


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        field = ".".join(loc)
        parts.append(f"{field}: {err.get('msg')}" if field else str(err.get("msg")))
    return ", ".join(parts) or "Invalid data provided."


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.error)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_body(_format_validation_errors(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
