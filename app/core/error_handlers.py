"""
Exception handlers mapping application errors to the JSON error envelope.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import AuthenticationError, BaseAppException, InfrastructureError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message}, headers=headers)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        logger.error("%s %s - infrastructure error: %s", request.method, request.url.path, exc.details)
    else:
        logger.info("%s %s - %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return _error(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "Invalid request"))
    logger.info("%s %s - malformed request: %s", request.method, request.url.path, messages)
    return _error(400, ", ".join(messages) or "Invalid request")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s - unhandled error", request.method, request.url.path)
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
