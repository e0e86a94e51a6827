import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.core.errors import AppError
from taskboard.utils.envelope import failure

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    # Drop the "body"/"query"/"path" marker FastAPI puts first.
    parts = [str(part) for part in loc[1:]] if len(loc) > 1 else [str(part) for part in loc]
    return ".".join(parts)


def _clean_message(message: str) -> str:
    return message.replace("Value error, ", "", 1)


def register_exception_handlers(app: FastAPI, debug: bool) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=failure(exc.message, exc.errors))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": _field_name(error.get("loc", ())), "message": _clean_message(error.get("msg", ""))}
            for error in exc.errors()
        ]
        first = errors[0]["message"] if errors else "Invalid request"
        logger.info("%s %s -> 400 %s", request.method, request.url.path, first)
        return JSONResponse(status_code=400, content=failure(f"Validation error: {first}", errors))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content=failure(message), headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        if debug:
            stack = traceback.format_exception(type(exc), exc, exc.__traceback__)
            return JSONResponse(status_code=500, content=failure(str(exc) or "Internal server error", stack=stack))
        return JSONResponse(status_code=500, content=failure("Internal server error"))
