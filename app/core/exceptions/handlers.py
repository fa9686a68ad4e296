from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import traceback
from app.core.exceptions.errors import ProxyError
from app.core.responses import json_error
from app.utils.logging import get_logger


def register_exception_handlers(app):
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger = get_logger()
        logger.error(
            f"Unhandled exception for {request.method} {request.url}: {exc}\n"
            f"Traceback: {traceback.format_exc()}\n"
            f"User-Agent: {request.headers.get('user-agent')}"
        )
        return json_error("An unexpected error occurred.", data={"detail": str(exc)})

    @app.exception_handler(ProxyError)
    async def proxy_exception_handler(request: Request, exc: ProxyError):
        logger = get_logger()
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                f"{type(exc).__name__} for {request.method} {request.url}: {exc}"
            )
        else:
            logger.warning(
                f"{type(exc).__name__} {exc.status_code} for "
                f"{request.method} {request.url}: {exc}"
            )
        return json_error(exc.message, status_code=exc.status_code, data=exc.to_data())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        logger = get_logger()
        raw_errors = exc.errors()
        logger.warning(
            f"Validation error for {request.method} {request.url}: {raw_errors}"
        )

        friendly_errors = {}
        for error in raw_errors:
            field = ".".join(map(str, error["loc"][1:] or error["loc"]))
            friendly_errors[field] = error["msg"]

        return json_error(
            "Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            data={"errors": friendly_errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger = get_logger()
        logger.warning(
            f"HTTP {exc.status_code} for {request.method} {request.url}: {exc.detail}"
        )
        return json_error(str(exc.detail), status_code=exc.status_code)
