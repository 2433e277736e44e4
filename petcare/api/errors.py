# petcare/api/errors.py
"""
Перевод доменных ошибок в HTTP-ответы.
Единственное место, где известны статусы ответов.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from petcare.common.exceptions import AppError
from petcare.common.logger import log_error, log_warning
from petcare.shared.models.common import ErrorResponse

LOGGER_NAME = "petcare.api"


def _error_response(status_code: int, code: str, message: str, details: dict | None = None) -> JSONResponse:
    body = ErrorResponse(error_code=code, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Регистрирует обработчики ошибок в приложении."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        await log_warning(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}",
            logger_name=LOGGER_NAME,
        )
        return _error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [
            {
                "loc": [str(part) for part in error.get("loc", ())],
                "msg": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
            for error in exc.errors()
        ]
        return _error_response(400, "VALIDATION_ERROR", "Input validation failed", {"errors": errors})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        await log_error(
            f"Необработанная ошибка {request.method} {request.url.path}: {exc}",
            logger_name=LOGGER_NAME,
            extra={"client": request.client.host if request.client else "unknown"},
            exc_info=True,
        )
        return _error_response(500, "INTERNAL_ERROR", "An internal error occurred")

