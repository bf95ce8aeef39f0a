"""전역 예외 핸들러 — 모든 에러를 표준 ErrorResponse 형식으로 변환.

Global exception handlers. Every error leaves the API in the same shape::

    {"timestamp", "status", "error", "code", "message", "path", "errors"?}

``errors`` (field-level details) appears only for request validation
failures, which are reported as 400 VALIDATION_FAILED.
"""

import logging
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.schemas.common import ErrorResponse, FieldError
from bookstore.utils.exceptions import BusinessError

logger = logging.getLogger(__name__)

# 요청 위치 접두어 — Request location prefixes dropped from field paths
_LOCATIONS = {"body", "query", "path", "header", "cookie"}


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def _code_for(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "HTTP_ERROR"


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    errors: list[FieldError] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """표준 에러 응답 생성 — Build the uniform error JSON response."""
    body = ErrorResponse(
        timestamp=datetime.now(timezone.utc),
        status=status_code,
        error=_reason(status_code),
        code=code,
        message=message,
        path=request.url.path,
        errors=errors or None,
    )
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body.model_dump(exclude_none=True)),
        headers=headers,
    )


def _field_error(error: dict[str, Any]) -> FieldError:
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] in _LOCATIONS:
        loc = loc[1:]
    rejected = None if error.get("type") == "missing" else error.get("input")
    return FieldError(
        field=".".join(loc) or "request",
        rejected_value=None if rejected is None else str(rejected)[:200],
        message=error.get("msg", "invalid value"),
    )


async def business_error_handler(request: Request, exc: BusinessError) -> JSONResponse:
    logger.warning("Business error [%s] %s: %s", exc.error_code, request.url.path, exc.detail)
    return error_response(request, exc.status_code, exc.error_code, str(exc.detail))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        _code_for(exc.status_code),
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_field_error(e) for e in exc.errors()]
    logger.info("Validation failed %s: %d error(s)", request.url.path, len(errors))
    return error_response(
        request,
        400,
        "VALIDATION_FAILED",
        "Request validation failed",
        errors=errors,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(
        request,
        500,
        "INTERNAL_ERROR",
        "An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """앱에 전역 예외 핸들러 등록 — Install all handlers on the application."""
    app.add_exception_handler(BusinessError, business_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
