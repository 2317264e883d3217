"""
Global exception handlers.

Every error leaves the API as ``{"message": ..., "code": ..., "errors": {...}}``
with ``errors`` omitted when empty.
"""

import logging
from typing import Any, Dict, Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.request_context import current_request_id

logger = logging.getLogger(__name__)

_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


def _title_from_status(status_code: int) -> str:
    mapping = {
        400: "Bad Request",
        401: "Authentication required",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        409: "Conflict",
        500: "Internal Server Error",
    }
    return mapping.get(status_code, "Error")


def _envelope(message: str, code: Optional[str] = None, errors: Optional[Any] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message}
    if code:
        body["code"] = code
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return body


def _parse_detail(detail: Any) -> tuple[Optional[str], Optional[str], Optional[Any]]:
    if isinstance(detail, dict):
        code = detail.get("code") if isinstance(detail.get("code"), str) else None
        message = detail.get("message") or detail.get("detail")
        detail_text = message if isinstance(message, str) else None
        return detail_text, code, detail.get("errors")
    if isinstance(detail, str):
        return detail, None, None
    return None, None, None


def _field_name(loc: Sequence[Any]) -> str:
    parts = [str(part) for part in loc if not isinstance(part, int)]
    if parts and parts[0] in _REQUEST_LOCATIONS:
        parts = parts[1:]
    if not parts:
        return "body"
    return to_camel(parts[-1]) if "_" in parts[-1] else parts[-1]


def field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, str]:
    """
    Flatten pydantic errors into ``{camelCaseField: message}``.

    Custom validator messages are passed through; the first error per field wins.
    """
    rendered: Dict[str, str] = {}
    for error in errors:
        field = _field_name(error.get("loc", ()))
        error_type = error.get("type", "")
        message = str(error.get("msg", "Invalid value"))
        if error_type == "missing":
            message = "Request body is required" if field == "body" else f"{field} is required"
        elif error_type == "extra_forbidden":
            message = f"{field} is not allowed"
        elif message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        rendered.setdefault(field, message)
    return rendered


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        detail_text, code, errors = _parse_detail(exc.detail)
        return JSONResponse(
            _envelope(detail_text or _title_from_status(exc.status_code), code, errors),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = field_errors(exc.errors())
        logger.info(f"Request validation failed on {request.url.path}: {sorted(errors)}")
        return JSONResponse(
            _envelope("Bad Request", "VALIDATION_ERROR", errors),
            status_code=400,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            f"Unhandled error on {request.method} {request.url.path} "
            f"(request_id={current_request_id()})"
        )
        return JSONResponse(
            _envelope("Internal Server Error", "INTERNAL_SERVER_ERROR"),
            status_code=500,
        )
