from __future__ import annotations

from typing import Any
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class PriceEngineError(Exception):
    """Base class for failures raised while producing a day of prices."""


class InvalidSampleError(PriceEngineError):
    """An upstream price sample is missing a timestamp or price, or is malformed."""


class NoDataError(PriceEngineError):
    """The price source has nothing for the requested date."""

    def __init__(self, date_key: str | None = None):
        message = f"No price data for {date_key}." if date_key else "No price data."
        super().__init__(message)
        self.date_key = date_key


class TransportError(PriceEngineError):
    """The price source could not be reached or returned an unusable body."""


class ApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str, detail: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.detail = detail


def _error_body(code: str, message: str, request_id: str | None, detail: Any = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if detail is not None:
        payload["error"]["detail"] = detail
    if request_id:
        payload["error"]["request_id"] = request_id
    return payload


def _status_code_to_error_code(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        404: "NOT_FOUND",
        422: "VALIDATION_ERROR",
        500: "INTERNAL_ERROR",
        502: "UPSTREAM_ERROR",
        503: "SERVICE_UNAVAILABLE",
    }
    return mapping.get(status_code, f"HTTP_{status_code}")


def _json_error(request: Request, status_code: int, code: str, message: str, detail: Any = None):
    request_id = getattr(request.state, "request_id", None)
    return JSONResponse(
        status_code=status_code,
        content=_error_body(code, message, request_id, detail=detail),
        headers={"X-Request-ID": request_id} if request_id else None,
    )


def register_error_handling(app: FastAPI, logger):
    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid4().hex[:12]
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return _json_error(request, exc.status_code, exc.code, exc.message, detail=exc.detail)

    @app.exception_handler(NoDataError)
    async def no_data_handler(request: Request, exc: NoDataError):
        request_id = getattr(request.state, "request_id", None)
        return Response(status_code=204, headers={"X-Request-ID": request_id} if request_id else None)

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError):
        logger.warning("Price source failed [request_id=%s]: %s", getattr(request.state, "request_id", None), exc)
        return _json_error(request, 502, "UPSTREAM_ERROR", "Price source is unavailable.", detail=str(exc))

    @app.exception_handler(InvalidSampleError)
    async def invalid_sample_handler(request: Request, exc: InvalidSampleError):
        logger.warning("Price source returned invalid data [request_id=%s]: %s", getattr(request.state, "request_id", None), exc)
        return _json_error(request, 502, "INVALID_UPSTREAM_DATA", "Price source returned invalid data.", detail=str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return _json_error(
            request,
            422,
            "VALIDATION_ERROR",
            "Request validation failed.",
            detail=exc.errors(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        code = _status_code_to_error_code(exc.status_code)
        detail = None
        message = "Request failed."
        if isinstance(exc.detail, dict):
            code = str(exc.detail.get("code") or code)
            message = str(exc.detail.get("message") or exc.detail.get("detail") or message)
            detail = exc.detail.get("detail")
        elif exc.detail:
            message = str(exc.detail)
        return _json_error(request, exc.status_code, code, message, detail=detail)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", None)
        logger.exception("Unhandled API exception [request_id=%s]", request_id)
        return _json_error(request, 500, "INTERNAL_ERROR", "Unexpected internal error.")
