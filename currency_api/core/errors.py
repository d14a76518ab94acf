import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException

from currency_api.models.constants import ALLOWED_METHODS, AVAILABLE_ENDPOINTS

logger = logging.getLogger("currency_api.errors")


class CurrencyApiError(Exception):
    """Base class for errors raised by the currency API."""


class RateTableError(CurrencyApiError):
    """The static rate table could not be read or parsed."""


class ConversionError(CurrencyApiError):
    """A conversion was requested that the rate catalog cannot serve."""


class CurrencyNotFoundError(ConversionError):
    def __init__(self, currency: str, side: str):
        self.currency = currency
        self.side = side
        super().__init__(f"Currency '{currency}' not found in exchange rates")


class UnsupportedPairError(ConversionError):
    def __init__(self, from_currency: str, to_currency: str, anchor: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.anchor = anchor
        super().__init__(f"Only conversions involving '{anchor}' are supported")


def method_not_allowed_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        content={
            "error": "Method not allowed",
            "message": "This API only supports GET requests",
            "allowed_methods": ALLOWED_METHODS,
        },
        headers={"Allow": ", ".join(ALLOWED_METHODS)},
    )


async def method_guard_middleware(request: Request, call_next):  # type: ignore
    # Runs before routing so unknown paths also answer 405 for non-GET methods.
    if request.method not in ALLOWED_METHODS:
        logger.info("rejected %s %s", request.method, request.url.path)
        return method_not_allowed_response()
    return await call_next(request)


def http_error_handler(request: Request, exc: StarletteHTTPException):  # type: ignore
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return method_not_allowed_response()
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "error": "Not found",
                "message": f"Path {request.url.path} does not exist",
                "available_endpoints": AVAILABLE_ENDPOINTS,
            },
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.exception("unhandled exception")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred.",
        },
    )
