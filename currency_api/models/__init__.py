"""Pydantic response models and routing constants for the currency API."""

from .constants import (
    ALLOWED_METHODS,
    AVAILABLE_ENDPOINTS,
    CONVERT_PARAMS,
)  # re-export
from .conversion import (
    ConversionOut,
    CurrencyListOut,
    ErrorOut,
    GreetingOut,
    HealthOut,
    ValidationErrorOut,
)

__all__ = [
    "ALLOWED_METHODS",
    "AVAILABLE_ENDPOINTS",
    "CONVERT_PARAMS",
    "ConversionOut",
    "CurrencyListOut",
    "ErrorOut",
    "GreetingOut",
    "HealthOut",
    "ValidationErrorOut",
]
