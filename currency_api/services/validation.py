"""Query parameter validation for GET /convert.

Validation produces data rather than raising: the handler needs every
field-level error to build the 400 ``details`` object. Missing parameters
short-circuit and are reported as a single error; amount, currency and
anchor-pair problems accumulate.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import List, Literal, Mapping, Optional, Union, TYPE_CHECKING

from currency_api.models.constants import CONVERT_PARAMS

if TYPE_CHECKING:  # pragma: no cover
    from currency_api.services.rates.catalog import RateCatalog

# Longest numeric prefix, after leading whitespace ("12.5abc" -> "12.5").
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str


@dataclass(frozen=True)
class ConversionRequest:
    amount: float
    from_currency: str
    to_currency: str


@dataclass(frozen=True)
class ValidationSuccess:
    request: ConversionRequest
    valid: Literal[True] = True


@dataclass(frozen=True)
class ValidationFailure:
    errors: List[ValidationError] = field(default_factory=list)
    valid: Literal[False] = False

    def details(self) -> dict:
        return {e.field: e.message for e in self.errors}


ValidationResult = Union[ValidationSuccess, ValidationFailure]


def parse_leading_float(text: str) -> float:
    """Parse the numeric prefix of ``text``; NaN when there is none."""
    match = _LEADING_FLOAT.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def is_valid_amount(amount: float) -> bool:
    return math.isfinite(amount) and amount > 0


def is_currency_supported(name: str, catalog: "RateCatalog") -> bool:
    return catalog.has(name)


def is_anchor_pair(from_currency: str, to_currency: str, anchor: str) -> bool:
    return from_currency == anchor or to_currency == anchor


def validate_query_params(params: Mapping[str, Optional[str]], catalog: "RateCatalog") -> ValidationResult:
    missing = [name for name in CONVERT_PARAMS if not params.get(name)]
    if missing:
        return ValidationFailure(
            [
                ValidationError(
                    field="parameters",
                    message=f"Missing required parameters: {', '.join(missing)}",
                )
            ]
        )

    amount_raw = params["amount"] or ""
    from_currency = params["from"] or ""
    to_currency = params["to"] or ""
    errors: List[ValidationError] = []

    amount = parse_leading_float(amount_raw)
    if not math.isfinite(amount):
        errors.append(ValidationError("amount", "Amount must be a valid number"))
    elif amount <= 0:
        errors.append(ValidationError("amount", "Amount must be greater than 0"))

    if not is_currency_supported(from_currency, catalog):
        errors.append(ValidationError("from", f"Currency '{from_currency}' is not supported"))
    if not is_currency_supported(to_currency, catalog):
        errors.append(ValidationError("to", f"Currency '{to_currency}' is not supported"))

    anchor = catalog.anchor
    if not is_anchor_pair(from_currency, to_currency, anchor):
        errors.append(
            ValidationError("currencies", f"Only conversions involving '{anchor}' are supported")
        )

    if errors:
        return ValidationFailure(errors)
    return ValidationSuccess(ConversionRequest(amount, from_currency, to_currency))
