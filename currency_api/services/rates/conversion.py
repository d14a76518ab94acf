from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from currency_api.core.errors import CurrencyNotFoundError, UnsupportedPairError
from currency_api.services.money import round2

if TYPE_CHECKING:  # pragma: no cover
    from currency_api.services.validation import ConversionRequest
    from .catalog import RateCatalog

"""Anchor-based conversion.

Catalog rates are units of a currency per 1 anchor unit, so:
    - anchor -> foreign multiplies by the foreign rate
    - foreign -> anchor divides by the foreign rate
Rounding (round2) is applied once, to the converted amount only; effective
rates are returned unrounded.
"""


@dataclass(frozen=True)
class ConversionResult:
    amount: float
    from_currency: str
    to_currency: str
    converted_amount: float
    rate: float


def convert(amount: float, from_currency: str, to_currency: str, catalog: "RateCatalog") -> float:
    if from_currency == to_currency:
        return round2(amount)

    from_rate = catalog.get(from_currency)
    to_rate = catalog.get(to_currency)
    if from_rate is None:
        raise CurrencyNotFoundError(from_currency, "from")
    if to_rate is None:
        raise CurrencyNotFoundError(to_currency, "to")

    anchor = catalog.anchor
    if from_currency == anchor:
        result = amount * to_rate.rate
    elif to_currency == anchor:
        result = amount / from_rate.rate
    else:
        raise UnsupportedPairError(from_currency, to_currency, anchor)
    return round2(result)


def get_effective_rate(from_currency: str, to_currency: str, catalog: "RateCatalog") -> Optional[float]:
    if from_currency == to_currency:
        return 1.0

    from_rate = catalog.get(from_currency)
    to_rate = catalog.get(to_currency)
    if from_rate is None or to_rate is None:
        return None

    if from_currency == catalog.anchor:
        return to_rate.rate
    if to_currency == catalog.anchor:
        return 1 / from_rate.rate
    return None


def compute_conversion(request: "ConversionRequest", catalog: "RateCatalog") -> ConversionResult:
    converted = convert(request.amount, request.from_currency, request.to_currency, catalog)
    rate = get_effective_rate(request.from_currency, request.to_currency, catalog)
    return ConversionResult(
        amount=request.amount,
        from_currency=request.from_currency,
        to_currency=request.to_currency,
        converted_amount=converted,
        rate=rate if rate is not None else 1.0,
    )
