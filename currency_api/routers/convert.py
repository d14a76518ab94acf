from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette import status
from starlette.datastructures import QueryParams

from currency_api.core.dependencies import get_rate_catalog
from currency_api.models.constants import CONVERT_PARAMS
from currency_api.models.conversion import ConversionOut, ErrorOut, ValidationErrorOut
from currency_api.services.clock import iso_timestamp
from currency_api.services.rates.catalog import RateCatalog
from currency_api.services.rates.conversion import compute_conversion
from currency_api.services.validation import ValidationFailure, validate_query_params

"""Conversion endpoint.

GET /convert?amount=<number>&from=<currency name>&to=<currency name>

Currency names are full catalog names (e.g. "Canada-Dollar"); the query string
is percent-decoded by Starlette before validation sees it.
"""

router = APIRouter(tags=["convert"])
logger = logging.getLogger("currency_api.convert")

NO_CACHE = {"Cache-Control": "no-cache"}


def extract_convert_params(query: QueryParams) -> Dict[str, Optional[str]]:
    # First occurrence wins when a parameter is repeated.
    return {name: (query.getlist(name) or [None])[0] for name in CONVERT_PARAMS}


def build_conversion_response(params: Dict[str, Optional[str]], catalog: RateCatalog) -> JSONResponse:
    try:
        result = validate_query_params(params, catalog)
        if isinstance(result, ValidationFailure):
            body = ValidationErrorOut(
                message=result.errors[0].message if result.errors else "Invalid request parameters",
                details=result.details(),
            )
            logger.info("rejected conversion: %s", body.details)
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
            )

        conversion = compute_conversion(result.request, catalog)
        out = ConversionOut(
            amount=conversion.amount,
            from_currency=conversion.from_currency,
            to_currency=conversion.to_currency,
            converted_amount=conversion.converted_amount,
            rate=conversion.rate,
            timestamp=iso_timestamp(),
        )
        logger.debug(
            "converted %s %s -> %s %s",
            out.amount,
            out.from_currency,
            out.converted_amount,
            out.to_currency,
        )
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=out.model_dump(by_alias=True),
            headers=NO_CACHE,
        )
    except Exception as e:
        logger.exception("conversion failed")
        body = ErrorOut(error="Conversion failed", message=str(e) or e.__class__.__name__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump()
        )


@router.get(
    "/convert",
    response_model=ConversionOut,
    responses={400: {"model": ValidationErrorOut}, 500: {"model": ErrorOut}},
    summary="Convert an amount to or from the anchor currency",
)
async def convert_currency(
    request: Request,
    catalog: RateCatalog = Depends(get_rate_catalog),
):
    return build_conversion_response(extract_convert_params(request.query_params), catalog)
