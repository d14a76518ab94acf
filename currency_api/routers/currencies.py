from fastapi import APIRouter, Depends

from currency_api.core.dependencies import get_rate_catalog
from currency_api.models.conversion import CurrencyListOut
from currency_api.services.rates.catalog import RateCatalog

router = APIRouter(tags=["currencies"])


@router.get("/currencies", response_model=CurrencyListOut, summary="List supported currency names")
async def list_currencies(catalog: RateCatalog = Depends(get_rate_catalog)):
    names = catalog.names()
    return CurrencyListOut(anchor=catalog.anchor, currencies=names, count=len(names))
