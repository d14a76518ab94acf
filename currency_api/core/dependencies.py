"""FastAPI dependencies resolving process-wide state set up by create_app."""

from datetime import datetime

from fastapi import Request

from currency_api.core.config import Settings
from currency_api.services.rates.catalog import RateCatalog


def get_rate_catalog(request: Request) -> RateCatalog:
    catalog = getattr(request.app.state, "rate_catalog", None)
    if catalog is None:
        raise RuntimeError("Rate catalog not initialized")
    return catalog


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_started_at(request: Request) -> datetime:
    return request.app.state.started_at
