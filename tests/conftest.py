import json

import pytest
from fastapi.testclient import TestClient

from currency_api.core.config import Settings
from currency_api.main import create_app
from currency_api.services.rates.catalog import RateCatalog, RateEntry

USD = "United States-Dollar"
CANADA = "Canada-Dollar"
EURO = "Euro Zone-Euro"
MEXICO = "Mexico-Peso"

SAMPLE_RATES = [
    RateEntry(CANADA, 1.369, "2025-12-31"),
    RateEntry(EURO, 0.851, "2025-12-31"),
    RateEntry(MEXICO, 17.9, "2025-12-31"),
]


@pytest.fixture
def catalog() -> RateCatalog:
    """Small catalog with the anchor inserted by from_records."""
    return RateCatalog.from_records(SAMPLE_RATES, anchor=USD, anchor_effective_date="2025-12-31")


@pytest.fixture
def rates_file(tmp_path):
    path = tmp_path / "exchange_rates.json"
    path.write_text(
        json.dumps(
            {
                "generated_at": "2026-01-02T00:00:00.000Z",
                "source": "test",
                "record_date": "2025-12-31",
                "count": len(SAMPLE_RATES),
                "currencies": [entry.to_dict() for entry in SAMPLE_RATES],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def settings(rates_file) -> Settings:
    return Settings(rates_file=rates_file, log_json=False, app_name="Test Converter")


@pytest.fixture
def client(settings):
    app = create_app(settings_override=settings)
    with TestClient(app) as c:
        yield c
