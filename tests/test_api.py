import re

import pytest

from currency_api.models.constants import AVAILABLE_ENDPOINTS
from currency_api.routers import convert as convert_router

from .conftest import CANADA, EURO, MEXICO, USD


class TestConvertEndpoint:
    def test_anchor_to_foreign(self, client):
        response = client.get("/convert", params={"amount": "100", "from": USD, "to": CANADA})

        assert response.status_code == 200
        body = response.json()
        assert body["amount"] == 100
        assert body["from"] == USD
        assert body["to"] == CANADA
        assert body["converted_amount"] == 136.90
        assert body["rate"] == 1.369
        assert body["timestamp"].endswith("Z")
        assert response.headers["content-type"].startswith("application/json")
        assert response.headers["cache-control"] == "no-cache"

    def test_foreign_to_anchor(self, client):
        response = client.get("/convert", params={"amount": "150", "from": CANADA, "to": USD})

        assert response.status_code == 200
        body = response.json()
        assert body["converted_amount"] == 109.57
        assert body["rate"] == pytest.approx(0.7305, abs=1e-4)

    def test_percent_encoded_names(self, client):
        response = client.get("/convert?amount=10&from=United%20States-Dollar&to=Euro%20Zone-Euro")

        assert response.status_code == 200
        assert response.json()["to"] == EURO
        assert response.json()["converted_amount"] == 8.51

    def test_same_currency(self, client):
        response = client.get("/convert", params={"amount": "42.424", "from": USD, "to": USD})

        assert response.status_code == 200
        assert response.json()["converted_amount"] == 42.42
        assert response.json()["rate"] == 1.0

    def test_missing_parameters(self, client):
        response = client.get("/convert")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid parameters"
        assert body["message"] == "Missing required parameters: amount, from, to"
        assert body["details"] == {"parameters": body["message"]}

    def test_invalid_amount(self, client):
        response = client.get("/convert", params={"amount": "abc", "from": USD, "to": CANADA})

        assert response.status_code == 400
        assert "valid number" in response.json()["details"]["amount"]

    def test_negative_amount(self, client):
        response = client.get("/convert", params={"amount": "-5", "from": USD, "to": CANADA})

        assert response.status_code == 400
        assert "greater than 0" in response.json()["message"]

    def test_non_anchor_pair(self, client):
        response = client.get("/convert", params={"amount": "100", "from": CANADA, "to": EURO})

        assert response.status_code == 400
        assert USD in response.json()["details"]["currencies"]

    def test_all_errors_in_details(self, client):
        response = client.get("/convert", params={"amount": "0", "from": "Fake-A", "to": "Fake-B"})

        body = response.json()
        assert response.status_code == 400
        assert set(body["details"]) == {"amount", "from", "to", "currencies"}
        assert body["message"] == body["details"]["amount"]

    def test_unexpected_failure_is_500(self, client, monkeypatch):
        def boom(request, catalog):
            raise RuntimeError("rate table exploded")

        monkeypatch.setattr(convert_router, "compute_conversion", boom)
        response = client.get("/convert", params={"amount": "1", "from": USD, "to": CANADA})

        assert response.status_code == 500
        assert response.json() == {"error": "Conversion failed", "message": "rate table exploded"}

    def test_failure_without_message_reports_exception_name(self, client, monkeypatch):
        def boom(request, catalog):
            raise LookupError()

        monkeypatch.setattr(convert_router, "compute_conversion", boom)
        response = client.get("/convert", params={"amount": "1", "from": USD, "to": CANADA})

        assert response.status_code == 500
        assert response.json()["message"] == "LookupError"

    def test_rounds_scaled_cents(self, client):
        response = client.get("/convert", params={"amount": "1.005", "from": USD, "to": USD})

        assert response.status_code == 200
        assert response.json()["converted_amount"] == 1.0

    @pytest.mark.parametrize(
        "amount, to, expected",
        [("1e26", USD, 1e26), ("1e307", MEXICO, 1e307 * 17.9)],
    )
    def test_very_large_amounts(self, client, amount, to, expected):
        response = client.get("/convert", params={"amount": amount, "from": USD, "to": to})

        assert response.status_code == 200
        assert response.json()["converted_amount"] == expected


class TestRouting:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert re.fullmatch(r"\d+:\d{2}:\d{2}", body["uptime"])

    @pytest.mark.parametrize("path", ["/", "/hello"])
    def test_greeting(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Hello World!"
        assert body["service"] == "Test Converter"
        assert response.headers["cache-control"] == "no-cache"

    def test_currencies(self, client):
        response = client.get("/currencies")

        body = response.json()
        assert response.status_code == 200
        assert body["anchor"] == USD
        assert body["count"] == 4
        assert body["currencies"] == sorted(body["currencies"])
        assert CANADA in body["currencies"]

    def test_unknown_path(self, client):
        response = client.get("/nope")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "Not found"
        assert body["message"] == "Path /nope does not exist"
        assert "/health" in body["available_endpoints"]
        assert "/convert" in body["available_endpoints"]
        assert body["available_endpoints"] == AVAILABLE_ENDPOINTS

    @pytest.mark.parametrize(
        "method, path",
        [("POST", "/convert"), ("PUT", "/health"), ("DELETE", "/nope"), ("PATCH", "/"), ("HEAD", "/health")],
    )
    def test_non_get_is_405(self, client, method, path):
        response = client.request(method, path)

        assert response.status_code == 405
        assert response.headers["allow"] == "GET"
        if method != "HEAD":
            body = response.json()
            assert body["error"] == "Method not allowed"
            assert body["allowed_methods"] == ["GET"]

    def test_request_id_header(self, client):
        response = client.get("/health")

        assert response.headers["x-request-id"]
