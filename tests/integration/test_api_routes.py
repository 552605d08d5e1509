"""Integration tests for the HTTP surface using FastAPI's TestClient."""

import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from energy_accounts.api.dependencies import build_services
from energy_accounts.api.main import create_app

pytestmark = pytest.mark.integration

VALID_CARD = {
    "cardNumber": "4111111111111111",
    "cardholderName": "Test User",
    "expiryDate": "12/30",
    "cvv": "123",
}


def failing_source() -> AsyncMock:
    source = AsyncMock()
    source.fetch.side_effect = RuntimeError("upstream unavailable")
    return source


@pytest.fixture
def broken_charges_client(test_settings, fixed_clock):
    """Client whose due charge source always fails."""
    services = build_services(test_settings, clock=fixed_clock, charge_source=failing_source())
    return TestClient(create_app(services=services))


@pytest.fixture
def broken_accounts_client(test_settings, fixed_clock):
    """Client whose account source always fails."""
    services = build_services(test_settings, clock=fixed_clock, account_source=failing_source())
    return TestClient(create_app(services=services))


class TestHealthAndDocs:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "UP"
        assert "timestamp" in data

    def test_api_docs(self, client):
        assert client.get("/api-docs").status_code == 200

    def test_unknown_route(self, client):
        response = client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"message": "Route not found"}

    def test_unhandled_error(self, app):
        async def explode():
            raise RuntimeError("boom")

        app.add_api_route("/explode", explode)
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/explode")

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error", "error": "boom"}


class TestAccountRoutes:
    """Tests for /api/accounts."""

    def test_list_accounts(self, client):
        response = client.get("/api/accounts")

        assert response.status_code == 200
        accounts = response.json()
        assert len(accounts) == 9
        first = accounts[0]
        assert first["id"] == "A-0001"
        assert first["type"] == "ELECTRICITY"
        assert first["accountNumber"] == "ELEC-0001"
        assert first["balance"] == 30
        assert "volume" not in first

    def test_balances_are_computed(self, client):
        accounts = {item["id"]: item for item in client.get("/api/accounts").json()}

        assert accounts["A-0002"]["balance"] == 0
        assert accounts["A-0004"]["balance"] == 50
        assert accounts["A-0009"]["balance"] == 60

    def test_filter_by_type_and_search(self, client):
        response = client.get("/api/accounts", params={"type": "GAS", "search": "victoria"})

        assert [item["id"] for item in response.json()] == ["A-0002"]

    def test_invalid_type_filter(self, client):
        response = client.get("/api/accounts", params={"type": "WATER"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request"

    def test_list_accounts_upstream_failure(self, broken_accounts_client):
        response = broken_accounts_client.get("/api/accounts")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch accounts"}

    def test_get_account(self, client):
        response = client.get("/api/accounts/A-0008")

        assert response.status_code == 200
        data = response.json()
        assert data["firstName"] == "Matthew"
        assert data["balance"] == 120

    def test_get_unknown_account(self, client):
        response = client.get("/api/accounts/A-9999")

        assert response.status_code == 404
        assert response.json() == {"message": "Account not found"}

    def test_get_account_upstream_failure(self, broken_charges_client):
        response = broken_charges_client.get("/api/accounts/A-0001")

        assert response.status_code == 500
        assert response.json() == {"message": "Error fetching account"}


class TestDueChargeRoutes:
    def test_due_charges(self, client):
        response = client.get("/api/payments/A-0001/due-charges")

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": "D-0001",
                "accountId": "A-0001",
                "amount": 10,
                "date": "2025-04-01",
                "description": "Electricity usage - March 2025",
                "paid": False,
            },
            {
                "id": "D-0002",
                "accountId": "A-0001",
                "amount": 20,
                "date": "2025-04-08",
                "description": "Service fee - Q2 2025",
                "paid": False,
            },
        ]

    def test_account_without_charges(self, client):
        response = client.get("/api/payments/A-0002/due-charges")

        assert response.status_code == 200
        assert response.json() == []

    def test_upstream_failure(self, broken_charges_client):
        response = broken_charges_client.get("/api/payments/A-0001/due-charges")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch due charges"}


class TestMakePaymentRoute:
    """Tests for POST /api/payments/{account_id}/payment."""

    def test_successful_payment(self, client, ledger):
        before = len(ledger)

        response = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 30, "method": "CARD", "cardDetails": VALID_CARD},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"].startswith("payment_")
        assert data["accountId"] == "A-0001"
        assert data["amount"] == 30
        assert data["method"] == "CARD"
        assert data["status"] == "COMPLETED"
        assert data["reference"].startswith("PAY-")
        assert data["date"].startswith("2025-05-06T10:00:00")
        assert data["cardDetails"] == {
            "cardNumber": "xxxx-xxxx-xxxx-1111",
            "cardholderName": "Test User",
        }
        assert len(ledger) == before + 1

    def test_payment_appears_in_history_first(self, client):
        created = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 12.5, "method": "CARD", "cardDetails": VALID_CARD},
        ).json()

        history = client.get("/api/payments/A-0001/history").json()

        assert [item["id"] for item in history] == [created["id"], "payment_12345678"]

    def test_raw_card_data_never_returned(self, client):
        client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 30, "method": "CARD", "cardDetails": VALID_CARD},
        )

        body = client.get("/api/payments/A-0001/history").text

        assert "4111111111111111" not in body
        assert "cvv" not in body
        assert "12/30" not in body

    @pytest.mark.parametrize("amount", [0, -5])
    def test_non_positive_amount(self, client, amount):
        response = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": amount, "method": "CARD", "cardDetails": VALID_CARD},
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Amount must be greater than 0",
            "errors": {"amount": "Amount must be greater than 0"},
        }

    @pytest.mark.parametrize("amount", ["1e999", "Infinity", "NaN"])
    def test_non_finite_amount_rejected(self, client, ledger, amount):
        before = len(ledger)
        body = (
            f'{{"amount": {amount}, "method": "CARD", "cardDetails": {json.dumps(VALID_CARD)}}}'
        )

        response = client.post(
            "/api/payments/A-0003/payment",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"amount": "Amount must be greater than 0"}
        assert len(ledger) == before
        assert client.get("/api/payments/A-0003/history").status_code == 200

    def test_legacy_route_rejects_non_finite_amount(self, client, ledger):
        before = len(ledger)
        body = (
            f'{{"accountId": "A-0003", "amount": 1e999, '
            f'"cardDetails": {json.dumps(VALID_CARD)}}}'
        )

        response = client.post(
            "/api/payments",
            content=body.encode(),
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}
        assert len(ledger) == before

    def test_missing_method(self, client):
        response = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 30, "cardDetails": VALID_CARD},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Payment method and card details are required"}

    def test_missing_card_details(self, client):
        response = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 30, "method": "CARD"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Payment method and card details are required"}

    def test_non_card_method(self, client, ledger):
        before = len(ledger)

        response = client.post(
            "/api/payments/A-0001/payment",
            json={"amount": 30, "method": "BANK_TRANSFER", "cardDetails": VALID_CARD},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Only card payments are supported"}
        assert len(ledger) == before

    def test_expired_card(self, client, ledger):
        before = len(ledger)

        response = client.post(
            "/api/payments/A-0001/payment",
            json={
                "amount": 30,
                "method": "CARD",
                "cardDetails": {**VALID_CARD, "expiryDate": "01/25"},
            },
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "Card has expired",
            "errors": {"expiryDate": "Card has expired"},
        }
        assert len(ledger) == before

    def test_several_invalid_fields(self, client):
        response = client.post(
            "/api/payments/A-0001/payment",
            json={
                "amount": 30,
                "method": "CARD",
                "cardDetails": {"cardNumber": "411111", "expiryDate": "13/30", "cvv": "1"},
            },
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {
            "cardNumber": "Invalid card number format",
            "cardholderName": "Cardholder name is required",
            "expiryDate": "Invalid format (use MM/YY)",
            "cvv": "CVV must be 3 or 4 digits",
        }

    def test_empty_body(self, client):
        response = client.post(
            "/api/payments/A-0001/payment",
            content=b"",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Empty request body"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/payments/A-0001/payment",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid JSON request")


class TestHistoryRoutes:
    def test_seeded_history(self, client):
        response = client.get("/api/payments/A-0004/history")

        assert response.status_code == 200
        history = response.json()
        assert len(history) == 1
        assert history[0]["reference"] == "PAY-2345678901"
        assert history[0]["cardDetails"]["cardNumber"] == "xxxx-xxxx-xxxx-5678"

    def test_history_search(self, client):
        assert client.get(
            "/api/payments/A-0004/history", params={"search": "pay-2345"}
        ).json()[0]["id"] == "payment_23456789"
        assert client.get(
            "/api/payments/A-0004/history", params={"search": "nothing"}
        ).json() == []

    def test_unknown_account_history_is_empty(self, client):
        response = client.get("/api/payments/A-9999/history")

        assert response.status_code == 200
        assert response.json() == []


class TestLegacyPaymentRoutes:
    """Tests for the legacy /api/payments routes."""

    def test_legacy_create_payment(self, client, ledger):
        response = client.post(
            "/api/payments",
            json={"accountId": "A-0003", "amount": 40, "cardDetails": VALID_CARD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["accountId"] == "A-0003"
        assert data["status"] == "COMPLETED"
        assert ledger.for_account("A-0003")[-1].id == data["id"]

    @pytest.mark.parametrize(
        "body",
        [
            {"amount": 40, "cardDetails": VALID_CARD},
            {"accountId": "A-0003", "cardDetails": VALID_CARD},
            {"accountId": "A-0003", "amount": 0, "cardDetails": VALID_CARD},
            {"accountId": "A-0003", "amount": 40},
        ],
    )
    def test_legacy_missing_fields(self, client, body):
        response = client.post("/api/payments", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_legacy_validation_failure(self, client):
        response = client.post(
            "/api/payments",
            json={
                "accountId": "A-0003",
                "amount": 40,
                "cardDetails": {**VALID_CARD, "cvv": "12"},
            },
        )

        assert response.status_code == 400
        assert response.json() == {
            "error": "CVV must be 3 or 4 digits",
            "errors": {"cvv": "CVV must be 3 or 4 digits"},
        }

    def test_legacy_history(self, client):
        response = client.get("/api/payments")

        assert response.status_code == 200
        assert [item["id"] for item in response.json()] == ["payment_12345678"]

    def test_legacy_history_account_is_configurable(self, test_settings, fixed_clock):
        settings = test_settings.model_copy(update={"legacy_history_account_id": "A-0008"})
        client = TestClient(create_app(services=build_services(settings, clock=fixed_clock)))

        response = client.get("/api/payments")

        assert [item["id"] for item in response.json()] == ["payment_34567890"]
