"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- A fixed clock pinned to 2025-05-06
- Sample card details
- Settings with every simulated delay switched off
- Wired services and a FastAPI test client over a fresh seeded ledger
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from energy_accounts.api.dependencies import build_services
from energy_accounts.api.main import create_app
from energy_accounts.config import Settings
from energy_accounts.domain.clock import FixedClock
from energy_accounts.domain.payments import CreditCardDetails
from energy_accounts.infrastructure.data_sources import (
    InMemoryAccountSource,
    InMemoryDueChargeSource,
)
from energy_accounts.infrastructure.ledger import InMemoryPaymentLedger

FIXED_NOW = datetime(2025, 5, 6, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    """Clock pinned to 2025-05-06T10:00:00Z."""
    return FixedClock(FIXED_NOW)


@pytest.fixture
def valid_card():
    """Card details that pass validation at FIXED_NOW."""
    return CreditCardDetails(
        card_number="4111111111111111",
        cardholder_name="Test User",
        expiry_date="12/30",
        cvv="123",
    )


@pytest.fixture
def test_settings():
    """Settings with simulated latency disabled."""
    return Settings(
        data_source_latency_ms=0,
        payment_processing_delay_ms=0,
        payment_history_delay_ms=0,
    )


@pytest.fixture
def ledger():
    """Fresh ledger preloaded with the historical payments."""
    return InMemoryPaymentLedger.seeded()


@pytest.fixture
def account_source():
    return InMemoryAccountSource()


@pytest.fixture
def charge_source():
    return InMemoryDueChargeSource()


@pytest.fixture
def services(test_settings, ledger, fixed_clock):
    """Service container sharing the test ledger and clock."""
    return build_services(test_settings, ledger=ledger, clock=fixed_clock)


@pytest.fixture
def app(services):
    """FastAPI application wired to the test services."""
    return create_app(services=services)


@pytest.fixture
def client(app):
    """FastAPI test client."""
    return TestClient(app)
