"""Unit tests for the in-memory sources and payment ledger."""

from unittest.mock import patch

import pytest

from energy_accounts.domain.accounts import ElectricityAccount, GasAccount
from energy_accounts.infrastructure.data_sources import (
    InMemoryAccountSource,
    InMemoryDueChargeSource,
)
from energy_accounts.infrastructure.ledger import InMemoryPaymentLedger
from energy_accounts.infrastructure.seed_data import (
    SEED_ACCOUNTS,
    SEED_DUE_CHARGES,
    SEED_PAYMENTS,
)


class TestSeedData:
    def test_account_ids_are_unique(self):
        ids = [account.id for account in SEED_ACCOUNTS]

        assert len(ids) == len(set(ids)) == 9

    def test_charges_reference_known_accounts(self):
        account_ids = {account.id for account in SEED_ACCOUNTS}

        assert all(charge.account_id in account_ids for charge in SEED_DUE_CHARGES)

    def test_seed_payments_are_masked(self):
        for payment in SEED_PAYMENTS:
            assert payment.card_details.card_number.startswith("xxxx-xxxx-xxxx-")

    def test_variants(self):
        accounts = {account.id: account for account in SEED_ACCOUNTS}

        assert isinstance(accounts["A-0001"], ElectricityAccount)
        assert isinstance(accounts["A-0002"], GasAccount)


class TestInMemorySources:
    """Tests for the simulated upstream sources."""

    @pytest.mark.asyncio
    async def test_account_source_returns_seed(self):
        accounts = await InMemoryAccountSource().fetch()

        assert accounts == list(SEED_ACCOUNTS)

    @pytest.mark.asyncio
    async def test_fetch_returns_fresh_list(self):
        source = InMemoryDueChargeSource()

        charges = await source.fetch()
        charges.clear()

        assert len(await source.fetch()) == len(SEED_DUE_CHARGES)

    @pytest.mark.asyncio
    async def test_custom_data(self):
        account = GasAccount(id="G-1", address="somewhere", volume=12.5)
        source = InMemoryAccountSource([account])

        assert await source.fetch() == [account]

    @pytest.mark.asyncio
    async def test_empty_data_is_not_replaced_by_seed(self):
        assert await InMemoryDueChargeSource([]).fetch() == []

    @pytest.mark.asyncio
    async def test_latency_is_simulated(self):
        source = InMemoryAccountSource(latency_ms=300)

        with patch("energy_accounts.infrastructure.data_sources.asyncio.sleep") as mock_sleep:
            await source.fetch()

        mock_sleep.assert_awaited_once_with(0.3)

    @pytest.mark.asyncio
    async def test_no_latency_skips_sleep(self):
        with patch("energy_accounts.infrastructure.data_sources.asyncio.sleep") as mock_sleep:
            await InMemoryDueChargeSource(latency_ms=0).fetch()

        mock_sleep.assert_not_awaited()


class TestInMemoryPaymentLedger:
    def test_seeded(self):
        ledger = InMemoryPaymentLedger.seeded()

        assert len(ledger) == 3
        assert ledger.snapshot() == list(SEED_PAYMENTS)

    def test_seeded_ledgers_are_independent(self):
        first = InMemoryPaymentLedger.seeded()
        second = InMemoryPaymentLedger.seeded()

        first.append(SEED_PAYMENTS[0])

        assert len(first) == 4
        assert len(second) == 3

    def test_append_preserves_order(self):
        ledger = InMemoryPaymentLedger()

        for payment in SEED_PAYMENTS:
            ledger.append(payment)

        assert ledger.snapshot() == list(SEED_PAYMENTS)

    def test_snapshot_is_a_copy(self):
        ledger = InMemoryPaymentLedger.seeded()

        ledger.snapshot().clear()

        assert len(ledger) == 3

    def test_for_account(self):
        ledger = InMemoryPaymentLedger.seeded()

        assert [payment.id for payment in ledger.for_account("A-0004")] == ["payment_23456789"]
        assert ledger.for_account("A-0002") == []
