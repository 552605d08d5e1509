"""In-memory account and due charge sources with simulated latency.

These stand in for the upstream account and billing APIs. Each fetch
suspends for the configured latency and then returns a fresh list over
the static seed set, so callers cannot disturb the canonical data.
"""

import asyncio
from typing import Iterable, Optional

import structlog

from energy_accounts.domain.accounts import Account
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.sources import AccountProvider, DueChargeProvider
from energy_accounts.infrastructure.seed_data import SEED_ACCOUNTS, SEED_DUE_CHARGES

logger = structlog.get_logger(__name__)


async def _simulate_latency(latency_ms: int) -> None:
    if latency_ms > 0:
        await asyncio.sleep(latency_ms / 1000.0)


class InMemoryAccountSource(AccountProvider):
    """Static account set."""

    def __init__(
        self,
        accounts: Optional[Iterable[Account]] = None,
        latency_ms: int = 0,
    ) -> None:
        self._accounts = tuple(SEED_ACCOUNTS if accounts is None else accounts)
        self.latency_ms = latency_ms

    async def fetch(self) -> list[Account]:
        await _simulate_latency(self.latency_ms)
        logger.debug("accounts_fetched", count=len(self._accounts))
        return list(self._accounts)


class InMemoryDueChargeSource(DueChargeProvider):
    """Static due charge set."""

    def __init__(
        self,
        charges: Optional[Iterable[DueCharge]] = None,
        latency_ms: int = 0,
    ) -> None:
        self._charges = tuple(SEED_DUE_CHARGES if charges is None else charges)
        self.latency_ms = latency_ms

    async def fetch(self) -> list[DueCharge]:
        await _simulate_latency(self.latency_ms)
        logger.debug("due_charges_fetched", count=len(self._charges))
        return list(self._charges)
