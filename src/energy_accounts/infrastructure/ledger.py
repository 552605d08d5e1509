"""In-memory payment ledger."""

from typing import Iterable, Optional

import structlog

from energy_accounts.domain.payments import Payment
from energy_accounts.domain.sources import PaymentStore
from energy_accounts.infrastructure.seed_data import SEED_PAYMENTS

logger = structlog.get_logger(__name__)


class InMemoryPaymentLedger(PaymentStore):
    """Append-only list of completed payments.

    Safe under the single-threaded event loop only: ``append`` never
    suspends, so no other coroutine can observe a partial write. A
    multi-threaded host needs a lock around the list.
    """

    def __init__(self, payments: Optional[Iterable[Payment]] = None) -> None:
        self._payments: list[Payment] = list(payments or ())

    @classmethod
    def seeded(cls) -> "InMemoryPaymentLedger":
        """Create a ledger preloaded with the historical payments."""
        return cls(SEED_PAYMENTS)

    def append(self, payment: Payment) -> None:
        self._payments.append(payment)
        logger.debug("payment_appended", payment_id=payment.id, ledger_size=len(self._payments))

    def snapshot(self) -> list[Payment]:
        return list(self._payments)

    def for_account(self, account_id: str) -> list[Payment]:
        """Return a copy of an account's payments in insertion order."""
        return [payment for payment in self._payments if payment.account_id == account_id]

    def __len__(self) -> int:
        return len(self._payments)
