"""Interfaces the domain layer consumes.

The domain defines what it needs here and the infrastructure layer
implements it, so services can be exercised against in-memory fakes.
"""

from abc import ABC, abstractmethod

from energy_accounts.domain.accounts import Account
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.payments import Payment


class AccountProvider(ABC):
    """Source of every known account."""

    @abstractmethod
    async def fetch(self) -> list[Account]:
        """Fetch all accounts.

        Raises:
            DataSourceError: If the source cannot deliver its data
        """
        pass


class DueChargeProvider(ABC):
    """Source of every known due charge."""

    @abstractmethod
    async def fetch(self) -> list[DueCharge]:
        """Fetch all due charges.

        Raises:
            DataSourceError: If the source cannot deliver its data
        """
        pass


class PaymentStore(ABC):
    """Append-only payment ledger.

    There is no update or delete operation. Reads return
    copies so callers cannot mutate the stored sequence.
    """

    @abstractmethod
    def append(self, payment: Payment) -> None:
        """Record a completed payment."""
        pass

    @abstractmethod
    def snapshot(self) -> list[Payment]:
        """Return a copy of every recorded payment in insertion order."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass
