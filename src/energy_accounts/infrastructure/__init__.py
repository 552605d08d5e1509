"""Infrastructure layer: in-memory data sources and the payment ledger."""

from energy_accounts.infrastructure.data_sources import (
    InMemoryAccountSource,
    InMemoryDueChargeSource,
)
from energy_accounts.infrastructure.ledger import InMemoryPaymentLedger

__all__ = [
    "InMemoryAccountSource",
    "InMemoryDueChargeSource",
    "InMemoryPaymentLedger",
]
