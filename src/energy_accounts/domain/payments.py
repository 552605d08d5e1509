"""Payment domain models.

Raw card data only ever lives in ``CreditCardDetails``, which exists for
the duration of a single validate-and-process call. Stored payments carry
``MaskedCardDetails`` instead: the last four digits and the cardholder name.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional


class PaymentMethod(str, Enum):
    """Payment method requested by the caller."""

    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    DIRECT_DEBIT = "DIRECT_DEBIT"


class PaymentStatus(str, Enum):
    """Payment status."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class CreditCardDetails:
    """Card details submitted with a payment request (sensitive, never stored).

    Attributes:
        card_number: Full card number (PAN)
        cardholder_name: Name as it appears on the card
        expiry_date: Expiry in MM/YY format
        cvv: Card verification value
    """

    card_number: str = field(repr=False)
    cardholder_name: str
    expiry_date: str = field(repr=False)
    cvv: str = field(repr=False)

    @property
    def last4(self) -> str:
        return self.card_number.strip()[-4:]


@dataclass(frozen=True)
class MaskedCardDetails:
    """Card details safe for storage and display."""

    card_number: str
    cardholder_name: str

    @classmethod
    def from_card_details(cls, card_details: CreditCardDetails) -> "MaskedCardDetails":
        return cls(
            card_number=mask_card_number(card_details.card_number),
            cardholder_name=card_details.cardholder_name,
        )


@dataclass(frozen=True)
class Payment:
    """A completed payment recorded in the ledger.

    Attributes:
        id: Payment identifier in format payment_{8 hex chars}
        account_id: Account the payment was made against
        amount: Amount paid (always > 0)
        date: Creation timestamp (UTC)
        method: Payment method
        status: Payment status
        reference: Reference in format PAY-{epoch milliseconds}
        card_details: Masked card details, if paid by card
    """

    id: str
    account_id: str
    amount: float
    date: datetime
    method: PaymentMethod
    status: PaymentStatus
    reference: str
    card_details: Optional[MaskedCardDetails] = None

    @staticmethod
    def generate_payment_id() -> str:
        """Generate a new payment ID.

        Returns:
            Payment ID in format payment_{8 hex chars}
        """
        return f"payment_{uuid.uuid4().hex[:8]}"


def mask_card_number(card_number: str) -> str:
    """Mask a card number down to its last four digits.

    Args:
        card_number: Full card number

    Returns:
        Masked number in format xxxx-xxxx-xxxx-{last4}
    """
    return f"xxxx-xxxx-xxxx-{card_number.strip()[-4:]}"


def matches_search(payment: Payment, search: Optional[str]) -> bool:
    """Check a payment against a free-text history filter.

    Matches a case-insensitive substring of the account ID, payment ID or
    reference. An empty query matches everything.
    """
    query = (search or "").strip().lower()
    if not query:
        return True

    return (
        query in payment.account_id.lower()
        or query in payment.id.lower()
        or query in payment.reference.lower()
    )


def newest_first(payments: Iterable[Payment]) -> list[Payment]:
    """Sort payments by date, most recent first."""
    return sorted(payments, key=lambda payment: payment.date, reverse=True)
