"""Due charge domain model."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DueCharge:
    """A billable line item against an account.

    Attributes:
        id: Charge identifier (e.g. "D-0001")
        account_id: Owning account identifier
        amount: Signed amount; positive increases the balance owed
        date: Date the charge falls due
        description: Optional human-readable description
        paid: Optional paid flag, informational only
    """

    id: str
    account_id: str
    amount: float
    date: date
    description: Optional[str] = None
    paid: Optional[bool] = None
