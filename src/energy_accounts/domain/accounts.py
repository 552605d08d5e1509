"""Account domain models.

Accounts are a tagged variant: an electricity account may carry a meter
number, a gas account may carry a volume, and neither carries the other's
attribute. Balances are never stored on an account; they are derived from
due charges at read time and attached through ``AccountWithBalance``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class EnergyType(str, Enum):
    """Kind of energy supplied to an account."""

    ELECTRICITY = "ELECTRICITY"
    GAS = "GAS"


@dataclass(frozen=True)
class ElectricityAccount:
    """Electricity supply account."""

    id: str
    address: str
    meter_number: Optional[str] = None
    account_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def energy_type(self) -> EnergyType:
        return EnergyType.ELECTRICITY


@dataclass(frozen=True)
class GasAccount:
    """Gas supply account."""

    id: str
    address: str
    volume: Optional[float] = None
    account_number: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def energy_type(self) -> EnergyType:
        return EnergyType.GAS


Account = Union[ElectricityAccount, GasAccount]


@dataclass(frozen=True)
class AccountWithBalance:
    """An account annotated with the balance computed from its due charges.

    Attributes:
        account: The underlying account variant
        balance: Sum of due charge amounts (positive = owed, negative = credit)
    """

    account: Account
    balance: float

    @property
    def id(self) -> str:
        return self.account.id


def matches_filters(
    account: Account,
    energy_type: Optional[EnergyType] = None,
    search: Optional[str] = None,
) -> bool:
    """Check an account against the account list filters.

    Args:
        account: Account to check
        energy_type: Only accept accounts of this type (None accepts all)
        search: Case-insensitive substring the address must contain

    Returns:
        True if the account passes every supplied filter
    """
    if energy_type is not None and account.energy_type != energy_type:
        return False

    query = (search or "").strip().lower()
    if query and query not in account.address.lower():
        return False

    return True
