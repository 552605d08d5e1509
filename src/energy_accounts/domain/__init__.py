"""Energy accounts domain layer.

This package contains the account, due charge and payment models, payment
validation, balance aggregation, and the services built on top of them.
"""

from energy_accounts.domain.accounts import (
    Account,
    AccountWithBalance,
    ElectricityAccount,
    EnergyType,
    GasAccount,
)
from energy_accounts.domain.balance import BalanceAggregator, sum_charges
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.clock import Clock, FixedClock, SystemClock
from energy_accounts.domain.exceptions import (
    AccountNotFoundError,
    DataSourceError,
    EnergyAccountsError,
    PaymentValidationError,
    UnsupportedPaymentMethodError,
)
from energy_accounts.domain.payments import (
    CreditCardDetails,
    MaskedCardDetails,
    Payment,
    PaymentMethod,
    PaymentStatus,
    mask_card_number,
)
from energy_accounts.domain.services import AccountQueryService, PaymentProcessor
from energy_accounts.domain.sources import AccountProvider, DueChargeProvider, PaymentStore
from energy_accounts.domain.validation import validate_payment

__all__ = [
    # Accounts
    "Account",
    "AccountWithBalance",
    "ElectricityAccount",
    "EnergyType",
    "GasAccount",
    # Charges and balances
    "DueCharge",
    "BalanceAggregator",
    "sum_charges",
    # Payments
    "CreditCardDetails",
    "MaskedCardDetails",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "mask_card_number",
    "validate_payment",
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    # Exceptions
    "EnergyAccountsError",
    "AccountNotFoundError",
    "DataSourceError",
    "PaymentValidationError",
    "UnsupportedPaymentMethodError",
    # Services
    "AccountQueryService",
    "PaymentProcessor",
    # Interfaces
    "AccountProvider",
    "DueChargeProvider",
    "PaymentStore",
]
