"""Domain services for accounts and payments.

This module contains the business workflows of the service: taking a
card payment (validate, mask, record) and answering account, due charge
and payment history queries. Both services receive their collaborators
explicitly; nothing here reaches for module-level state.
"""

import asyncio
from typing import Optional, Union

import structlog

from energy_accounts.domain.accounts import (
    Account,
    AccountWithBalance,
    EnergyType,
    matches_filters,
)
from energy_accounts.domain.balance import BalanceAggregator, sum_charges
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.clock import Clock, SystemClock
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
    matches_search,
    newest_first,
)
from energy_accounts.domain.sources import AccountProvider, DueChargeProvider, PaymentStore
from energy_accounts.domain.validation import validate_amount, validate_payment

logger = structlog.get_logger(__name__)


class PaymentProcessor:
    """Validates card payments and records them in the ledger.

    Payments complete synchronously: a successful call stores a COMPLETED
    payment, a failed call raises and stores nothing. Submissions are not
    deduplicated, so a caller that retries after a timeout can record the
    same payment twice.
    """

    def __init__(
        self,
        ledger: PaymentStore,
        clock: Optional[Clock] = None,
        processing_delay_ms: int = 0,
    ) -> None:
        """
        Initialize the payment processor.

        Args:
            ledger: Store that owns recorded payments
            clock: Source of "now" for timestamps and expiry checks
            processing_delay_ms: Simulated processor latency in milliseconds
        """
        self.ledger = ledger
        self.clock = clock or SystemClock()
        self.processing_delay_ms = processing_delay_ms
        self._last_reference_ms = 0

    def _generate_reference(self) -> str:
        """Generate a time-based reference, strictly increasing per processor."""
        now_ms = int(self.clock.now().timestamp() * 1000)
        reference_ms = max(now_ms, self._last_reference_ms + 1)
        self._last_reference_ms = reference_ms
        return f"PAY-{reference_ms}"

    async def make_payment(
        self,
        account_id: str,
        amount: float,
        method: Union[PaymentMethod, str],
        card_details: Optional[CreditCardDetails],
    ) -> Payment:
        """
        Process a payment for an account.

        Args:
            account_id: Account the payment is made against
            amount: Amount to pay (must be > 0)
            method: Requested payment method; only CARD is processable
            card_details: Card details for CARD payments

        Returns:
            The recorded payment with masked card details

        Raises:
            PaymentValidationError: Missing account ID, bad amount, missing or
                invalid card details
            UnsupportedPaymentMethodError: Any method other than CARD
        """
        try:
            if not account_id:
                raise PaymentValidationError({"accountId": "Account ID is required"})

            amount_error = validate_amount(amount)
            if amount_error:
                raise PaymentValidationError({"amount": amount_error})

            if _parse_method(method) is not PaymentMethod.CARD:
                raise UnsupportedPaymentMethodError()

            if card_details is None:
                raise PaymentValidationError({"cardDetails": "Card details are required"})

            errors = validate_payment(amount, card_details, self.clock)
            if errors:
                raise PaymentValidationError(errors)

        except EnergyAccountsError as e:
            logger.warning(
                "payment_rejected",
                account_id=account_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        payment = Payment(
            id=Payment.generate_payment_id(),
            account_id=account_id,
            amount=amount,
            date=self.clock.now(),
            method=PaymentMethod.CARD,
            status=PaymentStatus.COMPLETED,
            reference=self._generate_reference(),
            card_details=MaskedCardDetails.from_card_details(card_details),
        )

        # Simulate payment processor latency
        if self.processing_delay_ms > 0:
            await asyncio.sleep(self.processing_delay_ms / 1000.0)

        self.ledger.append(payment)

        logger.info(
            "payment_processed",
            payment_id=payment.id,
            account_id=account_id,
            amount=amount,
            reference=payment.reference,
            card_last_four=card_details.last4,
        )

        return payment

    async def process_payment(
        self,
        account_id: str,
        amount: float,
        card_details: Optional[CreditCardDetails],
    ) -> Payment:
        """Process a CARD payment. See ``make_payment``."""
        return await self.make_payment(account_id, amount, PaymentMethod.CARD, card_details)


class AccountQueryService:
    """Read side: accounts with balances, due charges and payment history."""

    def __init__(
        self,
        account_source: AccountProvider,
        charge_source: DueChargeProvider,
        ledger: PaymentStore,
        history_delay_ms: int = 0,
    ) -> None:
        self.account_source = account_source
        self.charge_source = charge_source
        self.ledger = ledger
        self.history_delay_ms = history_delay_ms
        self.balances = BalanceAggregator(charge_source)

    async def _fetch_accounts_and_charges(self) -> tuple[list[Account], list[DueCharge]]:
        try:
            accounts, charges = await asyncio.gather(
                self.account_source.fetch(),
                self.charge_source.fetch(),
            )
        except Exception as e:
            logger.error("accounts_with_balances_fetch_failed", error=str(e))
            raise DataSourceError("Failed to fetch accounts with balances") from e

        return accounts, charges

    async def list_accounts_with_balances(
        self,
        energy_type: Optional[EnergyType] = None,
        search: Optional[str] = None,
    ) -> list[AccountWithBalance]:
        """
        List accounts annotated with balances computed from due charges.

        Accounts and charges are fetched concurrently. Accounts without
        charges get a balance of 0.

        Args:
            energy_type: Only return accounts of this energy type
            search: Case-insensitive substring the address must contain

        Returns:
            Accounts with balances, in source order

        Raises:
            DataSourceError: If either source fails
        """
        accounts, charges = await self._fetch_accounts_and_charges()

        return [
            AccountWithBalance(account=account, balance=sum_charges(charges, account.id))
            for account in accounts
            if matches_filters(account, energy_type=energy_type, search=search)
        ]

    async def get_account_by_id(self, account_id: str) -> AccountWithBalance:
        """
        Get a single account with its computed balance.

        Raises:
            AccountNotFoundError: If no account has this ID
            DataSourceError: If either source fails
        """
        accounts, charges = await self._fetch_accounts_and_charges()

        account = next((a for a in accounts if a.id == account_id), None)
        if account is None:
            logger.warning("account_not_found", account_id=account_id)
            raise AccountNotFoundError(account_id)

        return AccountWithBalance(account=account, balance=sum_charges(charges, account_id))

    async def get_balance(self, account_id: str) -> float:
        """Compute one account's balance. Fetch failures propagate."""
        return await self.balances.get_balance(account_id)

    async def get_due_charges(self, account_id: str) -> list[DueCharge]:
        """
        Get the due charges of an account, in source order.

        Raises:
            DataSourceError: If the due charge source fails
        """
        try:
            charges = await self.charge_source.fetch()
        except Exception as e:
            logger.error("due_charges_fetch_failed", account_id=account_id, error=str(e))
            raise DataSourceError(f"Failed to fetch due charges for account {account_id}") from e

        return [charge for charge in charges if charge.account_id == account_id]

    async def get_payment_history(
        self,
        account_id: str,
        search: Optional[str] = None,
    ) -> list[Payment]:
        """
        Get an account's payments, most recent first.

        Args:
            account_id: Account identifier
            search: Optional filter on account ID, payment ID or reference

        Returns:
            Payments for the account sorted by date descending
        """
        # Simulate read latency
        if self.history_delay_ms > 0:
            await asyncio.sleep(self.history_delay_ms / 1000.0)

        payments = [
            payment
            for payment in self.ledger.snapshot()
            if payment.account_id == account_id and matches_search(payment, search)
        ]

        return newest_first(payments)


def _parse_method(method: Union[PaymentMethod, str, None]) -> Optional[PaymentMethod]:
    """Coerce a wire value into a PaymentMethod, None if unrecognised."""
    if isinstance(method, PaymentMethod):
        return method
    try:
        return PaymentMethod(method)
    except ValueError:
        return None
