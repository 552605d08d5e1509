"""Balance aggregation from due charges."""

from typing import Iterable

import structlog

from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.exceptions import DataSourceError
from energy_accounts.domain.sources import DueChargeProvider

logger = structlog.get_logger(__name__)


def sum_charges(charges: Iterable[DueCharge], account_id: str) -> float:
    """Sum the amounts of the charges owned by an account.

    Args:
        charges: Due charges for any number of accounts
        account_id: Account to aggregate

    Returns:
        Sum of matching amounts, 0 when nothing matches
    """
    return sum(
        (charge.amount for charge in charges if charge.account_id == account_id),
        0,
    )


class BalanceAggregator:
    """Authoritative balance source.

    Fetch failures propagate to the caller; a missing balance is never
    reported as zero here.
    """

    def __init__(self, charge_source: DueChargeProvider) -> None:
        self.charge_source = charge_source

    async def get_balance(self, account_id: str) -> float:
        """Compute an account's balance from its due charges.

        Args:
            account_id: Account identifier

        Returns:
            Sum of the account's due charge amounts

        Raises:
            DataSourceError: If the due charge source fails
        """
        try:
            charges = await self.charge_source.fetch()
        except Exception as e:
            logger.error("balance_fetch_failed", account_id=account_id, error=str(e))
            raise DataSourceError(f"Failed to compute balance for account {account_id}") from e

        balance = sum_charges(charges, account_id)

        logger.debug("balance_computed", account_id=account_id, balance=balance)

        return balance
