"""Async HTTP client for the Energy Accounts API."""

import asyncio
from typing import Any, Iterable, Optional

import httpx
import structlog
from pydantic import TypeAdapter

from energy_accounts.api.models import (
    AccountJSON,
    CreditCardDetailsJSON,
    DueChargeJSON,
    PaymentJSON,
)
from energy_accounts.config import Settings, settings
from energy_accounts.domain.payments import CreditCardDetails, matches_search, newest_first

logger = structlog.get_logger(__name__)

_accounts_adapter = TypeAdapter(list[AccountJSON])
_charges_adapter = TypeAdapter(list[DueChargeJSON])
_payments_adapter = TypeAdapter(list[PaymentJSON])


class ApiError(Exception):
    """Raised when the API answers with a non-2xx status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API Error ({status_code}): {message}")


class ApiUnavailableError(Exception):
    """Raised when the API could not be reached or did not answer."""

    def __init__(
        self,
        message: str = "The server did not respond. Please check your internet connection.",
    ) -> None:
        super().__init__(message)


class EnergyAccountsClient:
    """
    Client for the Energy Accounts REST API.

    Wraps every call in the same error translation: error responses become
    ``ApiError`` carrying the server's ``error`` or ``message`` field, and
    transport failures become ``ApiUnavailableError``.
    """

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: API base URL including the /api prefix
            timeout_seconds: Request timeout in seconds (default: 10.0)
            http_client: Preconfigured httpx client (e.g. with a mock transport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.http_client = http_client or httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Content-Type": "application/json"},
        )

        logger.info(
            "energy_accounts_client_initialized",
            base_url=self.base_url,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_settings(cls, app_settings: Optional[Settings] = None) -> "EnergyAccountsClient":
        """Build a client from ``api_base_url`` and ``api_timeout_seconds``."""
        app_settings = app_settings or settings
        return cls(
            base_url=app_settings.api_base_url,
            timeout_seconds=app_settings.api_timeout_seconds,
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"

        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("energy_accounts_api_timeout", method=method, url=url, error=str(e))
            raise ApiUnavailableError() from e
        except httpx.RequestError as e:
            logger.error("energy_accounts_api_request_error", method=method, url=url, error=str(e))
            raise ApiUnavailableError() from e

        if response.is_error:
            message = _error_message(response)
            logger.warning(
                "energy_accounts_api_error",
                method=method,
                url=url,
                status_code=response.status_code,
                message=message,
            )
            raise ApiError(response.status_code, message)

        return response.json()

    async def get_accounts(self) -> list[AccountJSON]:
        """Fetch all accounts with their server-computed balances."""
        data = await self._request("GET", "/accounts")
        return _accounts_adapter.validate_python(data)

    async def get_account_by_id(self, account_id: str) -> AccountJSON:
        """Fetch one account.

        Raises:
            ApiError: 404 if the account does not exist
        """
        data = await self._request("GET", f"/accounts/{account_id}")
        return AccountJSON.model_validate(data)

    async def get_due_charges(self, account_id: str) -> list[DueChargeJSON]:
        """Fetch an account's due charges."""
        data = await self._request("GET", f"/payments/{account_id}/due-charges")
        return _charges_adapter.validate_python(data)

    async def make_payment(
        self,
        account_id: str,
        amount: float,
        card_details: CreditCardDetails,
    ) -> PaymentJSON:
        """Submit a card payment.

        Raises:
            ApiError: 400 with the first validation message on rejection
        """
        card_json = CreditCardDetailsJSON(
            card_number=card_details.card_number,
            cardholder_name=card_details.cardholder_name,
            expiry_date=card_details.expiry_date,
            cvv=card_details.cvv,
        )
        payload = {
            "amount": amount,
            "method": "CARD",
            "cardDetails": card_json.model_dump(by_alias=True),
        }

        data = await self._request("POST", f"/payments/{account_id}/payment", json=payload)
        return PaymentJSON.model_validate(data)

    async def get_payment_history(self, account_id: str) -> list[PaymentJSON]:
        """Fetch an account's payment history, most recent first."""
        data = await self._request("GET", f"/payments/{account_id}/history")
        return _payments_adapter.validate_python(data)

    async def get_display_balance(self, account_id: str) -> float:
        """
        Recompute an account's balance from its due charges for display.

        Unlike the server-side balance, any failure is reported as a zero
        balance instead of an error.
        """
        try:
            charges = await self.get_due_charges(account_id)
        except (ApiError, ApiUnavailableError) as e:
            logger.warning("display_balance_unavailable", account_id=account_id, error=str(e))
            return 0

        return sum((charge.amount for charge in charges), 0)

    async def get_combined_payment_history(
        self,
        account_ids: Iterable[str],
        search: Optional[str] = None,
    ) -> list[PaymentJSON]:
        """
        Merge the payment histories of several accounts, most recent first.

        Args:
            account_ids: Accounts to include
            search: Optional filter on account ID, payment ID or reference
        """
        histories = await asyncio.gather(
            *(self.get_payment_history(account_id) for account_id in account_ids)
        )

        payments = [
            payment
            for history in histories
            for payment in history
            if matches_search(payment, search)
        ]

        return newest_first(payments)

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return "An error occurred"

    if isinstance(data, dict):
        return data.get("error") or data.get("message") or "An error occurred"
    return "An error occurred"
