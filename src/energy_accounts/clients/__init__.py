"""Clients for the Energy Accounts API."""

from energy_accounts.clients.api_client import (
    ApiError,
    ApiUnavailableError,
    EnergyAccountsClient,
)

__all__ = ["ApiError", "ApiUnavailableError", "EnergyAccountsClient"]
