"""GET /api/accounts endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from energy_accounts.api.dependencies import QuerySvc
from energy_accounts.api.models import AccountJSON
from energy_accounts.domain.accounts import EnergyType
from energy_accounts.domain.exceptions import AccountNotFoundError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("")
async def list_accounts(
    query_service: QuerySvc,
    type: Optional[EnergyType] = None,
    search: Optional[str] = None,
) -> JSONResponse:
    """List all energy accounts with their computed balances.

    Args:
        type: Optional energy type filter (ELECTRICITY or GAS)
        search: Optional case-insensitive address filter

    Returns:
        200 with the account list, 500 if an upstream source fails
    """
    try:
        accounts = await query_service.list_accounts_with_balances(
            energy_type=type, search=search
        )
    except Exception as e:
        logger.error("list_accounts_failed", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch accounts"},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[AccountJSON.from_domain(account).to_json() for account in accounts],
    )


@router.get("/{account_id}")
async def get_account(account_id: str, query_service: QuerySvc) -> JSONResponse:
    """Get a single energy account with its computed balance.

    Returns:
        200 with the account, 404 if unknown, 500 if an upstream source fails
    """
    try:
        account = await query_service.get_account_by_id(account_id)
    except AccountNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": str(e)},
        )
    except Exception as e:
        logger.error("get_account_failed", account_id=account_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Error fetching account"},
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=AccountJSON.from_domain(account).to_json(),
    )
