"""Payment endpoints: due charges, card payments and payment history.

- GET  /api/payments/{account_id}/due-charges
- POST /api/payments/{account_id}/payment
- GET  /api/payments/{account_id}/history
- POST /api/payments           (legacy: account ID in the body)
- GET  /api/payments           (legacy: history of one configured account)

Errors are returned as ``{"error": ...}``. Validation failures also carry
``errors``, a mapping of field name to message.
"""

import json
from typing import Optional, TypeVar

import structlog
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from energy_accounts.api.dependencies import AppSettings, PaymentProc, QuerySvc
from energy_accounts.api.models import (
    DueChargeJSON,
    LegacyPaymentRequestJSON,
    MakePaymentRequestJSON,
    PaymentJSON,
)
from energy_accounts.domain.exceptions import (
    PaymentValidationError,
    UnsupportedPaymentMethodError,
)
from energy_accounts.domain.validation import validate_amount

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/payments", tags=["payments"])

RequestModel = TypeVar("RequestModel", bound=BaseModel)


class InvalidRequestBody(Exception):
    """Raised when a request body is not valid JSON for the route's model."""


async def _parse_body(request: Request, model: type[RequestModel]) -> RequestModel:
    body = await request.body()
    if not body:
        raise InvalidRequestBody("Empty request body")

    try:
        return model.model_validate(json.loads(body))
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidRequestBody(f"Invalid JSON request: {e}") from e


def _error(status_code: int, message: str, errors: Optional[dict] = None) -> JSONResponse:
    content: dict = {"error": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


@router.get("/{account_id}/due-charges")
async def get_due_charges(account_id: str, query_service: QuerySvc) -> JSONResponse:
    """Get the due charges of an account.

    Returns:
        200 with the charges (possibly empty), 500 if the source fails
    """
    try:
        charges = await query_service.get_due_charges(account_id)
    except Exception as e:
        logger.error("get_due_charges_failed", account_id=account_id, error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch due charges")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[DueChargeJSON.from_domain(charge).to_json() for charge in charges],
    )


@router.post("/{account_id}/payment")
async def make_payment(
    account_id: str,
    request: Request,
    payment_processor: PaymentProc,
) -> JSONResponse:
    """Process a card payment for an account.

    Responses:
        201 Created: Payment recorded, body is the payment with masked card
        400 Bad Request: Malformed body, validation failure, or non-card method
        500 Internal Server Error: Unexpected failure
    """
    try:
        payment_request = await _parse_body(request, MakePaymentRequestJSON)
    except InvalidRequestBody as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    amount_error = validate_amount(payment_request.amount)
    if amount_error:
        return _error(status.HTTP_400_BAD_REQUEST, amount_error, {"amount": amount_error})

    if not payment_request.method or payment_request.card_details is None:
        return _error(
            status.HTTP_400_BAD_REQUEST, "Payment method and card details are required"
        )

    try:
        payment = await payment_processor.make_payment(
            account_id,
            payment_request.amount,
            payment_request.method,
            payment_request.card_details.to_domain(),
        )
    except PaymentValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e), e.errors)
    except UnsupportedPaymentMethodError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))
    except Exception as e:
        logger.error("make_payment_failed", account_id=account_id, error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error processing payment")

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=PaymentJSON.from_domain(payment).to_json(),
    )


@router.get("/{account_id}/history")
async def get_payment_history(
    account_id: str,
    query_service: QuerySvc,
    search: Optional[str] = None,
) -> JSONResponse:
    """Get an account's payment history, most recent first.

    Args:
        search: Optional filter on account ID, payment ID or reference
    """
    try:
        payments = await query_service.get_payment_history(account_id, search=search)
    except Exception as e:
        logger.error("get_payment_history_failed", account_id=account_id, error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch payment history")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[PaymentJSON.from_domain(payment).to_json() for payment in payments],
    )


@router.post("")
async def create_payment_legacy(
    request: Request,
    payment_processor: PaymentProc,
) -> JSONResponse:
    """Legacy payment route taking the account ID in the body.

    Responses:
        200 OK: Payment recorded
        400 Bad Request: Missing fields or validation failure
    """
    try:
        payment_request = await _parse_body(request, LegacyPaymentRequestJSON)
    except InvalidRequestBody as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    if (
        not payment_request.account_id
        or validate_amount(payment_request.amount)
        or payment_request.card_details is None
    ):
        return _error(status.HTTP_400_BAD_REQUEST, "Missing required fields")

    try:
        payment = await payment_processor.process_payment(
            payment_request.account_id,
            payment_request.amount,
            payment_request.card_details.to_domain(),
        )
    except PaymentValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, str(e), e.errors)
    except Exception as e:
        logger.error(
            "legacy_payment_failed", account_id=payment_request.account_id, error=str(e)
        )
        return _error(status.HTTP_400_BAD_REQUEST, str(e))

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=PaymentJSON.from_domain(payment).to_json(),
    )


@router.get("")
async def list_payments_legacy(query_service: QuerySvc, settings: AppSettings) -> JSONResponse:
    """Legacy history route, answering for the configured default account."""
    try:
        payments = await query_service.get_payment_history(settings.legacy_history_account_id)
    except Exception as e:
        logger.error("legacy_history_failed", error=str(e))
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch payments")

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[PaymentJSON.from_domain(payment).to_json() for payment in payments],
    )
