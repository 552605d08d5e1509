"""Payment request validation.

One validation function serves every entry point. It evaluates each rule
independently and returns all failures at once, keyed by the wire name of
the offending field, so a form can flag several fields in one round trip.
"""

import math
import numbers
import re
from datetime import datetime, timezone
from typing import Optional

from energy_accounts.domain.clock import Clock, SystemClock
from energy_accounts.domain.payments import CreditCardDetails

# ASCII digits only
CARD_NUMBER_PATTERN = re.compile(r"^\d{13,19}$", re.ASCII)
EXPIRY_PATTERN = re.compile(r"^(\d{2})/(\d{2})$", re.ASCII)
CVV_PATTERN = re.compile(r"^\d{3,4}$", re.ASCII)

AMOUNT_ERROR = "Amount must be greater than 0"


def validate_amount(amount: object) -> Optional[str]:
    """Return the amount error message, or None if the amount is payable."""
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        return AMOUNT_ERROR
    if not math.isfinite(amount) or not amount > 0:
        return AMOUNT_ERROR
    return None


def expiry_instant(expiry_date: str) -> Optional[datetime]:
    """Interpret an MM/YY expiry as the first instant of that month (UTC).

    Returns:
        The instant, or None if the value is not a valid MM/YY date
    """
    match = EXPIRY_PATTERN.match(expiry_date.strip())
    if not match:
        return None

    month, year = int(match.group(1)), int(match.group(2))
    if month < 1 or month > 12:
        return None

    return datetime(2000 + year, month, 1, tzinfo=timezone.utc)


def validate_card_details(
    card_details: CreditCardDetails,
    clock: Optional[Clock] = None,
) -> dict[str, str]:
    """Validate card fields.

    Args:
        card_details: Card details submitted with the payment
        clock: Source of "now" for the expiry check (defaults to wall clock)

    Returns:
        Mapping of field name to error message (empty when valid)
    """
    clock = clock or SystemClock()
    errors: dict[str, str] = {}

    card_number = (card_details.card_number or "").strip()
    if not card_number:
        errors["cardNumber"] = "Card number is required"
    elif not CARD_NUMBER_PATTERN.match(card_number):
        errors["cardNumber"] = "Invalid card number format"

    if not (card_details.cardholder_name or "").strip():
        errors["cardholderName"] = "Cardholder name is required"

    expiry_date = (card_details.expiry_date or "").strip()
    if not expiry_date:
        errors["expiryDate"] = "Expiry date is required"
    else:
        expires = expiry_instant(expiry_date)
        if expires is None:
            errors["expiryDate"] = "Invalid format (use MM/YY)"
        elif expires < clock.now():
            errors["expiryDate"] = "Card has expired"

    cvv = (card_details.cvv or "").strip()
    if not cvv:
        errors["cvv"] = "CVV is required"
    elif not CVV_PATTERN.match(cvv):
        errors["cvv"] = "CVV must be 3 or 4 digits"

    return errors


def validate_payment(
    amount: object,
    card_details: Optional[CreditCardDetails],
    clock: Optional[Clock] = None,
) -> dict[str, str]:
    """Validate a proposed payment.

    Field-level checks do not depend on the payment method; gating on the
    method is the payment processor's job.

    Args:
        amount: Proposed payment amount
        card_details: Card details, or None when no card was supplied
        clock: Source of "now" for the expiry check

    Returns:
        Mapping of field name to error message (empty when valid)
    """
    errors: dict[str, str] = {}

    amount_error = validate_amount(amount)
    if amount_error:
        errors["amount"] = amount_error

    if card_details is not None:
        errors.update(validate_card_details(card_details, clock))

    return errors
