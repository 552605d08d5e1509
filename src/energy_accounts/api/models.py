"""Pydantic models for JSON API requests/responses.

Wire names are camelCase (``accountId``, ``cardDetails``) to stay
compatible with existing clients; Python attributes stay snake_case.
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from energy_accounts.domain.accounts import (
    AccountWithBalance,
    ElectricityAccount,
    EnergyType,
    GasAccount,
)
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.payments import CreditCardDetails, Payment


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict:
        """Dump to a JSON-ready dict with wire names, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AccountJSON(CamelModel):
    """JSON model for an account with its computed balance."""

    id: str = Field(..., description="Account identifier")
    energy_type: EnergyType = Field(..., alias="type", description="ELECTRICITY or GAS")
    address: str = Field(..., description="Supply address")
    meter_number: Optional[str] = Field(None, description="Meter number (electricity only)")
    volume: Optional[float] = Field(None, description="Gas volume (gas only)")
    account_number: Optional[str] = Field(None, description="Customer-facing account number")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    balance: float = Field(..., description="Sum of due charge amounts")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "A-0001",
                "type": "ELECTRICITY",
                "address": "1 Greville Ct, Thomastown, 3076, Victoria",
                "accountNumber": "ELEC-0001",
                "firstName": "John",
                "lastName": "Smith",
                "balance": 30,
            }
        }
    )

    @classmethod
    def from_domain(cls, item: AccountWithBalance) -> "AccountJSON":
        account = item.account
        common = dict(
            id=account.id,
            energy_type=account.energy_type,
            address=account.address,
            account_number=account.account_number,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            phone_number=account.phone_number,
            balance=item.balance,
        )

        if isinstance(account, ElectricityAccount):
            return cls(meter_number=account.meter_number, **common)
        if isinstance(account, GasAccount):
            return cls(volume=account.volume, **common)

        raise TypeError(f"Unsupported account variant: {type(account).__name__}")


class DueChargeJSON(CamelModel):
    """JSON model for a due charge."""

    id: str
    account_id: str
    amount: float
    date: dt.date
    description: Optional[str] = None
    paid: Optional[bool] = None

    @classmethod
    def from_domain(cls, charge: DueCharge) -> "DueChargeJSON":
        return cls(
            id=charge.id,
            account_id=charge.account_id,
            amount=charge.amount,
            date=charge.date,
            description=charge.description,
            paid=charge.paid,
        )


class CreditCardDetailsJSON(CamelModel):
    """JSON request model for card details.

    Fields default to empty strings so that missing values are reported by
    the payment validator as field errors rather than as schema errors.
    """

    card_number: str = Field("", description="Full card number, 13-19 digits")
    cardholder_name: str = Field("", description="Name on the card")
    expiry_date: str = Field("", description="Expiry date (MM/YY)")
    cvv: str = Field("", description="3 or 4 digit security code")

    def to_domain(self) -> CreditCardDetails:
        return CreditCardDetails(
            card_number=self.card_number,
            cardholder_name=self.cardholder_name,
            expiry_date=self.expiry_date,
            cvv=self.cvv,
        )


class MakePaymentRequestJSON(CamelModel):
    """JSON request model for POST /api/payments/{accountId}/payment."""

    amount: Optional[float] = Field(None, description="Amount to pay")
    method: Optional[str] = Field(None, description="CARD, BANK_TRANSFER or DIRECT_DEBIT")
    card_details: Optional[CreditCardDetailsJSON] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amount": 30,
                "method": "CARD",
                "cardDetails": {
                    "cardNumber": "4111111111111111",
                    "cardholderName": "John Smith",
                    "expiryDate": "12/30",
                    "cvv": "123",
                },
            }
        }
    )


class LegacyPaymentRequestJSON(CamelModel):
    """JSON request model for the legacy POST /api/payments route."""

    account_id: Optional[str] = None
    amount: Optional[float] = None
    card_details: Optional[CreditCardDetailsJSON] = None


class MaskedCardDetailsJSON(CamelModel):
    """JSON model for masked card details."""

    card_number: str
    cardholder_name: str


class PaymentJSON(CamelModel):
    """JSON response model for a recorded payment."""

    id: str
    account_id: str
    amount: float
    date: dt.datetime
    method: str
    status: str
    reference: str
    card_details: Optional[MaskedCardDetailsJSON] = None

    @classmethod
    def from_domain(cls, payment: Payment) -> "PaymentJSON":
        card_details = None
        if payment.card_details is not None:
            card_details = MaskedCardDetailsJSON(
                card_number=payment.card_details.card_number,
                cardholder_name=payment.card_details.cardholder_name,
            )

        return cls(
            id=payment.id,
            account_id=payment.account_id,
            amount=payment.amount,
            date=payment.date,
            method=payment.method.value,
            status=payment.status.value,
            reference=payment.reference,
            card_details=card_details,
        )
