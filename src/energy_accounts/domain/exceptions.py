"""Custom exceptions for the Energy Accounts domain."""


class EnergyAccountsError(Exception):
    """Base exception for energy account errors."""

    pass


class PaymentValidationError(EnergyAccountsError):
    """
    Raised when a payment request fails field validation.

    Carries every failing field so callers can report them together.
    The exception message is the first error, which is what the HTTP
    layer surfaces to clients expecting a single message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        message = next(iter(self.errors.values()), "Invalid payment request")
        super().__init__(message)


class UnsupportedPaymentMethodError(EnergyAccountsError):
    """Raised when a payment uses any method other than CARD."""

    def __init__(self, message: str = "Only card payments are supported") -> None:
        super().__init__(message)


class AccountNotFoundError(EnergyAccountsError):
    """Raised when no account matches the requested identifier."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__("Account not found")


class DataSourceError(EnergyAccountsError):
    """
    Raised when an account or due charge source fails to deliver data.

    This is a TERMINAL error for the request. Nothing retries it; the HTTP
    boundary logs it and answers 500.
    """

    pass
