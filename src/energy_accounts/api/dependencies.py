"""FastAPI dependencies and service wiring.

Services are built once per application by ``build_services`` and kept on
``app.state``; route handlers receive them through the ``Annotated``
aliases below. The payment ledger is owned by this wiring and shared by
the payment processor (writes) and the query service (reads).
"""

from dataclasses import dataclass
from typing import Annotated, Optional

from fastapi import Depends, Request

from energy_accounts.config import Settings
from energy_accounts.domain.clock import Clock, SystemClock
from energy_accounts.domain.services import AccountQueryService, PaymentProcessor
from energy_accounts.domain.sources import AccountProvider, DueChargeProvider, PaymentStore
from energy_accounts.infrastructure.data_sources import (
    InMemoryAccountSource,
    InMemoryDueChargeSource,
)
from energy_accounts.infrastructure.ledger import InMemoryPaymentLedger


@dataclass
class ServiceContainer:
    """Everything the route handlers need, wired together."""

    settings: Settings
    ledger: PaymentStore
    payment_processor: PaymentProcessor
    query_service: AccountQueryService


def build_services(
    settings: Settings,
    ledger: Optional[PaymentStore] = None,
    clock: Optional[Clock] = None,
    account_source: Optional[AccountProvider] = None,
    charge_source: Optional[DueChargeProvider] = None,
) -> ServiceContainer:
    """Wire sources, ledger and services from settings.

    Args:
        settings: Application settings (latencies and delays)
        ledger: Payment store to use (defaults to a seeded in-memory ledger)
        clock: Clock for payment timestamps and expiry checks
        account_source: Account provider override
        charge_source: Due charge provider override

    Returns:
        ServiceContainer sharing one ledger between processor and queries
    """
    ledger = ledger if ledger is not None else InMemoryPaymentLedger.seeded()
    clock = clock or SystemClock()
    account_source = account_source or InMemoryAccountSource(
        latency_ms=settings.data_source_latency_ms
    )
    charge_source = charge_source or InMemoryDueChargeSource(
        latency_ms=settings.data_source_latency_ms
    )

    return ServiceContainer(
        settings=settings,
        ledger=ledger,
        payment_processor=PaymentProcessor(
            ledger=ledger,
            clock=clock,
            processing_delay_ms=settings.payment_processing_delay_ms,
        ),
        query_service=AccountQueryService(
            account_source=account_source,
            charge_source=charge_source,
            ledger=ledger,
            history_delay_ms=settings.payment_history_delay_ms,
        ),
    )


def get_services(request: Request) -> ServiceContainer:
    """Provide the service container of the running application."""
    return request.app.state.services


Services = Annotated[ServiceContainer, Depends(get_services)]


def get_query_service(services: Services) -> AccountQueryService:
    """Provide the account query service."""
    return services.query_service


# Type alias for query service dependency
QuerySvc = Annotated[AccountQueryService, Depends(get_query_service)]


def get_payment_processor(services: Services) -> PaymentProcessor:
    """Provide the payment processor."""
    return services.payment_processor


# Type alias for payment processor dependency
PaymentProc = Annotated[PaymentProcessor, Depends(get_payment_processor)]


def get_app_settings(services: Services) -> Settings:
    """Provide the settings the application was built with."""
    return services.settings


# Type alias for settings dependency
AppSettings = Annotated[Settings, Depends(get_app_settings)]
