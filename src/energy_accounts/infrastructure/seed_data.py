"""Static seed data served by the in-memory sources.

Balances are not part of the seed: they are computed from the due charges
on every read.
"""

from datetime import date, datetime, timezone

from energy_accounts.domain.accounts import Account, ElectricityAccount, GasAccount
from energy_accounts.domain.charges import DueCharge
from energy_accounts.domain.payments import (
    MaskedCardDetails,
    Payment,
    PaymentMethod,
    PaymentStatus,
)

SEED_ACCOUNTS: tuple[Account, ...] = (
    ElectricityAccount(
        id="A-0001",
        account_number="ELEC-0001",
        address="1 Greville Ct, Thomastown, 3076, Victoria",
        first_name="John",
        last_name="Smith",
        email="john.smith@email.com",
        phone_number="0412345678",
    ),
    GasAccount(
        id="A-0002",
        account_number="GAS-0002",
        address="74 Taltarni Rd, Yawong Hills, 3478, Victoria",
        first_name="Jane",
        last_name="Doe",
        email="jane.doe@email.com",
        phone_number="0423456789",
    ),
    ElectricityAccount(
        id="A-0003",
        account_number="ELEC-0003",
        address="44 William Road, Cresswell Downs, 0862, Northern Territory",
        first_name="Emily",
        last_name="Johnson",
        email="emily.johnson@email.com",
        phone_number="0434567890",
    ),
    ElectricityAccount(
        id="A-0004",
        account_number="ELEC-0004",
        address="87 Carolina Park Road, Forresters Beach, 2260, New South Wales",
        first_name="Michael",
        last_name="Brown",
        email="michael.brown@email.com",
        phone_number="0445678901",
    ),
    GasAccount(
        id="A-0005",
        account_number="GAS-0005",
        address="12 Sunset Blvd, Redcliffe, 4020, Queensland",
        first_name="Sarah",
        last_name="Wilson",
        email="sarah.wilson@email.com",
        phone_number="0456789012",
    ),
    ElectricityAccount(
        id="A-0006",
        account_number="ELEC-0006",
        address="3 Ocean View Dr, Torquay, 3228, Victoria",
        first_name="David",
        last_name="Lee",
        email="david.lee@email.com",
        phone_number="0467890123",
    ),
    GasAccount(
        id="A-0007",
        account_number="GAS-0007",
        address="150 Greenway Cres, Mawson Lakes, 5095, South Australia",
        first_name="Jessica",
        last_name="Taylor",
        email="jessica.taylor@email.com",
        phone_number="0478901234",
    ),
    ElectricityAccount(
        id="A-0008",
        account_number="ELEC-0008",
        address="88 Harbour St, Sydney, 2000, New South Wales",
        first_name="Matthew",
        last_name="Anderson",
        email="matthew.anderson@email.com",
        phone_number="0489012345",
    ),
    GasAccount(
        id="A-0009",
        account_number="GAS-0009",
        address="22 Boulder Rd, Kalgoorlie, 6430, Western Australia",
        first_name="Olivia",
        last_name="Martin",
        email="olivia.martin@email.com",
        phone_number="0490123456",
    ),
)

# (id, account_id, due date, amount, description, paid)
_CHARGE_ROWS = (
    ("D-0001", "A-0001", "2025-04-01", 10, "Electricity usage - March 2025", False),
    ("D-0002", "A-0001", "2025-04-08", 20, "Service fee - Q2 2025", False),
    ("D-0003", "A-0003", "2025-03-25", 15, "Electricity usage - February 2025", True),
    ("D-0004", "A-0003", "2025-04-05", 25, "Electricity usage - March 2025", True),
    ("D-0005", "A-0004", "2025-03-30", 20, "Electricity usage - March 2025", False),
    ("D-0006", "A-0004", "2025-04-06", 15, "Service fee - Q2 2025", False),
    ("D-0007", "A-0004", "2025-04-13", 15, "Late payment fee", False),
    ("D-0008", "A-0005", "2025-04-04", 10, "Gas usage - March 2025", False),
    ("D-0009", "A-0005", "2025-04-11", 15, "Service fee - Q2 2025", False),
    ("D-0010", "A-0006", "2025-04-01", 5, "Electricity usage - March 2025", True),
    ("D-0011", "A-0006", "2025-04-09", 10, "Service fee - Q2 2025", True),
    ("D-0012", "A-0008", "2025-03-31", 40, "Electricity usage - March 2025", False),
    ("D-0013", "A-0008", "2025-04-07", 40, "Service fee - Q2 2025", False),
    ("D-0014", "A-0008", "2025-04-14", 40, "Late payment fee", False),
    ("D-0015", "A-0009", "2025-04-02", 30, "Gas usage - March 2025", True),
    ("D-0016", "A-0009", "2025-04-12", 30, "Service fee - Q2 2025", True),
)

SEED_DUE_CHARGES: tuple[DueCharge, ...] = tuple(
    DueCharge(
        id=charge_id,
        account_id=account_id,
        amount=amount,
        date=date.fromisoformat(due_date),
        description=description,
        paid=paid,
    )
    for charge_id, account_id, due_date, amount, description, paid in _CHARGE_ROWS
)

SEED_PAYMENTS: tuple[Payment, ...] = (
    Payment(
        id="payment_12345678",
        account_id="A-0001",
        amount=30,
        date=datetime(2025, 5, 1, 9, 30, tzinfo=timezone.utc),
        method=PaymentMethod.CARD,
        status=PaymentStatus.COMPLETED,
        reference="PAY-1234567890",
        card_details=MaskedCardDetails(
            card_number="xxxx-xxxx-xxxx-1234", cardholder_name="John Smith"
        ),
    ),
    Payment(
        id="payment_23456789",
        account_id="A-0004",
        amount=50,
        date=datetime(2025, 4, 28, 14, 15, tzinfo=timezone.utc),
        method=PaymentMethod.CARD,
        status=PaymentStatus.COMPLETED,
        reference="PAY-2345678901",
        card_details=MaskedCardDetails(
            card_number="xxxx-xxxx-xxxx-5678", cardholder_name="Michael Brown"
        ),
    ),
    Payment(
        id="payment_34567890",
        account_id="A-0008",
        amount=120,
        date=datetime(2025, 4, 25, 11, 45, tzinfo=timezone.utc),
        method=PaymentMethod.CARD,
        status=PaymentStatus.COMPLETED,
        reference="PAY-3456789012",
        card_details=MaskedCardDetails(
            card_number="xxxx-xxxx-xxxx-9012", cardholder_name="Matthew Anderson"
        ),
    ),
)
