from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from domain.actors import Actor
from domain.base_types import Counterparty, ItemId, PaymentChannel, Role
from domain.directory import DirectoryManager
from domain.inventory import InventoryManager
from domain.items import AcquisitionRecord, ItemStatus, NewItem
from domain.ledger import TransactionDirection
from domain.ledger_engine import Clock, LedgerEngine, utc_now

DEMO_EMAIL = "demo@dealer.example"


@dataclass
class DemoOrganization:
    owner: Actor
    item_ids: list[ItemId]


def seed_demo_data(
    *,
    directory: DirectoryManager,
    inventory: InventoryManager,
    ledger: LedgerEngine,
    clock: Clock = utc_now,
) -> DemoOrganization:
    """Create a demo organization whose ledger is produced by regular operations.

    Reuses the existing demo owner if the store was seeded before.
    """
    existing = directory.find_by_email(DEMO_EMAIL)
    if existing is not None:
        return DemoOrganization(owner=existing, item_ids=[])

    owner = directory.create_organization(email=DEMO_EMAIL, name="Demo Dealer")
    directory.invite(owner, email="staff@dealer.example", name="Demo Staff", role=Role.RESTRICTED)

    ledger.record_adjustment(
        owner,
        amount=Decimal(500000),
        direction=TransactionDirection.IN,
        description="Initial Capital Injection",
        payment_channel=PaymentChannel.ONLINE,
    )

    now = clock()
    classic = inventory.acquire(
        owner,
        NewItem(
            make="Royal Enfield",
            model="Classic 350",
            year=2022,
            color="Stealth Black",
            engine_number="RE882291",
            chassis_number="CHS99281",
            odometer=12500,
            description="Mint condition, single owner, alloy wheels installed.",
            registration_number="MH02 DN 4422",
            registration_date=date(2022, 5, 15),
            acquisition=AcquisitionRecord(
                cost=Decimal(135000),
                payment_channel=PaymentChannel.ONLINE,
                counterparty=Counterparty(name="Vikram Singh", phone="9876543210", address="Mumbai, MH"),
                acquired_at=now - timedelta(days=10),
            ),
        ),
    )

    activa = inventory.acquire(
        owner,
        NewItem(
            make="Honda",
            model="Activa 6G",
            year=2021,
            color="White",
            engine_number="HON22119",
            chassis_number="CHS11229",
            odometer=18000,
            description="Good for daily commute. Minor scratches on side panel.",
            registration_number="MH12 AB 1234",
            registration_date=date(2021, 2, 20),
            status=ItemStatus.UNDER_SERVICE,
            acquisition=AcquisitionRecord(
                cost=Decimal(45000),
                payment_channel=PaymentChannel.CASH,
                counterparty=Counterparty(name="Rahul Sharma", phone="9988776655", address="Pune, MH"),
                acquired_at=now - timedelta(days=5),
            ),
        ),
    )
    inventory.record_cost(
        owner,
        activa.id,
        amount=Decimal(1200),
        description="Oil Change & Servicing",
        payment_channel=PaymentChannel.CASH,
    )

    r15 = inventory.acquire(
        owner,
        NewItem(
            make="Yamaha",
            model="R15 V3",
            year=2020,
            color="Racing Blue",
            engine_number="YAM99881",
            chassis_number="CHS88112",
            odometer=22000,
            description="Sporty look, new tyres.",
            registration_number="MH15 CD 5678",
            registration_date=date(2020, 8, 10),
            acquisition=AcquisitionRecord(
                cost=Decimal(90000),
                payment_channel=PaymentChannel.ONLINE,
                counterparty=Counterparty(name="Amit Verma", phone="8877665544", address="Nashik, MH"),
                acquired_at=now - timedelta(days=20),
            ),
        ),
    )
    inventory.dispose(
        owner,
        r15.id,
        counterparty=Counterparty(name="Suresh Raina", phone="7766554433", address="Mumbai"),
        amount=Decimal(115000),
        payment_channel=PaymentChannel.ONLINE,
    )

    return DemoOrganization(owner=owner, item_ids=[classic.id, activa.id, r15.id])
