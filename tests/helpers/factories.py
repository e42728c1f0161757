from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from domain.base_types import Counterparty, PaymentChannel
from domain.items import AcquisitionRecord, ItemStatus, NewItem


def make_new_item(
    *,
    cost: Decimal | int = 45000,
    payment_channel: PaymentChannel = PaymentChannel.CASH,
    make: str = "Honda",
    model: str = "Activa 6G",
    registration_number: str = "MH12 AB 1234",
    status: ItemStatus = ItemStatus.AVAILABLE,
) -> NewItem:
    return NewItem(
        make=make,
        model=model,
        year=2021,
        color="White",
        registration_number=registration_number,
        status=status,
        acquisition=AcquisitionRecord(
            cost=Decimal(cost),
            payment_channel=payment_channel,
            counterparty=Counterparty(name="Rahul Sharma", phone="9988776655", address="Pune, MH"),
            acquired_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        ),
    )


def make_buyer(name: str = "Suresh Raina") -> Counterparty:
    return Counterparty(name=name, phone="7766554433", address="Mumbai")
