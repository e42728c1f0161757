from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from .base_types import ActorId, CostEventId, Counterparty, DisposalId, ItemId, OrgId, PaymentChannel


RESTRICTED_UPDATE_FIELDS = frozenset({"counterparty", "acquired_at"})
NULLABLE_UPDATE_FIELDS = frozenset({"registration_date"})


class ItemStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    UNDER_SERVICE = "UNDER_SERVICE"
    DISPOSED = "DISPOSED"


class AcquisitionRecord(BaseModel):
    cost: Decimal
    payment_channel: PaymentChannel = PaymentChannel.CASH
    counterparty: Counterparty
    acquired_at: datetime


class CostEvent(BaseModel):
    id: CostEventId = CostEventId(Field(default_factory=uuid4))
    item_id: ItemId
    amount: Decimal
    description: str
    payment_channel: PaymentChannel
    timestamp: datetime
    responsible_party: str | None = None


class DisposalRecord(BaseModel):
    id: DisposalId = DisposalId(Field(default_factory=uuid4))
    item_id: ItemId
    counterparty: Counterparty
    amount: Decimal
    disposed_by: ActorId
    timestamp: datetime
    payment_channel: PaymentChannel


class ItemDetails(BaseModel):
    make: str
    model: str
    year: int
    color: str = ""
    engine_number: str = ""
    chassis_number: str = ""
    odometer: int = 0
    description: str = ""
    photos: list[str] = Field(default_factory=list)
    registration_number: str = ""
    registration_date: date | None = None


class NewItem(ItemDetails):
    """An item that has not been acquired yet and therefore carries no id."""

    acquisition: AcquisitionRecord
    status: ItemStatus = ItemStatus.AVAILABLE


class InventoryItem(ItemDetails):
    id: ItemId
    org_id: OrgId
    acquisition: AcquisitionRecord
    status: ItemStatus
    cost_events: list[CostEvent] = Field(default_factory=list)
    disposal: DisposalRecord | None = None

    @model_validator(mode="after")
    def _validate_disposal(self) -> InventoryItem:
        # A disposal record and the terminal status always travel together.
        if (self.disposal is not None) != (self.status == ItemStatus.DISPOSED):
            raise ValueError("InventoryItem.disposal must be set if and only if status is DISPOSED")
        return self


class ItemDetailsUpdate(BaseModel):
    """Partial update; only fields that are set are applied."""

    make: str | None = None
    model: str | None = None
    year: int | None = None
    color: str | None = None
    engine_number: str | None = None
    chassis_number: str | None = None
    odometer: int | None = None
    description: str | None = None
    photos: list[str] | None = None
    registration_number: str | None = None
    registration_date: date | None = None

    # Restricted fields.
    counterparty: Counterparty | None = None
    acquired_at: datetime | None = None

    @model_validator(mode="after")
    def _reject_cleared_required_fields(self) -> ItemDetailsUpdate:
        # Only fields that are optional on the item may be cleared.
        cleared = sorted(
            name
            for name in self.model_fields_set - NULLABLE_UPDATE_FIELDS
            if getattr(self, name) is None
        )
        if cleared:
            raise ValueError(f"Fields cannot be cleared: {', '.join(cleared)}")
        return self

    def touches_restricted(self) -> bool:
        return bool(self.model_fields_set & RESTRICTED_UPDATE_FIELDS)


class ItemView(ItemDetails):
    """Read model handed to callers; restricted values are None when hidden."""

    id: ItemId
    status: ItemStatus
    cost_events: list[CostEvent]
    disposal: DisposalRecord | None
    acquisition: AcquisitionRecord | None = None
    total_cost: Decimal | None = None
    profit: Decimal | None = None


def total_cost(item: InventoryItem) -> Decimal:
    return item.acquisition.cost + sum((event.amount for event in item.cost_events), start=Decimal(0))


def profit(item: InventoryItem) -> Decimal | None:
    if item.disposal is None:
        return None
    return item.disposal.amount - total_cost(item)
