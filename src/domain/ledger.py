from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import AwareDatetime, BaseModel

from .base_types import ItemId, OrgId, PaymentChannel, TransactionId


class TransactionDirection(StrEnum):
    IN = "IN"
    OUT = "OUT"


class TransactionCategory(StrEnum):
    SALE = "SALE"
    ACQUISITION = "ACQUISITION"
    EXPENSE = "EXPENSE"
    ADJUSTMENT = "ADJUSTMENT"


class CashTransaction(BaseModel):
    """A single append-only ledger entry.

    Amount is always positive; the direction carries the sign:
    - IN adds the amount to the balance of its payment channel.
    - OUT subtracts it.

    `id` and `timestamp` are left empty by callers and assigned when the
    entry is appended.
    """

    id: TransactionId | None = None
    amount: Decimal
    direction: TransactionDirection
    category: TransactionCategory
    description: str
    payment_channel: PaymentChannel
    item_id: ItemId | None = None
    org_id: OrgId | None = None
    timestamp: AwareDatetime | None = None

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.direction == TransactionDirection.IN else -self.amount
