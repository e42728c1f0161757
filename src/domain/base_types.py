from __future__ import annotations

from enum import StrEnum
from typing import NewType
from uuid import UUID

from pydantic import BaseModel, model_validator

ActorId = NewType("ActorId", UUID)
OrgId = NewType("OrgId", UUID)
ItemId = NewType("ItemId", UUID)
CostEventId = NewType("CostEventId", UUID)
DisposalId = NewType("DisposalId", UUID)
TransactionId = NewType("TransactionId", UUID)


class PaymentChannel(StrEnum):
    CASH = "CASH"
    ONLINE = "ONLINE"


class Role(StrEnum):
    FULL_ACCESS = "FULL_ACCESS"
    RESTRICTED = "RESTRICTED"
    READ_ONLY = "READ_ONLY"


class Counterparty(BaseModel):
    """Seller on acquisition, buyer on disposal."""

    name: str
    phone: str = ""
    address: str | None = None
    id_proof_type: str | None = None
    id_proof_number: str | None = None

    @model_validator(mode="after")
    def _validate_name(self) -> Counterparty:
        if not self.name.strip():
            raise ValueError("Counterparty.name must be non-empty")
        return self
