from __future__ import annotations

from enum import StrEnum
from typing import Any, Callable, ContextManager, Protocol
from uuid import UUID

from pydantic import BaseModel

from .actors import Actor
from .items import InventoryItem
from .ledger import CashTransaction


class Collection(StrEnum):
    ACTORS = "actors"
    INVENTORY_ITEMS = "inventory_items"
    CASH_TRANSACTIONS = "cash_transactions"


RECORD_TYPES: dict[Collection, type[BaseModel]] = {
    Collection.ACTORS: Actor,
    Collection.INVENTORY_ITEMS: InventoryItem,
    Collection.CASH_TRANSACTIONS: CashTransaction,
}


class EntityStore(Protocol):
    """Named collections of records keyed by `record.id`.

    Every read returns a fresh copy; callers re-submit changes through `put`.
    """

    def get(self, collection: Collection, record_id: UUID) -> Any | None: ...

    def list(self, collection: Collection, predicate: Callable[[Any], bool] | None = None) -> list[Any]: ...

    def put(self, collection: Collection, record: BaseModel) -> None: ...

    def delete(self, collection: Collection, record_id: UUID) -> bool: ...

    def transaction(self) -> ContextManager[None]: ...


__all__ = ["Collection", "EntityStore", "RECORD_TYPES"]
