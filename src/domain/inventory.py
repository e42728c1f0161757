from __future__ import annotations

import logging
from decimal import Decimal
from uuid import uuid4

from .access_policy import Permission, is_allowed, require
from .actors import Actor
from .base_types import Counterparty, ItemId, PaymentChannel
from .errors import InvalidAmount, InvalidState, NotFound
from .items import (
    AcquisitionRecord,
    CostEvent,
    DisposalRecord,
    InventoryItem,
    ItemDetailsUpdate,
    ItemStatus,
    ItemView,
    NewItem,
)
from .items import profit as compute_profit
from .items import total_cost as compute_total_cost
from .ledger import CashTransaction, TransactionCategory, TransactionDirection
from .ledger_engine import Clock, LedgerEngine, utc_now
from .store import Collection, EntityStore

logger = logging.getLogger(__name__)


class InventoryManager:
    """Owns item state transitions and the ledger entry each one produces.

    Each public mutation runs inside a single store transaction so the item
    change and its ledger append are committed together or not at all.
    """

    def __init__(self, *, store: EntityStore, ledger: LedgerEngine, clock: Clock = utc_now) -> None:
        self._store = store
        self._ledger = ledger
        self._clock = clock

    def acquire(self, actor: Actor, new_item: NewItem) -> InventoryItem:
        require(actor, Permission.MANAGE_ACQUISITION)
        if new_item.status == ItemStatus.DISPOSED:
            raise InvalidState("Items cannot be acquired as DISPOSED", state=new_item.status.value)
        if new_item.acquisition.cost < 0:
            raise InvalidAmount(
                f"Acquisition cost must be >= 0, got {new_item.acquisition.cost}",
                amount=new_item.acquisition.cost,
            )

        item = InventoryItem(
            **new_item.model_dump(exclude={"acquisition", "status"}),
            id=ItemId(uuid4()),
            org_id=actor.org_id,
            acquisition=new_item.acquisition,
            status=new_item.status,
        )

        with self._store.transaction():
            self._store.put(Collection.INVENTORY_ITEMS, item)
            # Zero-cost acquisitions (trade-ins, consignments) never touch the ledger.
            if item.acquisition.cost > 0:
                self._ledger.append(
                    CashTransaction(
                        amount=item.acquisition.cost,
                        direction=TransactionDirection.OUT,
                        category=TransactionCategory.ACQUISITION,
                        description=f"Purchased {item.make} {item.model}",
                        payment_channel=item.acquisition.payment_channel,
                        item_id=item.id,
                        org_id=item.org_id,
                    )
                )

        logger.info("Acquired item %s (%s %s) for %s", item.id, item.make, item.model, item.acquisition.cost)
        return item

    def record_cost(
        self,
        actor: Actor,
        item_id: ItemId,
        *,
        amount: Decimal,
        description: str,
        payment_channel: PaymentChannel,
        responsible_party: str | None = None,
    ) -> CostEvent:
        require(actor, Permission.EDIT_ITEM)
        if amount <= 0:
            raise InvalidAmount(f"Cost amount must be > 0, got {amount}", amount=amount)

        with self._store.transaction():
            item = self._load_mutable(actor, item_id)
            event = CostEvent(
                item_id=item.id,
                amount=amount,
                description=description,
                payment_channel=payment_channel,
                timestamp=self._clock(),
                responsible_party=responsible_party,
            )
            item.cost_events.append(event)
            self._store.put(Collection.INVENTORY_ITEMS, item)
            self._ledger.append(
                CashTransaction(
                    amount=amount,
                    direction=TransactionDirection.OUT,
                    category=TransactionCategory.EXPENSE,
                    description=f"Repair: {description} ({item.make} {item.model})",
                    payment_channel=payment_channel,
                    item_id=item.id,
                    org_id=item.org_id,
                    timestamp=event.timestamp,
                )
            )

        logger.info("Recorded cost %s on item %s", amount, item_id)
        return event

    def dispose(
        self,
        actor: Actor,
        item_id: ItemId,
        *,
        counterparty: Counterparty,
        amount: Decimal,
        payment_channel: PaymentChannel,
    ) -> DisposalRecord:
        require(actor, Permission.EDIT_ITEM)
        if amount <= 0:
            raise InvalidAmount(f"Disposal amount must be > 0, got {amount}", amount=amount)

        with self._store.transaction():
            item = self._load_mutable(actor, item_id)
            disposal = DisposalRecord(
                item_id=item.id,
                counterparty=counterparty,
                amount=amount,
                disposed_by=actor.id,
                timestamp=self._clock(),
                payment_channel=payment_channel,
            )
            item.status = ItemStatus.DISPOSED
            item.disposal = disposal
            self._store.put(Collection.INVENTORY_ITEMS, item)
            self._ledger.append(
                CashTransaction(
                    amount=amount,
                    direction=TransactionDirection.IN,
                    category=TransactionCategory.SALE,
                    description=f"Sold {item.make} {item.model} to {counterparty.name}",
                    payment_channel=payment_channel,
                    item_id=item.id,
                    org_id=item.org_id,
                    timestamp=disposal.timestamp,
                )
            )

        logger.info("Disposed item %s for %s", item_id, amount)
        return disposal

    def remove(self, actor: Actor, item_id: ItemId) -> None:
        """Delete the item; ledger entries that reference it stay untouched."""
        require(actor, Permission.MANAGE_ACQUISITION)
        with self._store.transaction():
            self._load(actor, item_id)
            self._store.delete(Collection.INVENTORY_ITEMS, item_id)
        logger.info("Removed item %s", item_id)

    def change_status(self, actor: Actor, item_id: ItemId, status: ItemStatus) -> InventoryItem:
        require(actor, Permission.EDIT_ITEM)
        if status == ItemStatus.DISPOSED:
            raise InvalidState("Use dispose() to close an item's lifecycle", record_id=item_id, state=status.value)

        with self._store.transaction():
            item = self._load_mutable(actor, item_id)
            item.status = status
            self._store.put(Collection.INVENTORY_ITEMS, item)
        return item

    def update_details(self, actor: Actor, item_id: ItemId, changes: ItemDetailsUpdate) -> InventoryItem:
        require(actor, Permission.EDIT_ITEM)
        if changes.touches_restricted():
            require(actor, Permission.EDIT_ACQUISITION)

        with self._store.transaction():
            item = self._load_mutable(actor, item_id)
            update = changes.model_dump(include=changes.model_fields_set)
            acquisition_update = {
                key: update.pop(key) for key in ("counterparty", "acquired_at") if key in update
            }
            if acquisition_update:
                item.acquisition = AcquisitionRecord.model_validate(
                    item.acquisition.model_dump() | acquisition_update
                )
            item = InventoryItem.model_validate(item.model_dump() | update)
            self._store.put(Collection.INVENTORY_ITEMS, item)
        return item

    def get(self, actor: Actor, item_id: ItemId) -> ItemView:
        require(actor, Permission.VIEW_ITEM)
        return self._to_view(actor, self._load(actor, item_id))

    def list_items(
        self,
        actor: Actor,
        *,
        status: ItemStatus | None = None,
        search: str | None = None,
    ) -> list[ItemView]:
        require(actor, Permission.VIEW_ITEM)
        needle = search.strip().lower() if search else None

        def _matches(item: InventoryItem) -> bool:
            if item.org_id != actor.org_id:
                return False
            if status is not None and item.status != status:
                return False
            if needle:
                haystack = (item.make, item.model, item.registration_number)
                return any(needle in value.lower() for value in haystack)
            return True

        items = self._store.list(Collection.INVENTORY_ITEMS, _matches)
        # Newest acquisitions first.
        items.reverse()
        return [self._to_view(actor, item) for item in items]

    def acquisition_details(self, actor: Actor, item_id: ItemId) -> AcquisitionRecord:
        require(actor, Permission.VIEW_ACQUISITION)
        return self._load(actor, item_id).acquisition

    def profit(self, actor: Actor, item_id: ItemId) -> Decimal | None:
        require(actor, Permission.VIEW_ACQUISITION)
        return compute_profit(self._load(actor, item_id))

    def _load(self, actor: Actor, item_id: ItemId) -> InventoryItem:
        item: InventoryItem | None = self._store.get(Collection.INVENTORY_ITEMS, item_id)
        # Items of other organizations are indistinguishable from missing ones.
        if item is None or item.org_id != actor.org_id:
            raise NotFound(
                f"Inventory item {item_id} not found",
                collection=Collection.INVENTORY_ITEMS.value,
                record_id=item_id,
            )
        return item

    def _load_mutable(self, actor: Actor, item_id: ItemId) -> InventoryItem:
        item = self._load(actor, item_id)
        if item.status == ItemStatus.DISPOSED:
            raise InvalidState(
                f"Inventory item {item_id} is already disposed",
                record_id=item_id,
                state=item.status.value,
            )
        return item

    @staticmethod
    def _to_view(actor: Actor, item: InventoryItem) -> ItemView:
        view = ItemView(
            **item.model_dump(exclude={"org_id", "acquisition"}),
        )
        if is_allowed(actor.role, Permission.VIEW_ACQUISITION):
            view.acquisition = item.acquisition
            view.total_cost = compute_total_cost(item)
            view.profit = compute_profit(item)
        return view


__all__ = ["InventoryManager"]
