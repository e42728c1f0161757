from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Callable
from uuid import uuid4

from pydantic import BaseModel

from .access_policy import Permission, require
from .actors import Actor
from .base_types import OrgId, PaymentChannel, TransactionId
from .errors import InvalidAmount
from .ledger import CashTransaction, TransactionCategory, TransactionDirection
from .store import Collection, EntityStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LedgerStatement(BaseModel):
    transactions: list[CashTransaction]
    balance: Decimal
    channel_balances: dict[PaymentChannel, Decimal]


def fold_balance(transactions: list[CashTransaction], channel: PaymentChannel | None = None) -> Decimal:
    return sum(
        (tx.signed_amount for tx in transactions if channel is None or tx.payment_channel == channel),
        start=Decimal(0),
    )


class LedgerEngine:
    """Append-only cash ledger; balances are always folded from the log."""

    def __init__(self, *, store: EntityStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def append(self, transaction: CashTransaction) -> CashTransaction:
        if transaction.amount <= 0:
            raise InvalidAmount(
                f"Transaction amount must be > 0, got {transaction.amount}",
                amount=transaction.amount,
            )

        stored = transaction.model_copy(
            update={
                "id": transaction.id or TransactionId(uuid4()),
                "timestamp": transaction.timestamp or self._clock(),
            }
        )
        self._store.put(Collection.CASH_TRANSACTIONS, stored)
        logger.info(
            "Ledger %s %s %s on %s (item=%s)",
            stored.direction,
            stored.category,
            stored.amount,
            stored.payment_channel,
            stored.item_id,
        )
        return stored

    def list_chronological(self, org_id: OrgId | None = None) -> list[CashTransaction]:
        """Most recent first; entries sharing a timestamp keep insertion order."""
        transactions = self._transactions(org_id)
        # sorted() is stable under reverse=True as well.
        return sorted(transactions, key=lambda tx: tx.timestamp, reverse=True)

    def balance(self, channel: PaymentChannel | None = None, org_id: OrgId | None = None) -> Decimal:
        return fold_balance(self._transactions(org_id), channel)

    def record_adjustment(
        self,
        actor: Actor,
        *,
        amount: Decimal,
        direction: TransactionDirection,
        description: str,
        payment_channel: PaymentChannel,
    ) -> CashTransaction:
        require(actor, Permission.RECORD_ADJUSTMENT)
        with self._store.transaction():
            return self.append(
                CashTransaction(
                    amount=amount,
                    direction=direction,
                    category=TransactionCategory.ADJUSTMENT,
                    description=description,
                    payment_channel=payment_channel,
                    org_id=actor.org_id,
                )
            )

    def statement(self, actor: Actor) -> LedgerStatement:
        require(actor, Permission.VIEW_LEDGER)
        transactions = self.list_chronological(actor.org_id)
        return LedgerStatement(
            transactions=transactions,
            balance=fold_balance(transactions),
            channel_balances={channel: fold_balance(transactions, channel) for channel in PaymentChannel},
        )

    def _transactions(self, org_id: OrgId | None) -> list[CashTransaction]:
        if org_id is None:
            return self._store.list(Collection.CASH_TRANSACTIONS)
        return self._store.list(Collection.CASH_TRANSACTIONS, lambda tx: tx.org_id == org_id)


__all__ = ["Clock", "LedgerEngine", "LedgerStatement", "fold_balance", "utc_now"]
