from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from domain.access_policy import Permission, is_allowed
from domain.actors import Actor
from domain.base_types import PaymentChannel
from domain.inventory import InventoryManager
from domain.items import ItemStatus
from domain.ledger_engine import LedgerEngine

from .formatting import format_currency, format_signed


@dataclass
class DashboardSummary:
    in_stock: int
    under_service: int
    disposed: int
    # None when the actor may not see margins or the ledger.
    realized_profit: Decimal | None = None
    balance: Decimal | None = None
    channel_balances: dict[PaymentChannel, Decimal] = field(default_factory=dict)


def compute_dashboard_summary(
    actor: Actor,
    *,
    inventory: InventoryManager,
    ledger: LedgerEngine,
) -> DashboardSummary:
    items = inventory.list_items(actor)

    summary = DashboardSummary(
        in_stock=sum(1 for item in items if item.status in (ItemStatus.AVAILABLE, ItemStatus.RESERVED)),
        under_service=sum(1 for item in items if item.status == ItemStatus.UNDER_SERVICE),
        disposed=sum(1 for item in items if item.status == ItemStatus.DISPOSED),
    )

    if is_allowed(actor.role, Permission.VIEW_ACQUISITION):
        summary.realized_profit = sum(
            (item.profit for item in items if item.profit is not None),
            start=Decimal(0),
        )

    if is_allowed(actor.role, Permission.VIEW_LEDGER):
        statement = ledger.statement(actor)
        summary.balance = statement.balance
        summary.channel_balances = statement.channel_balances

    return summary


def render_dashboard_summary(summary: DashboardSummary) -> None:
    print("Dashboard:")
    print(f"  In stock:      {summary.in_stock}")
    print(f"  Under service: {summary.under_service}")
    print(f"  Disposed:      {summary.disposed}")
    if summary.realized_profit is not None:
        print(f"  Realized profit: {format_signed(summary.realized_profit)}")
    if summary.balance is not None:
        print(f"  Balance:       {format_currency(summary.balance)}")
        for channel, balance in summary.channel_balances.items():
            print(f"    {channel.value:<8} {format_currency(balance)}")
