from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from domain.actors import Actor
from domain.base_types import PaymentChannel
from domain.errors import Forbidden, InvalidAmount
from domain.ledger import CashTransaction, TransactionCategory, TransactionDirection
from domain.ledger_engine import LedgerEngine


def _tx(
    amount: int | str,
    direction: TransactionDirection,
    channel: PaymentChannel = PaymentChannel.CASH,
    *,
    timestamp: datetime | None = None,
    description: str = "entry",
) -> CashTransaction:
    return CashTransaction(
        amount=Decimal(amount),
        direction=direction,
        category=TransactionCategory.ADJUSTMENT,
        description=description,
        payment_channel=channel,
        timestamp=timestamp,
    )


def test_append_assigns_id_and_timestamp(ledger: LedgerEngine) -> None:
    stored = ledger.append(_tx(100, TransactionDirection.IN))

    assert stored.id is not None
    assert stored.timestamp is not None
    assert stored.timestamp.tzinfo is not None
    assert ledger.list_chronological() == [stored]


def test_append_keeps_provided_timestamp(ledger: LedgerEngine) -> None:
    explicit_ts = datetime(2023, 6, 1, tzinfo=timezone.utc)

    stored = ledger.append(_tx(100, TransactionDirection.IN, timestamp=explicit_ts))

    assert stored.timestamp == explicit_ts


@pytest.mark.parametrize("amount", ["0", "-5"])
def test_append_rejects_non_positive_amount(ledger: LedgerEngine, amount: str) -> None:
    with pytest.raises(InvalidAmount):
        ledger.append(_tx(amount, TransactionDirection.IN))

    assert ledger.list_chronological() == []


def test_balance_folds_all_entries_and_filters_by_channel(ledger: LedgerEngine) -> None:
    entries = [
        _tx(500, TransactionDirection.IN, PaymentChannel.CASH),
        _tx(120, TransactionDirection.OUT, PaymentChannel.CASH),
        _tx("1000.50", TransactionDirection.IN, PaymentChannel.ONLINE),
        _tx(300, TransactionDirection.OUT, PaymentChannel.ONLINE),
        _tx(30, TransactionDirection.OUT, PaymentChannel.CASH),
    ]
    for entry in entries:
        ledger.append(entry)

    total_in = sum((e.amount for e in entries if e.direction == TransactionDirection.IN), start=Decimal(0))
    total_out = sum((e.amount for e in entries if e.direction == TransactionDirection.OUT), start=Decimal(0))

    assert ledger.balance() == total_in - total_out
    assert ledger.balance(PaymentChannel.CASH) == Decimal(350)
    assert ledger.balance(PaymentChannel.ONLINE) == Decimal("700.50")
    assert ledger.balance(PaymentChannel.CASH) + ledger.balance(PaymentChannel.ONLINE) == ledger.balance()


def test_balance_of_empty_ledger_is_zero(ledger: LedgerEngine) -> None:
    assert ledger.balance() == Decimal(0)
    assert ledger.balance(PaymentChannel.ONLINE) == Decimal(0)


def test_list_chronological_is_most_recent_first_with_stable_ties(ledger: LedgerEngine) -> None:
    early = datetime(2024, 1, 1, tzinfo=timezone.utc)
    late = datetime(2024, 2, 1, tzinfo=timezone.utc)

    first_tie = ledger.append(_tx(1, TransactionDirection.IN, timestamp=early, description="first"))
    newest = ledger.append(_tx(2, TransactionDirection.IN, timestamp=late, description="newest"))
    second_tie = ledger.append(_tx(3, TransactionDirection.IN, timestamp=early, description="second"))

    ordered = ledger.list_chronological()

    assert [tx.id for tx in ordered] == [newest.id, first_tie.id, second_tie.id]


def test_record_adjustment_requires_full_access(ledger: LedgerEngine, owner: Actor, staff: Actor) -> None:
    with pytest.raises(Forbidden):
        ledger.record_adjustment(
            staff,
            amount=Decimal(100),
            direction=TransactionDirection.IN,
            description="Float",
            payment_channel=PaymentChannel.CASH,
        )
    assert ledger.list_chronological() == []

    stored = ledger.record_adjustment(
        owner,
        amount=Decimal(100),
        direction=TransactionDirection.IN,
        description="Float",
        payment_channel=PaymentChannel.CASH,
    )

    assert stored.category == TransactionCategory.ADJUSTMENT
    assert stored.org_id == owner.org_id
    assert ledger.balance(PaymentChannel.CASH) == Decimal(100)


def test_statement_is_denied_to_non_full_access(ledger: LedgerEngine, staff: Actor, viewer: Actor) -> None:
    for actor in (staff, viewer):
        with pytest.raises(Forbidden):
            ledger.statement(actor)


def test_statement_reports_balances_per_channel(ledger: LedgerEngine, owner: Actor) -> None:
    ledger.record_adjustment(
        owner,
        amount=Decimal(1000),
        direction=TransactionDirection.IN,
        description="Capital",
        payment_channel=PaymentChannel.ONLINE,
    )
    ledger.record_adjustment(
        owner,
        amount=Decimal(250),
        direction=TransactionDirection.OUT,
        description="Rent",
        payment_channel=PaymentChannel.CASH,
    )

    statement = ledger.statement(owner)

    assert len(statement.transactions) == 2
    assert statement.balance == Decimal(750)
    assert statement.channel_balances == {
        PaymentChannel.CASH: Decimal(-250),
        PaymentChannel.ONLINE: Decimal(1000),
    }


def test_naive_timestamp_is_rejected_and_listing_keeps_working(ledger: LedgerEngine) -> None:
    stored = ledger.append(_tx(100, TransactionDirection.IN))

    with pytest.raises(ValidationError):
        ledger.append(_tx(50, TransactionDirection.OUT, timestamp=datetime(2024, 1, 1)))

    assert ledger.list_chronological() == [stored]
    assert ledger.balance() == Decimal(100)
