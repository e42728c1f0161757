from __future__ import annotations

from datetime import datetime
from decimal import Decimal


def format_currency(value: Decimal) -> str:
    cents = value.quantize(Decimal("0.01"))
    return f"{cents:,.2f}"


def format_signed(value: Decimal) -> str:
    sign = "+" if value >= 0 else "-"
    return f"{sign}{format_currency(abs(value))}"


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M")
