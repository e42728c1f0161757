from __future__ import annotations

from domain.ledger_engine import LedgerStatement

from .formatting import format_currency, format_signed, format_timestamp


def render_ledger_statement(statement: LedgerStatement) -> None:
    print("Cash ledger:")
    if not statement.transactions:
        print("  (empty)")
        return

    rows: list[tuple[str, str, str, str, str]] = []
    for tx in statement.transactions:
        rows.append(
            (
                format_timestamp(tx.timestamp),
                tx.category.value,
                tx.payment_channel.value,
                format_signed(tx.signed_amount),
                tx.description,
            )
        )

    headers = ("Date", "Category", "Channel", "Amount", "Description")
    widths = [max(len(headers[idx]), max(len(row[idx]) for row in rows)) for idx in range(4)]

    header = (
        f"{headers[0]:<{widths[0]}} {headers[1]:<{widths[1]}} {headers[2]:<{widths[2]}} "
        f"{headers[3]:>{widths[3]}} {headers[4]}"
    )
    lines = [header, "-" * len(header)]
    for date_text, category, channel, amount_text, description in rows:
        lines.append(
            f"{date_text:<{widths[0]}} {category:<{widths[1]}} {channel:<{widths[2]}} "
            f"{amount_text:>{widths[3]}} {description}"
        )
    lines.append("-" * len(header))
    lines.append(f"Balance: {format_currency(statement.balance)}")
    for channel, balance in statement.channel_balances.items():
        lines.append(f"  {channel.value}: {format_currency(balance)}")
    print("\n".join(lines))
