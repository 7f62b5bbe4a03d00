"""Order reports: the CSV export and the per-exhibitor/per-client summaries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Callable, Iterable, Optional

from .models import Order

CSV_BOM = "\ufeff"
CSV_SEPARATOR = ";"
CSV_HEADERS = (
    "ID Zamówienia",
    "Numer Biletu",
    "Klient",
    "Wartość (PLN)",
    "Wystawca (ID)",
    "Wystawca (Nazwa)",
    "Data Zgłoszenia",
    "Godzina",
    "Czy Wygrał",
)
UNKNOWN_EXHIBITOR = "Nieznany"


@dataclass(frozen=True)
class SummaryRow:
    name: str
    count: int
    value: float


def _quote(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def format_amount(value: float) -> str:
    """Format ``value`` with two decimals and a comma separator: ``1234,50``."""
    return f"{value:.2f}".replace(".", ",")


def order_to_row(order: Order, tz: Optional[tzinfo] = None) -> list[str]:
    moment = datetime.fromtimestamp(order.created_at / 1000, tz=tz)
    return [
        order.id,
        order.ticket_number,
        _quote(order.client_name),
        format_amount(order.order_value),
        order.exhibitor_id or "",
        _quote(order.created_by or ""),
        moment.strftime("%d.%m.%Y"),
        moment.strftime("%H:%M:%S"),
        "TAK" if order.is_winner else "NIE",
    ]


def orders_to_csv(orders: Iterable[Order], tz: Optional[tzinfo] = None) -> str:
    """Render the order report spreadsheet.

    The text starts with a UTF-8 byte-order mark so spreadsheet programs pick
    the right encoding, uses ``;`` between fields and ``\\n`` between rows.
    Dates and times are rendered in ``tz`` (the local timezone by default).
    """
    lines = [CSV_SEPARATOR.join(CSV_HEADERS)]
    lines.extend(CSV_SEPARATOR.join(order_to_row(order, tz)) for order in orders)
    return CSV_BOM + "\n".join(lines)


def csv_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"targi_hasta_wyniki_{day.isoformat()}.csv"


def _summarize(orders: Iterable[Order], key: Callable[[Order], str]) -> list[SummaryRow]:
    counts: dict[str, int] = {}
    values: dict[str, float] = {}
    for order in orders:
        name = key(order)
        counts[name] = counts.get(name, 0) + 1
        values[name] = values.get(name, 0.0) + order.order_value
    rows = [SummaryRow(name=name, count=counts[name], value=values[name]) for name in counts]
    # sorted() is stable, so equal totals keep first-seen order.
    return sorted(rows, key=lambda row: row.value, reverse=True)


def summarize_by_exhibitor(orders: Iterable[Order]) -> list[SummaryRow]:
    """Order count and total value per exhibitor, highest total first."""
    return _summarize(orders, lambda order: order.created_by or UNKNOWN_EXHIBITOR)


def summarize_by_client(orders: Iterable[Order]) -> list[SummaryRow]:
    """Order count and total value per client, highest total first."""
    return _summarize(orders, lambda order: order.client_name)


def total_value(orders: Iterable[Order]) -> float:
    return sum(order.order_value for order in orders)


def search_orders(orders: Iterable[Order], term: str) -> list[Order]:
    """Filter orders by a case-insensitive substring of client, ticket or exhibitor."""
    needle = term.strip().lower()
    if not needle:
        return list(orders)
    return [
        order
        for order in orders
        if needle in order.client_name.lower()
        or needle in order.ticket_number.lower()
        or (order.created_by is not None and needle in order.created_by.lower())
    ]


__all__ = [
    "CSV_HEADERS",
    "SummaryRow",
    "csv_filename",
    "format_amount",
    "order_to_row",
    "orders_to_csv",
    "search_orders",
    "summarize_by_client",
    "summarize_by_exhibitor",
    "total_value",
]
