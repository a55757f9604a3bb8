"""
CSV export of one month of the ledger.

Columns: Date, Type, Category/Description, Amount, Tickets.
Ticket rows carry the commission as a positive amount; expense rows carry
the negated expense amount and zero tickets. Tickets come first, then
expenses, each in store order.

NOTE: Fields are joined with a bare comma and never quoted. A subject or
description containing a comma shifts that row's columns. Known
limitation, kept for compatibility with existing exports.
"""

from pathlib import Path
from typing import Sequence, Union

from busticket.logger import get_logger
from busticket.models import ExpenseEntry, TicketEntry
from busticket.reports.derivations import filter_by_month


logger = get_logger(__name__)

CSV_HEADERS = ["Date", "Type", "Category/Description", "Amount", "Tickets"]
DELIMITER = ","


def _format_number(value: float) -> str:
    """Render integral values without a trailing '.0' (500, not 500.0)."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def export_filename(month_key: str) -> str:
    return f"report_{month_key}.csv"


def build_rows(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
) -> list[list[str]]:
    rows = [
        [
            t.date,
            "Commission",
            t.source_email_subject or "Manual",
            _format_number(t.total_commission),
            _format_number(t.count),
        ]
        for t in tickets
    ]
    rows.extend(
        [e.date, "Expense", e.description, _format_number(-e.amount), "0"]
        for e in expenses
    )
    return rows


def build_monthly_csv(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
    month_key: str,
) -> str:
    """Render the month's entries as CSV text (no trailing newline)."""
    rows = build_rows(
        filter_by_month(tickets, month_key),
        filter_by_month(expenses, month_key),
    )
    lines = [DELIMITER.join(CSV_HEADERS)]
    lines.extend(DELIMITER.join(row) for row in rows)
    return "\n".join(lines)


def write_monthly_csv(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
    month_key: str,
    output_dir: Union[str, Path],
) -> Path:
    """Write `report_<month>.csv` into `output_dir` and return its path."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(month_key)
    path.write_text(build_monthly_csv(tickets, expenses, month_key), encoding="utf-8")
    logger.info("report_exported", month=month_key, path=str(path))
    return path
