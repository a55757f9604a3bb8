"""
Report Derivations

DESIGN DECISION: Every figure shown on the dashboard and the report page is
a pure function of the current entry snapshot plus a reference date or
month key. Nothing is cached and nothing is mutated, so recomputing on
every read is always correct.

IMPORTANT: All date matching is string-based, exactly as stored:
- "today" and the 7-day trend use string equality
- month scoping uses a `YYYY-MM` string prefix
A date stored as "2024-01-5" does not match "2024-01-05". This is the
documented behavior and must not be replaced with calendar parsing.

"Today" is the UTC calendar date unless the caller pins one.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence, TypeVar

from busticket.models import (
    ExpenseEntry,
    LifetimeTotals,
    MonthlyReport,
    TicketEntry,
    TodaySnapshot,
    TrendPoint,
)


EntryT = TypeVar("EntryT", TicketEntry, ExpenseEntry)

TREND_DAYS = 7


def utc_today() -> date:
    """Today's calendar date in UTC, the clock every derivation uses."""
    return datetime.now(timezone.utc).date()


def today_key(today: Optional[date] = None) -> str:
    """ISO date string for today (UTC) or for the given date."""
    return (today or utc_today()).isoformat()


def current_month_key(today: Optional[date] = None) -> str:
    """`YYYY-MM` key of the current (UTC) month."""
    return today_key(today)[:7]


def filter_by_date(entries: Iterable[EntryT], day: str) -> list[EntryT]:
    """Entries whose date string equals `day`."""
    return [e for e in entries if e.date == day]


def filter_by_month(entries: Iterable[EntryT], month_key: str) -> list[EntryT]:
    """Entries whose date string starts with `month_key`."""
    return [e for e in entries if e.date.startswith(month_key)]


def _commission(tickets: Iterable[TicketEntry]) -> float:
    return sum((t.total_commission or 0 for t in tickets), 0.0)


def _expense_total(expenses: Iterable[ExpenseEntry]) -> float:
    return sum((e.amount or 0 for e in expenses), 0.0)


# =============================================================================
# DASHBOARD
# =============================================================================

def today_snapshot(
    tickets: Sequence[TicketEntry],
    today: Optional[date] = None,
) -> TodaySnapshot:
    """Tickets sold and commission earned today."""
    day = today_key(today)
    todays = filter_by_date(tickets, day)
    return TodaySnapshot(
        date=day,
        ticket_count=sum(t.count for t in todays),
        commission=_commission(todays),
    )


def lifetime_totals(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
) -> LifetimeTotals:
    """
    Commission, expenses and net over all entries.

    The window is unbounded even where the UI calls it monthly.
    """
    total_commission = _commission(tickets)
    total_expenses = _expense_total(expenses)
    return LifetimeTotals(
        total_commission=total_commission,
        total_expenses=total_expenses,
        net_profit=total_commission - total_expenses,
    )


def trend_dates(today: Optional[date] = None, days: int = TREND_DAYS) -> list[str]:
    """The `days` calendar dates ending today, oldest first."""
    end = today or utc_today()
    return [(end - timedelta(days=offset)).isoformat() for offset in range(days - 1, -1, -1)]


def seven_day_trend(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
    today: Optional[date] = None,
) -> list[TrendPoint]:
    """
    Per-day commission and expense sums for the last 7 days.

    Always returns 7 points, oldest first; days without entries are zero.
    """
    return [
        TrendPoint(
            date=day,
            commission=_commission(filter_by_date(tickets, day)),
            expenses=_expense_total(filter_by_date(expenses, day)),
        )
        for day in trend_dates(today)
    ]


# =============================================================================
# MONTHLY REPORT
# =============================================================================

def busiest_entry(tickets: Sequence[TicketEntry]) -> Optional[TicketEntry]:
    """
    The ticket entry with the highest count.

    Ties go to the entry that comes first in the given order (for store
    order, the most recently added). None when there are no tickets.
    """
    if not tickets:
        return None
    return max(tickets, key=lambda t: t.count or 0)


def monthly_report(
    tickets: Sequence[TicketEntry],
    expenses: Sequence[ExpenseEntry],
    month_key: str,
) -> MonthlyReport:
    """
    Aggregate one month of entries.

    Args:
        tickets: All ticket entries, in store order
        expenses: All expense entries, in store order
        month_key: `YYYY-MM` prefix selecting the month

    Ratios guard a zero base with `or 1`, so the result is always a
    number: with no tickets the average equals the total commission.
    """
    month_tickets = filter_by_month(tickets, month_key)
    month_expenses = filter_by_month(expenses, month_key)

    total_tickets = sum(t.count or 0 for t in month_tickets)
    total_commission = _commission(month_tickets)
    total_expenses = _expense_total(month_expenses)
    net_profit = total_commission - total_expenses

    by_category: dict[str, float] = {}
    for e in month_expenses:
        key = e.category.value
        by_category[key] = by_category.get(key, 0.0) + e.amount

    return MonthlyReport(
        month=month_key,
        total_tickets=total_tickets,
        total_commission=total_commission,
        total_expenses=total_expenses,
        net_profit=net_profit,
        expense_by_category=by_category,
        avg_commission_per_ticket=total_commission / (total_tickets or 1),
        profit_margin=net_profit * 100 / (total_commission or 1),
        busiest_day=busiest_entry(month_tickets),
        entries_count=len(month_tickets) + len(month_expenses),
    )
