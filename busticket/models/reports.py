"""
Report Models

Value objects produced by the derivation functions in
`busticket.reports.derivations`. They carry no behavior beyond simple
presentation helpers and are rebuilt on every read.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from busticket.models.entries import ExpenseCategory, TicketEntry


class TodaySnapshot(BaseModel):
    """Ticket totals for one calendar date."""

    model_config = ConfigDict(frozen=True)

    date: str
    ticket_count: int = 0
    commission: float = 0.0


class LifetimeTotals(BaseModel):
    """
    Sums over every entry ever recorded.

    NOTE: The dashboard shows `total_expenses` under a "Monthly Expenses"
    label although the window is unbounded. Kept as-is.
    """

    model_config = ConfigDict(frozen=True)

    total_commission: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0


class TrendPoint(BaseModel):
    """One day of the 7-day dashboard trend."""

    model_config = ConfigDict(frozen=True)

    date: str
    commission: float = 0.0
    expenses: float = 0.0


class MonthlyReport(BaseModel):
    """
    Aggregates for one `YYYY-MM` month key.

    Ratios use `or 1` as the denominator when the base is zero, so a month
    without tickets reports an average equal to the total commission and
    a month without commission reports a margin of `net * 100`.
    """

    model_config = ConfigDict(frozen=True)

    month: str = Field(..., description="YYYY-MM month key")

    total_tickets: int = 0
    total_commission: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0

    # Category value -> summed amount, in first-seen order
    expense_by_category: dict[str, float] = Field(default_factory=dict)

    avg_commission_per_ticket: float = 0.0
    profit_margin: float = 0.0

    busiest_day: Optional[TicketEntry] = None
    entries_count: int = 0

    @property
    def busiest_day_label(self) -> str:
        """Day-of-month part of the busiest entry's date, or N/A."""
        if self.busiest_day is None:
            return "N/A"
        return "".join(self.busiest_day.date.split("-")[2:])

    def category_share(self, category: ExpenseCategory | str) -> float:
        """Percentage of the month's expenses spent on one category."""
        key = category.value if isinstance(category, ExpenseCategory) else category
        amount = self.expense_by_category.get(key, 0.0)
        return amount * 100 / (self.total_expenses or 1)
