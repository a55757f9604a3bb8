"""
Data Models Package

This package contains all Pydantic models used by the ledger.
Everything written to storage conforms to these schemas.
"""

from busticket.models.entries import (
    CommissionRate,
    DailyReport,
    ExpenseCategory,
    ExpenseEntry,
    ExtractedTicketData,
    LedgerRecord,
    TicketEntry,
    User,
)
from busticket.models.reports import (
    LifetimeTotals,
    MonthlyReport,
    TodaySnapshot,
    TrendPoint,
)

__all__ = [
    # Ledger models
    "CommissionRate",
    "DailyReport",
    "ExpenseCategory",
    "ExpenseEntry",
    "ExtractedTicketData",
    "LedgerRecord",
    "TicketEntry",
    "User",
    # Report models
    "LifetimeTotals",
    "MonthlyReport",
    "TodaySnapshot",
    "TrendPoint",
]
