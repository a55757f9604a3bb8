"""Derived figures and exports."""

from busticket.reports.csv_export import (
    CSV_HEADERS,
    build_monthly_csv,
    export_filename,
    write_monthly_csv,
)
from busticket.reports.derivations import (
    busiest_entry,
    current_month_key,
    filter_by_date,
    filter_by_month,
    lifetime_totals,
    monthly_report,
    seven_day_trend,
    today_key,
    today_snapshot,
    trend_dates,
    utc_today,
)

__all__ = [
    # Export
    "CSV_HEADERS",
    "build_monthly_csv",
    "export_filename",
    "write_monthly_csv",
    # Derivations
    "busiest_entry",
    "current_month_key",
    "filter_by_date",
    "filter_by_month",
    "lifetime_totals",
    "monthly_report",
    "seven_day_trend",
    "today_key",
    "today_snapshot",
    "trend_dates",
    "utc_today",
]
