"""
Streamlit Frontend for BusTicket Ledger

This is the single-page interface the agency counter uses daily.

DESIGN PRINCIPLES:
1. One store object for the whole session, every action goes through it
2. Clear error messages in simple language
3. Visual feedback for every add, delete and sync

Pages:
- Dashboard: today's sales, lifetime totals, 7-day trend
- Tickets: smart sync from email text, manual entry, ticket ledger
- Expenses: expense form and expense ledger
- Reports: month picker, monthly rollup, CSV download
"""

import asyncio

import streamlit as st

from busticket.config import get_settings, validate_all_settings
from busticket.models import CommissionRate, ExpenseCategory
from busticket.orchestrator import TicketSyncFlow, create_app_components
from busticket.reports import (
    build_monthly_csv,
    current_month_key,
    export_filename,
    lifetime_totals,
    monthly_report,
    seven_day_trend,
    today_snapshot,
    utc_today,
)
from busticket.services.extraction import EXTRACTION_FAILED_MESSAGE, ExtractionError
from busticket.services.storage import StorageError
from busticket.store import LedgerStore, SessionManager


APP = get_settings().app
CURRENCY = APP.currency_symbol
EXPENSE_FORM_KEYS = (
    "expense_date",
    "expense_category",
    "expense_amount",
    "expense_description",
)


# Page configuration
st.set_page_config(
    page_title=APP.app_name,
    page_icon="🚌",
    layout="wide",
    initial_sidebar_state="expanded",
)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached for the session)."""
    return create_app_components()


def money(value: float) -> str:
    return f"{CURRENCY}{value:,.2f}"


def main():
    """Main application entry point."""
    try:
        store, session, sync_flow = get_components()
    except StorageError as e:
        st.error(
            f"Stored ledger data could not be read: {e}. "
            "Fix or move the data files and reload."
        )
        st.stop()

    if not session.is_logged_in:
        render_login_page(session)
        return

    # Sidebar navigation
    st.sidebar.title(f"🚌 {APP.app_name}")
    st.sidebar.caption(session.user.email)
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Dashboard", "🎫 Tickets", "💸 Expenses", "📄 Reports", "⚙️ Settings"],
        index=0,
    )

    st.sidebar.markdown("---")
    if st.sidebar.button("Sign Out"):
        session.logout()
        st.rerun()

    # Route to appropriate page
    if page == "📊 Dashboard":
        render_dashboard_page(store)
    elif page == "🎫 Tickets":
        render_tickets_page(store, sync_flow)
    elif page == "💸 Expenses":
        render_expenses_page(store)
    elif page == "📄 Reports":
        render_reports_page(store)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_login_page(session: SessionManager):
    """Render the login gate. Any non-blank email is accepted."""
    st.title(f"🚌 {APP.app_name}")
    st.markdown("Enterprise Ticket & Commission Manager")

    with st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        if st.form_submit_button("Sign In", type="primary"):
            if not email.strip():
                st.error("Please enter your email")
            else:
                session.login(email, password)
                st.rerun()


def render_dashboard_page(store: LedgerStore):
    """Render the operational overview."""
    today = today_snapshot(store.tickets)
    totals = lifetime_totals(store.tickets, store.expenses)

    st.title("📊 Operational Overview")
    st.markdown(f"Summary of tickets and finances for {today.date}")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Today's Sales", today.ticket_count, help="Tickets issued")
    col2.metric("Today's Comm.", money(today.commission))
    # Lifetime figure under a monthly label, as it has always been shown
    col3.metric("Monthly Expenses", money(totals.total_expenses))
    col4.metric("Net Profit", money(totals.net_profit))

    trend = [point.model_dump() for point in seven_day_trend(store.tickets, store.expenses)]

    left, right = st.columns(2)
    with left:
        st.subheader("Commission Trend")
        st.area_chart(trend, x="date", y="commission")
    with right:
        st.subheader("Income vs Expenses")
        st.bar_chart(trend, x="date", y=["commission", "expenses"])


def render_tickets_page(store: LedgerStore, sync_flow: TicketSyncFlow):
    """Render smart sync, manual entry and the ticket ledger."""
    st.title("🎫 Ticket Ledger")
    st.markdown("Track every commission earned from issued tickets")

    with st.expander("✉️ AI Smart Sync", expanded=True):
        st.markdown(
            "Paste the content of your bus ticket confirmation email below. "
            "The ticket count, date and commission rate are extracted automatically."
        )
        email_text = st.text_area(
            "Email content",
            placeholder=(
                "Example: Dear Agent, 5 tickets for the Morning Express have been "
                "issued for tomorrow's trip. Commission of 50 Taka per ticket..."
            ),
            key="email_text",
        )
        if st.button(
            "Process Content",
            type="primary",
            disabled=sync_flow.is_syncing or not email_text.strip(),
        ):
            with st.spinner("Syncing..."):
                try:
                    result = run_async(sync_flow.sync(email_text))
                    st.success(result.message)
                except ExtractionError:
                    st.error(EXTRACTION_FAILED_MESSAGE)

    with st.expander("➕ Manual Entry"):
        with st.form("manual_ticket", clear_on_submit=True):
            entry_date = st.date_input("Date", value=utc_today())
            count = st.number_input("Tickets", min_value=0, step=1, value=1)
            rates = list(CommissionRate)
            rate = st.selectbox(
                "Rate per ticket",
                options=rates,
                index=rates.index(APP.default_commission_rate),
                format_func=lambda r: money(r.value),
            )
            if st.form_submit_button("Add Tickets"):
                store.add_ticket(count=int(count), rate=rate.value, date=entry_date.isoformat())
                st.rerun()

    st.markdown("---")

    if not store.tickets:
        st.info("No ticket records found. Use Smart Sync to add entries.")
        return

    for ticket in store.tickets:
        cols = st.columns([2, 3, 1, 1, 2, 1])
        cols[0].write(ticket.date)
        cols[1].write(ticket.source_email_subject or "Manual")
        cols[2].write(ticket.count)
        cols[3].write(money(ticket.rate))
        cols[4].write(money(ticket.total_commission))
        if cols[5].button("🗑️", key=f"del_ticket_{ticket.id}"):
            store.delete_ticket(ticket.id)
            st.rerun()


def render_expenses_page(store: LedgerStore):
    """Render the expense form and expense ledger."""
    st.title("💸 Expense Manager")
    st.markdown("Log all operational costs including rent, salary, and bills")

    with st.form("expense"):
        col1, col2 = st.columns(2)
        with col1:
            entry_date = st.date_input("Date", value=utc_today(), key="expense_date")
            category = st.selectbox(
                "Category",
                options=list(ExpenseCategory),
                index=list(ExpenseCategory).index(ExpenseCategory.OTHER),
                format_func=lambda c: c.value,
                key="expense_category",
            )
        with col2:
            amount = st.number_input(
                "Amount", min_value=0.0, step=1.0, value=0.0, key="expense_amount"
            )
            description = st.text_input("Description", key="expense_description")

        if st.form_submit_button("Add Expense", type="primary"):
            # Both fields must be filled in; no further range checks
            if not amount or not description:
                st.error("Please enter an amount and a description")
            else:
                store.add_expense(
                    category=category,
                    amount=amount,
                    date=entry_date.isoformat(),
                    description=description,
                )
                # Inputs reset only once the expense is recorded
                for key in EXPENSE_FORM_KEYS:
                    st.session_state.pop(key, None)
                st.rerun()

    st.markdown("---")

    if not store.expenses:
        st.info("No expenses recorded yet.")
        return

    for expense in store.expenses:
        cols = st.columns([2, 2, 4, 2, 1])
        cols[0].write(expense.date)
        cols[1].write(expense.category.value)
        cols[2].write(expense.description)
        cols[3].write(money(expense.amount))
        if cols[4].button("🗑️", key=f"del_expense_{expense.id}"):
            store.delete_expense(expense.id)
            st.rerun()


def render_reports_page(store: LedgerStore):
    """Render the monthly rollup and CSV export."""
    st.title("📄 Financial Reports")
    st.markdown("Monthly rollup and performance analysis")

    picked = st.date_input("Month", value=utc_today(), help="Any day in the month")
    month = current_month_key(picked)
    report = monthly_report(store.tickets, store.expenses, month)

    st.download_button(
        "⬇️ Export",
        data=build_monthly_csv(store.tickets, store.expenses, month),
        file_name=export_filename(month),
        mime="text/csv",
    )

    col1, col2, col3 = st.columns(3)
    col1.metric(
        "Total Comm. This Month",
        money(report.total_commission),
        help=f"From {report.total_tickets} tickets sold",
    )
    col2.metric(
        "Monthly Overhead",
        money(report.total_expenses),
        help=f"{len(report.expense_by_category)} categories logged",
    )
    col3.metric("Net Profit / Loss", money(report.net_profit))

    left, right = st.columns(2)
    with left:
        st.subheader("Expense Breakdown")
        if not report.expense_by_category:
            st.caption("No expenses for this period.")
        for category, amount in report.expense_by_category.items():
            share = report.category_share(category)
            st.write(f"**{category}** {money(amount)} ({share:.0f}%)")
            st.progress(min(max(share / 100, 0.0), 1.0))

    with right:
        st.subheader("Quick Stats")
        a, b = st.columns(2)
        a.metric("Avg. Comm/Ticket", f"{CURRENCY}{report.avg_commission_per_ticket:.1f}")
        b.metric("Entries Count", report.entries_count)
        a.metric("Busiest Day", report.busiest_day_label)
        b.metric("Profit Margin", f"{report.profit_margin:.1f}%")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Connection Status")

    status = validate_all_settings()

    services = [
        ("Gemini (Smart Sync)", "gemini"),
        ("Local Storage", "storage"),
        ("Application", "app"),
    ]

    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file with your API key. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
