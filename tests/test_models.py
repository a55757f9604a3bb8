"""
Tests for the ledger's Pydantic models.
"""

import json

import pytest
from pydantic import ValidationError

from busticket.models import (
    CommissionRate,
    DailyReport,
    ExpenseCategory,
    ExpenseEntry,
    ExtractedTicketData,
    MonthlyReport,
    TicketEntry,
    User,
)


def make_ticket(**overrides) -> TicketEntry:
    fields = dict(
        id="t1",
        date="2024-03-05",
        timestamp=1,
        count=10,
        rate=50,
        total_commission=500,
    )
    fields.update(overrides)
    return TicketEntry(**fields)


class TestTicketEntry:
    """Tests for TicketEntry."""

    def test_storage_dict_uses_camel_case(self):
        """Storage field names match the persisted record format."""
        ticket = make_ticket(source_email_subject="Morning Express")
        data = ticket.to_storage_dict()
        assert data["totalCommission"] == 500
        assert data["sourceEmailSubject"] == "Morning Express"
        assert "total_commission" not in data

    def test_storage_dict_omits_missing_subject(self):
        """An entry without a subject stores no subject key at all."""
        data = make_ticket().to_storage_dict()
        assert "sourceEmailSubject" not in data

    def test_parses_from_camel_case(self):
        """Records read back from storage populate snake_case fields."""
        raw = json.dumps({
            "id": "abc",
            "date": "2024-03-01",
            "timestamp": 5,
            "count": 3,
            "rate": 100,
            "totalCommission": 300,
        })
        ticket = TicketEntry.model_validate_json(raw)
        assert ticket.total_commission == 300
        assert ticket.source_email_subject is None

    def test_entries_are_immutable(self):
        """Entries cannot be edited in place."""
        ticket = make_ticket()
        with pytest.raises(ValidationError):
            ticket.count = 99

    def test_date_is_not_normalized(self):
        """Dates are kept exactly as given."""
        ticket = make_ticket(date="2024-01-5")
        assert ticket.date == "2024-01-5"


class TestExpenseEntry:
    """Tests for ExpenseEntry and its category enum."""

    def test_category_from_string(self):
        """Category values coerce into the enum."""
        expense = ExpenseEntry(
            id="e1", date="2024-03-01", category="Rent", amount=200, description="March rent"
        )
        assert expense.category is ExpenseCategory.RENT

    def test_unknown_category_rejected(self):
        """The category set is closed."""
        with pytest.raises(ValidationError):
            ExpenseEntry(
                id="e1", date="2024-03-01", category="Fuel", amount=10, description="x"
            )

    def test_category_values(self):
        """Category string values."""
        assert [c.value for c in ExpenseCategory] == ["Rent", "Salary", "Utility", "Other"]


class TestCommissionRate:
    """Tests for the conventional commission rates."""

    def test_rate_values(self):
        assert CommissionRate.STANDARD == 50
        assert CommissionRate.PREMIUM == 100


class TestExtractedTicketData:
    """Tests for the extraction draft model."""

    def test_parses_response_schema_names(self):
        """The draft reads the camelCase names used in the response schema."""
        draft = ExtractedTicketData.model_validate_json(
            '{"date": "2024-03-01", "ticketCount": 5, "rate": 50, "subject": " Morning Express "}'
        )
        assert draft.ticket_count == 5
        assert draft.rate == 50
        assert draft.subject == "Morning Express"

    def test_subject_is_optional(self):
        draft = ExtractedTicketData.model_validate_json(
            '{"date": "2024-03-01", "ticketCount": 5, "rate": 50}'
        )
        assert draft.subject is None

    @pytest.mark.parametrize("missing", ["date", "ticketCount", "rate"])
    def test_required_fields(self, missing):
        """date, ticketCount and rate are all required."""
        data = {"date": "2024-03-01", "ticketCount": 5, "rate": 50}
        del data[missing]
        with pytest.raises(ValidationError):
            ExtractedTicketData.model_validate_json(json.dumps(data))


class TestSessionAndExtensionModels:
    """Tests for User and DailyReport."""

    def test_user_serializes_logged_in_flag(self):
        user = User(email="agent@example.com")
        data = json.loads(user.model_dump_json(by_alias=True))
        assert data == {"email": "agent@example.com", "isLoggedIn": True}

    def test_daily_report_defaults(self):
        report = DailyReport(date="2024-03-01")
        assert report.ticket_count == 0
        assert report.is_closed is False


class TestMonthlyReportHelpers:
    """Tests for MonthlyReport presentation helpers."""

    def test_busiest_day_label_without_tickets(self):
        report = MonthlyReport(month="2024-03")
        assert report.busiest_day_label == "N/A"

    def test_busiest_day_label_is_day_of_month(self):
        report = MonthlyReport(month="2024-03", busiest_day=make_ticket(date="2024-03-05"))
        assert report.busiest_day_label == "05"

    def test_category_share(self):
        report = MonthlyReport(
            month="2024-03",
            total_expenses=400,
            expense_by_category={"Rent": 300, "Utility": 100},
        )
        assert report.category_share(ExpenseCategory.RENT) == pytest.approx(75.0)
        assert report.category_share("Utility") == pytest.approx(25.0)
        assert report.category_share(ExpenseCategory.SALARY) == 0.0

    def test_category_share_guards_zero_total(self):
        """A zero expense total divides by 1 instead of failing."""
        report = MonthlyReport(month="2024-03", expense_by_category={"Other": 0.0})
        assert report.category_share("Other") == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
