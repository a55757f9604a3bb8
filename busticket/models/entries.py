"""
Core Data Models for BusTicket Ledger

These models define the schemas for all records the ledger keeps.
They are designed to:
1. Serialize to the same camelCase JSON the storage records use
2. Be immutable once created (entries are added and deleted, never edited)
3. Stay permissive on numbers - the ledger records what it is given

DESIGN DECISION: Dates are kept as raw `YYYY-MM-DD` strings, not `date`
objects. Every filter in the reports works on string equality or string
prefix, and a `date` object would silently normalize values such as
"2024-01-5" that the filters must treat as distinct.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """Operating cost categories. The set is closed."""
    RENT = "Rent"
    SALARY = "Salary"
    UTILITY = "Utility"
    OTHER = "Other"


class CommissionRate(int, Enum):
    """
    Conventional commission rates per ticket.

    These are the values offered in the UI. The ticket model itself
    accepts any numeric rate.
    """
    STANDARD = 50
    PREMIUM = 100


# =============================================================================
# LEDGER ENTRIES
# =============================================================================

class LedgerRecord(BaseModel):
    """Shared configuration for everything written to storage."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_storage_dict(self) -> dict:
        """Dump with storage field names, leaving out unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TicketEntry(LedgerRecord):
    """
    One commission-bearing ticket batch.

    `total_commission` is computed once by the store at creation
    (count * rate) and stored. It is never recomputed, which is safe
    because entries are never edited.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier"
    )
    date: str = Field(
        ...,
        description="Issue date, YYYY-MM-DD"
    )
    timestamp: int = Field(
        ...,
        description="Creation instant in epoch milliseconds"
    )
    count: int = Field(
        ...,
        description="Number of tickets in this batch"
    )
    rate: float = Field(
        ...,
        description="Commission per ticket"
    )
    total_commission: float = Field(
        ...,
        description="count * rate at creation time"
    )
    source_email_subject: Optional[str] = Field(
        default=None,
        description="Provenance label when created from an email"
    )


class ExpenseEntry(LedgerRecord):
    """One operating cost record."""

    id: str = Field(..., min_length=1)
    date: str
    category: ExpenseCategory
    amount: float
    description: str


# =============================================================================
# SESSION / EXTENSION MODELS
# =============================================================================

class User(LedgerRecord):
    """
    Session marker for the login gate.

    There is no credential check. This only records who is using the
    ledger in this browser profile.
    """

    email: str
    is_logged_in: bool = True


class DailyReport(LedgerRecord):
    """
    A closed-day summary.

    Not populated by any flow yet; reserved for a future day-closing
    feature.
    """

    date: str
    ticket_count: int = 0
    total_commission: float = 0.0
    is_closed: bool = False


# =============================================================================
# EXTRACTION MODEL
# =============================================================================

class ExtractedTicketData(BaseModel):
    """
    Ticket draft returned by the extraction service.

    The field names mirror the response schema sent to the model
    (camelCase). `date`, `ticketCount` and `rate` are required; a
    response missing any of them fails validation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    date: str = Field(
        ...,
        description="The date of ticket issuance in YYYY-MM-DD format."
    )
    ticket_count: int = Field(
        ...,
        description="Number of tickets issued."
    )
    rate: float = Field(
        ...,
        description="The commission rate per ticket. Usually 50 or 100."
    )
    subject: Optional[str] = Field(
        default=None,
        description="A short descriptive subject for this entry."
    )
