"""
Ledger Store

The single owner of the ticket and expense collections.

DESIGN DECISION: One store object is constructed at startup and handed to
every consumer. All mutation goes through its four operations, and every
mutation writes the full collection through to storage before the new
state becomes visible. If the write fails, the in-memory state is left as
it was and the StorageWriteError propagates, so memory and storage never
disagree.

Collections are ordered most-recent-first by insertion, not by date.
"""

import time
from typing import Callable, Optional, Sequence, TypeVar
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from busticket.config import StorageSettings, get_settings
from busticket.logger import get_logger
from busticket.models import ExpenseCategory, ExpenseEntry, TicketEntry
from busticket.services.storage import CorruptStateError, KeyValueStorage


logger = get_logger(__name__)

EntryT = TypeVar("EntryT", TicketEntry, ExpenseEntry)

# Called with the name of the collection that changed
ChangeListener = Callable[[str], None]

TICKETS = "tickets"
EXPENSES = "expenses"

_TICKET_LIST = TypeAdapter(list[TicketEntry])
_EXPENSE_LIST = TypeAdapter(list[ExpenseEntry])


def _now_millis() -> int:
    return int(time.time() * 1000)


class LedgerStore:
    """
    Change-notifying store for ticket and expense entries.

    Usage:
        store = LedgerStore(JsonFileStorage(".ledger_data"))
        entry = store.add_ticket(count=10, rate=50, date="2024-03-01")
        store.delete_ticket(entry.id)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        settings: Optional[StorageSettings] = None,
        clock: Callable[[], int] = _now_millis,
    ):
        """
        Load both collections from storage.

        Args:
            storage: Durable key-value backend
            settings: Storage key names (defaults from environment)
            clock: Returns the current time in epoch milliseconds

        Raises:
            CorruptStateError: If a persisted collection does not parse
        """
        self._storage = storage
        self._settings = settings or get_settings().storage
        self._clock = clock
        self._listeners: list[ChangeListener] = []

        self._tickets: list[TicketEntry] = self._load(
            self._settings.tickets_key, _TICKET_LIST
        )
        self._expenses: list[ExpenseEntry] = self._load(
            self._settings.expenses_key, _EXPENSE_LIST
        )

        logger.info(
            "ledger_loaded",
            ticket_count=len(self._tickets),
            expense_count=len(self._expenses),
        )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def tickets(self) -> tuple[TicketEntry, ...]:
        """Snapshot of ticket entries, most recent first."""
        return tuple(self._tickets)

    @property
    def expenses(self) -> tuple[ExpenseEntry, ...]:
        """Snapshot of expense entries, most recent first."""
        return tuple(self._expenses)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_ticket(
        self,
        count: int,
        rate: float,
        date: str,
        subject: Optional[str] = None,
    ) -> TicketEntry:
        """
        Record a ticket batch.

        Count and rate are taken as given; no sign or range checks.
        `total_commission` is fixed here as count * rate.
        """
        entry = TicketEntry(
            id=str(uuid4()),
            date=date,
            timestamp=self._clock(),
            count=count,
            rate=rate,
            total_commission=count * rate,
            source_email_subject=subject,
        )
        self._commit_tickets([entry, *self._tickets])
        logger.info(
            "ticket_added",
            entry_id=entry.id,
            date=entry.date,
            count=entry.count,
            total_commission=entry.total_commission,
        )
        return entry

    def delete_ticket(self, entry_id: str) -> bool:
        """
        Remove a ticket entry by id.

        Returns False (and writes nothing) if no entry has that id.
        """
        remaining = [t for t in self._tickets if t.id != entry_id]
        if len(remaining) == len(self._tickets):
            return False
        self._commit_tickets(remaining)
        logger.info("ticket_deleted", entry_id=entry_id)
        return True

    def add_expense(
        self,
        category: ExpenseCategory | str,
        amount: float,
        date: str,
        description: str,
    ) -> ExpenseEntry:
        """Record an operating expense."""
        entry = ExpenseEntry(
            id=str(uuid4()),
            date=date,
            category=category,
            amount=amount,
            description=description,
        )
        self._commit_expenses([entry, *self._expenses])
        logger.info(
            "expense_added",
            entry_id=entry.id,
            date=entry.date,
            category=entry.category.value,
            amount=entry.amount,
        )
        return entry

    def delete_expense(self, entry_id: str) -> bool:
        """Remove an expense entry by id. Same contract as delete_ticket."""
        remaining = [e for e in self._expenses if e.id != entry_id]
        if len(remaining) == len(self._expenses):
            return False
        self._commit_expenses(remaining)
        logger.info("expense_deleted", entry_id=entry_id)
        return True

    # -------------------------------------------------------------------------
    # Change notification
    # -------------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a callback run after every successful mutation.

        Returns a function that unregisters the callback.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        for listener in list(self._listeners):
            listener(collection)

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _commit_tickets(self, entries: list[TicketEntry]) -> None:
        self._write(self._settings.tickets_key, _TICKET_LIST, entries)
        self._tickets = entries
        self._notify(TICKETS)

    def _commit_expenses(self, entries: list[ExpenseEntry]) -> None:
        self._write(self._settings.expenses_key, _EXPENSE_LIST, entries)
        self._expenses = entries
        self._notify(EXPENSES)

    def _write(
        self,
        key: str,
        adapter: TypeAdapter,
        entries: Sequence[EntryT],
    ) -> None:
        """Overwrite the whole collection under its key."""
        payload = adapter.dump_json(
            list(entries), by_alias=True, exclude_none=True
        ).decode("utf-8")
        self._storage.set(key, payload)

    def _load(self, key: str, adapter: TypeAdapter) -> list:
        raw = self._storage.get(key)
        if not raw:
            return []
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            logger.error(
                "persisted_state_corrupt",
                key=key,
                error_count=e.error_count(),
            )
            raise CorruptStateError(
                key, f"Stored record '{key}' could not be parsed: {e}"
            ) from e
