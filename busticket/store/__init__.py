"""Application state: the ledger store and the session gate."""

from busticket.store.ledger_store import EXPENSES, TICKETS, LedgerStore
from busticket.store.session import SessionManager

__all__ = [
    "EXPENSES",
    "TICKETS",
    "LedgerStore",
    "SessionManager",
]
