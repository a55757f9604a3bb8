"""
Main Orchestrator for BusTicket Ledger

This module ties the components together and defines the one flow that
crosses a network boundary:

    email text → Gemini extraction → ticket draft → store.add_ticket

DESIGN DECISION: An extracted draft enters the ledger through exactly the
same path as a manually entered ticket. The flow adds nothing when
extraction fails, so a failed sync never leaves a partial entry behind.
"""

from typing import Optional

from pydantic import BaseModel, ValidationError

from busticket.config import get_settings
from busticket.logger import configure_logging, get_logger
from busticket.models import TicketEntry
from busticket.services.extraction import ExtractionError, TicketExtractionService
from busticket.services.storage import JsonFileStorage, KeyValueStorage
from busticket.store import LedgerStore, SessionManager


logger = get_logger(__name__)


class SyncResult(BaseModel):
    """Outcome of a successful sync, for display."""

    entry: TicketEntry
    message: str


class TicketSyncFlow:
    """
    Orchestrates "sync from email".

    Flow:
    1. Extract → send raw text to the extraction service
    2. Add → hand the draft to the store as a new ticket

    While step 1 is pending `is_syncing` is True. The UI uses it to
    disable the sync button; nothing else enforces exclusivity.
    """

    def __init__(
        self,
        store: LedgerStore,
        extractor: Optional[TicketExtractionService] = None,
    ):
        self._store = store
        self._extractor = extractor
        self._syncing = False

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    def _get_extractor(self) -> TicketExtractionService:
        """Create the extraction service on first use."""
        if self._extractor is None:
            try:
                self._extractor = TicketExtractionService()
            except ValidationError as e:
                # Gemini settings missing (usually GEMINI_API_KEY)
                logger.error("extraction_not_configured", error=str(e))
                raise ExtractionError() from e
        return self._extractor

    async def sync(self, raw_text: str) -> SyncResult:
        """
        Extract a ticket batch from email text and record it.

        Raises:
            ExtractionError: If extraction fails; the ledger is unchanged
        """
        self._syncing = True
        try:
            extracted = await self._get_extractor().extract(raw_text)
        finally:
            self._syncing = False

        entry = self._store.add_ticket(
            count=extracted.ticket_count,
            rate=extracted.rate,
            date=extracted.date,
            subject=extracted.subject,
        )
        return SyncResult(
            entry=entry,
            message=f"Successfully synced {extracted.ticket_count} tickets!",
        )


def create_app_components(
    storage: Optional[KeyValueStorage] = None,
    extractor: Optional[TicketExtractionService] = None,
) -> tuple[LedgerStore, SessionManager, TicketSyncFlow]:
    """
    Factory function to create all application components.

    Args:
        storage: Storage backend. Defaults to JSON files under the
                configured data directory.
        extractor: Extraction service. Defaults to a Gemini-backed one,
                created on first sync.

    Returns:
        (ledger_store, session_manager, ticket_sync_flow)

    Raises:
        CorruptStateError: If a stored record does not parse
    """
    settings = get_settings()
    configure_logging(settings.app.log_level)

    storage_settings = settings.storage
    if storage is None:
        storage = JsonFileStorage(storage_settings.data_dir)

    store = LedgerStore(storage, settings=storage_settings)
    session = SessionManager(storage, settings=storage_settings)
    sync_flow = TicketSyncFlow(store, extractor=extractor)

    return store, session, sync_flow
