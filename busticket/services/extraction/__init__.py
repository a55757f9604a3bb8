"""Ticket extraction services."""

from busticket.services.extraction.gemini_extractor import (
    EXTRACTION_FAILED_MESSAGE,
    TICKET_RESPONSE_SCHEMA,
    ExtractionError,
    TicketExtractionService,
)

__all__ = [
    "EXTRACTION_FAILED_MESSAGE",
    "TICKET_RESPONSE_SCHEMA",
    "ExtractionError",
    "TicketExtractionService",
]
