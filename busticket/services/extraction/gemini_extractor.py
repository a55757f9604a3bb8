"""
Ticket Extraction Service using Gemini

DESIGN DECISION: We ask Gemini for structured JSON output with a fixed
response schema rather than parsing free text, because:
1. The provider enforces the field types for us
2. The reply parses straight into a Pydantic model
3. There is nothing to scrape out of a prose answer

This service handles:
1. Sending the raw email text to Gemini with the output schema
2. Parsing the JSON reply into ExtractedTicketData
3. Collapsing every failure into a single ExtractionError

BOUNDARIES:
- This service ONLY drafts data - it never touches the ledger
- No retry, no caching: the same text sent twice is two calls and may
  produce two different drafts
"""

from typing import Any, Optional

import google.generativeai as genai
from pydantic import ValidationError

from busticket.config import GeminiSettings, get_settings
from busticket.logger import get_logger
from busticket.models import ExtractedTicketData


logger = get_logger(__name__)


# Message shown to the user for every kind of extraction failure
EXTRACTION_FAILED_MESSAGE = "Failed to extract data. Please check input format."


# Output schema sent with every request; mirrors ExtractedTicketData
TICKET_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "date": {
            "type": "STRING",
            "description": "The date of ticket issuance in YYYY-MM-DD format.",
        },
        "ticketCount": {
            "type": "NUMBER",
            "description": "Number of tickets issued.",
        },
        "rate": {
            "type": "NUMBER",
            "description": "The commission rate per ticket. Usually 50 or 100.",
        },
        "subject": {
            "type": "STRING",
            "description": "A short descriptive subject for this entry.",
        },
    },
    "required": ["date", "ticketCount", "rate"],
}


class ExtractionError(Exception):
    """
    Extraction failed.

    Raised for network errors, service errors, unparseable replies and
    replies missing required fields alike. The cause is chained for
    logging; callers show EXTRACTION_FAILED_MESSAGE.
    """

    def __init__(self, message: str = EXTRACTION_FAILED_MESSAGE):
        super().__init__(message)


class TicketExtractionService:
    """
    Turns bus-ticket confirmation emails into ticket drafts.

    The model can be injected (anything with an async
    `generate_content_async(prompt)` returning an object with `.text`);
    otherwise one is configured from GeminiSettings.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        model: Optional[Any] = None,
    ):
        if model is not None:
            self._model = model
        else:
            self._settings = settings or get_settings().gemini
            self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI for JSON output."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
                "response_mime_type": "application/json",
                "response_schema": TICKET_RESPONSE_SCHEMA,
            }
        )

    @staticmethod
    def build_prompt(raw_text: str) -> str:
        return (
            "Extract bus ticket issuance data from the following email text.\n"
            f'Email Content: "{raw_text}"'
        )

    async def extract(self, raw_text: str) -> ExtractedTicketData:
        """
        Extract a ticket draft from raw email text.

        Returns:
            The parsed draft (date, ticket count, rate, optional subject)

        Raises:
            ExtractionError: On blank input or any service/parse failure
        """
        if not raw_text or not raw_text.strip():
            raise ExtractionError("No email content to extract from.")

        logger.info("extraction_requested", text_length=len(raw_text))

        try:
            response = await self._model.generate_content_async(
                self.build_prompt(raw_text)
            )
            body = response.text
        except Exception as e:
            logger.error(
                "extraction_service_failed",
                error_type=type(e).__name__,
                error=str(e),
            )
            raise ExtractionError() from e

        try:
            extracted = ExtractedTicketData.model_validate_json(body)
        except ValidationError as e:
            logger.error(
                "extraction_response_invalid",
                error_count=e.error_count(),
                errors=[err["msg"] for err in e.errors()],
            )
            raise ExtractionError() from e

        logger.info(
            "extraction_completed",
            date=extracted.date,
            ticket_count=extracted.ticket_count,
            rate=extracted.rate,
        )
        return extracted
