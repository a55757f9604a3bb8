"""
Tests for the Gemini ticket extraction service.

The Gemini model is replaced with a stub; no network calls are made.
"""

import asyncio

import pytest

from busticket.services.extraction import (
    EXTRACTION_FAILED_MESSAGE,
    TICKET_RESPONSE_SCHEMA,
    ExtractionError,
    TicketExtractionService,
)


EMAIL = (
    "Dear Agent, 5 tickets for the Morning Express have been issued for "
    "2024-03-01. Commission of 50 Taka per ticket will be credited."
)


class BlockedResponse:
    """A response whose text accessor fails, as for a blocked prompt."""

    @property
    def text(self):
        raise ValueError("response was blocked")


class BlockedModel:
    async def generate_content_async(self, prompt):
        return BlockedResponse()


class TestTicketExtractionService:
    """Tests for TicketExtractionService.extract."""

    def test_parses_structured_reply(self, make_model):
        model = make_model(
            '{"date": "2024-03-01", "ticketCount": 5, "rate": 50, "subject": "Morning Express"}'
        )
        service = TicketExtractionService(model=model)

        draft = asyncio.run(service.extract(EMAIL))

        assert draft.date == "2024-03-01"
        assert draft.ticket_count == 5
        assert draft.rate == 50
        assert draft.subject == "Morning Express"

    def test_prompt_contains_email(self, make_model):
        model = make_model('{"date": "2024-03-01", "ticketCount": 5, "rate": 50}')
        asyncio.run(TicketExtractionService(model=model).extract(EMAIL))
        assert len(model.prompts) == 1
        assert EMAIL in model.prompts[0]

    def test_missing_required_field_fails(self, make_model):
        """A reply without `rate` is an extraction failure."""
        model = make_model('{"date": "2024-03-01", "ticketCount": 5}')
        with pytest.raises(ExtractionError) as excinfo:
            asyncio.run(TicketExtractionService(model=model).extract(EMAIL))
        assert str(excinfo.value) == EXTRACTION_FAILED_MESSAGE

    def test_non_json_reply_fails(self, make_model):
        model = make_model("Sorry, I could not find any tickets.")
        with pytest.raises(ExtractionError):
            asyncio.run(TicketExtractionService(model=model).extract(EMAIL))

    def test_service_error_fails_with_cause(self, make_model):
        """Network and service errors collapse into ExtractionError."""
        cause = ConnectionError("network unreachable")
        model = make_model(error=cause)
        with pytest.raises(ExtractionError) as excinfo:
            asyncio.run(TicketExtractionService(model=model).extract(EMAIL))
        assert excinfo.value.__cause__ is cause

    def test_unreadable_response_fails(self):
        with pytest.raises(ExtractionError):
            asyncio.run(TicketExtractionService(model=BlockedModel()).extract(EMAIL))

    @pytest.mark.parametrize("text", ["", "   \n "])
    def test_blank_input_skips_service(self, make_model, text):
        model = make_model('{"date": "2024-03-01", "ticketCount": 5, "rate": 50}')
        with pytest.raises(ExtractionError):
            asyncio.run(TicketExtractionService(model=model).extract(text))
        assert model.prompts == []

    def test_no_caching(self, make_model):
        """The same text sent twice calls the service twice."""
        model = make_model('{"date": "2024-03-01", "ticketCount": 5, "rate": 50}')
        service = TicketExtractionService(model=model)
        asyncio.run(service.extract(EMAIL))
        asyncio.run(service.extract(EMAIL))
        assert len(model.prompts) == 2


class TestResponseSchema:
    """Tests for the schema declared to the service."""

    def test_required_fields(self):
        assert TICKET_RESPONSE_SCHEMA["required"] == ["date", "ticketCount", "rate"]

    def test_declared_properties(self):
        assert set(TICKET_RESPONSE_SCHEMA["properties"]) == {
            "date", "ticketCount", "rate", "subject",
        }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
