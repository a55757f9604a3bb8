"""
Shared fixtures for BusTicket Ledger tests.

Test strategy:
1. Unit tests for models, storage, store and derivations
2. Flow tests with the extraction model stubbed out
3. No real API calls in tests
"""

from types import SimpleNamespace

import pytest

from busticket.config import StorageSettings
from busticket.services.storage import InMemoryStorage
from busticket.store import LedgerStore


FIXED_MILLIS = 1_709_251_200_000  # 2024-03-01T00:00:00Z


class StubModel:
    """
    Stands in for a Gemini GenerativeModel.

    Returns `reply` as the response text, or raises `error` if given.
    Records every prompt it receives.
    """

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate_content_async(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.reply)


@pytest.fixture
def storage_settings() -> StorageSettings:
    return StorageSettings(
        user_key="bt_user",
        tickets_key="bt_tickets",
        expenses_key="bt_expenses",
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def store(storage, storage_settings) -> LedgerStore:
    return LedgerStore(storage, settings=storage_settings, clock=lambda: FIXED_MILLIS)


@pytest.fixture
def make_model():
    """Factory for StubModel instances."""
    return StubModel
