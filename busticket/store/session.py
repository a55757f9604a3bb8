"""
Session Gate

A local presence gate, not authentication. Any non-blank email is
accepted with any password, which is never stored or checked. The session record
lives in storage next to the ledger so a reload keeps the user signed in.
"""

from typing import Optional

from pydantic import ValidationError

from busticket.config import StorageSettings, get_settings
from busticket.logger import get_logger
from busticket.models import User
from busticket.services.storage import CorruptStateError, KeyValueStorage


logger = get_logger(__name__)


class SessionManager:
    """Keeps the signed-in user in storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        settings: Optional[StorageSettings] = None,
    ):
        self._storage = storage
        self._key = (settings or get_settings().storage).user_key
        self._user = self._load()

    @property
    def user(self) -> Optional[User]:
        return self._user

    @property
    def is_logged_in(self) -> bool:
        return self._user is not None and self._user.is_logged_in

    def login(self, email: str, password: str = "") -> User:
        """
        Sign in with any non-blank email. The password is ignored.

        Raises:
            ValueError: If the email is blank
        """
        if not email.strip():
            raise ValueError("Email is required")
        user = User(email=email, is_logged_in=True)
        self._storage.set(self._key, user.model_dump_json(by_alias=True))
        self._user = user
        logger.info("user_logged_in", email=email)
        return user

    def logout(self) -> None:
        self._storage.remove(self._key)
        if self._user is not None:
            logger.info("user_logged_out", email=self._user.email)
        self._user = None

    def _load(self) -> Optional[User]:
        raw = self._storage.get(self._key)
        if not raw:
            return None
        try:
            return User.model_validate_json(raw)
        except ValidationError as e:
            logger.error("persisted_state_corrupt", key=self._key)
            raise CorruptStateError(
                self._key, f"Stored record '{self._key}' could not be parsed: {e}"
            ) from e
