from __future__ import annotations

import logging
import uuid

from pydantic import BaseModel, ValidationError

from ..storage.local import LocalStore, get_local_store

logger = logging.getLogger(__name__)

USER_KEY = "dishout_user"

_service: "AuthService | None" = None


class MockUser(BaseModel):
    uid: str
    email: str
    display_name: str
    photo_url: str | None = None


def _mock_user(email: str) -> MockUser:
    return MockUser(
        uid=f"user_{uuid.uuid4().hex[:9]}",
        email=email,
        display_name=email.split("@")[0],
    )


class AuthService:
    """Mock authentication: any credentials sign in, the identity is kept locally."""

    def __init__(self, storage: LocalStore) -> None:
        self.storage = storage
        self._user = self._load()

    def _load(self) -> MockUser | None:
        raw = self.storage.get(USER_KEY)
        if raw is None:
            return None
        try:
            return MockUser.model_validate(raw)
        except ValidationError:
            logger.error("Failed to parse stored user", exc_info=True)
            return None

    @property
    def current_user(self) -> MockUser | None:
        return self._user

    def login(self, email: str, password: str) -> MockUser:
        user = _mock_user(email)
        self._user = user
        self.storage.put(USER_KEY, user.model_dump())
        return user

    def signup(self, email: str, password: str) -> MockUser:
        return self.login(email, password)

    def logout(self) -> None:
        self._user = None
        self.storage.delete(USER_KEY)


def get_auth_service() -> AuthService:
    global _service
    if _service is None:
        _service = AuthService(get_local_store())
    return _service
