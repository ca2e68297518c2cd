# custom_components/olisto/olisto_control/store.py
"""Credential/token store abstraction.

The library never keeps session state of its own. Everything the AuthGate
needs (username, password, token, pendingLogin) lives behind this interface
so the host can persist it where it likes. Home Assistant uses the config
entry data (see ``custom_components/olisto/store.py``); the CLI and tests use
``MemoryCredentialStore``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from .const import KEY_PASSWORD, KEY_PENDING_LOGIN, KEY_TOKEN, KEY_USERNAME
from .models import Credentials


class CredentialStore(ABC):
    """Key/value view over the host settings."""

    @abstractmethod
    def get(self, key: str) -> Any:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Persist a value."""

    # ---- typed accessors ----
    @property
    def token(self) -> Optional[str]:
        return self.get(KEY_TOKEN) or None

    @token.setter
    def token(self, value: Optional[str]) -> None:
        self.set(KEY_TOKEN, value)

    @property
    def pending_login(self) -> bool:
        return bool(self.get(KEY_PENDING_LOGIN))

    @pending_login.setter
    def pending_login(self, value: bool) -> None:
        self.set(KEY_PENDING_LOGIN, bool(value))

    def credentials(self) -> Optional[Credentials]:
        email = self.get(KEY_USERNAME)
        password = self.get(KEY_PASSWORD)
        if not email or not password:
            return None
        return Credentials(email, password)

    def set_credentials(self, email: str, password: str) -> None:
        self.set(KEY_USERNAME, email)
        self.set(KEY_PASSWORD, password)


class MemoryCredentialStore(CredentialStore):
    """Dict-backed store (CLI, tests)."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value


__all__ = ["CredentialStore", "MemoryCredentialStore"]
