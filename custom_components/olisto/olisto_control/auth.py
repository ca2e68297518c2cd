# custom_components/olisto/olisto_control/auth.py
"""Olisto session gate.

Owns the rules for handing out the cached bearer token and for logging in
again when the provider stops accepting it:

- ``get_token()`` is synchronous and never touches the network. It fails fast
  with LoginPending while a login is in progress, even if a token is present.
- ``login()`` is serialized by an asyncio.Lock and flags ``pendingLogin`` in
  the store for its whole duration. It never raises; failures return False
  and leave the previous token in place.
- ``check_login()`` is the periodic health check: verify, and re-login with
  the stored credentials when the session is gone. A failed re-login raises
  ReloginFailed with the login error as its ``cause``.
- ``set_credentials()`` keeps new credentials only after they logged in.
"""

from __future__ import annotations

import asyncio
import logging

from .api import ProviderClient
from .exception import (
    LoginPending,
    MissingCredentials,
    NotAuthenticated,
    OlistoError,
    ReloginFailed,
    TransportError,
)
from .store import CredentialStore

_LOGGER = logging.getLogger(__name__)


class AuthGate:
    """Token cache access + re-authentication."""

    def __init__(self, store: CredentialStore, provider: ProviderClient) -> None:
        self.store = store
        self.provider = provider
        self._login_lock = asyncio.Lock()

    @property
    def login_in_flight(self) -> bool:
        return self._login_lock.locked()

    def get_token(self) -> str:
        """Return the cached token without validating it."""
        if self.store.pending_login:
            raise LoginPending()
        token = self.store.token
        if token:
            return token
        if self.store.credentials() is None:
            raise NotAuthenticated("Olisto credentials are not set")
        raise NotAuthenticated("No Olisto session yet, waiting for login")

    async def _login(self, email: str, password: str) -> None:
        """Log in and cache the token; provider errors propagate."""
        async with self._login_lock:
            self.store.pending_login = True
            try:
                self.store.token = await self.provider.login(email, password)
            finally:
                self.store.pending_login = False
        _LOGGER.info("Olisto login successful")

    async def login(self, email: str, password: str) -> bool:
        """Log in and cache the token. Returns False instead of raising."""
        try:
            await self._login(email, password)
        except OlistoError as err:
            _LOGGER.warning("Olisto login failed: %s", err)
            return False
        except Exception:  # pragma: no cover
            _LOGGER.exception("Olisto login raised unexpectedly")
            return False
        return True

    async def set_credentials(self, email: str, password: str) -> bool:
        """Log in with new credentials and store them only if Olisto accepts them."""
        if not await self.login(email, password):
            return False
        self.store.set_credentials(email, password)
        return True

    async def check_login(self) -> None:
        """Verify the session; re-login with stored credentials if needed."""
        if self.login_in_flight:
            raise LoginPending()

        token = self.store.token
        if token and not self.store.pending_login:
            try:
                if await self.provider.check_login(token):
                    return
                _LOGGER.debug("check_login: provider rejected cached token")
            except TransportError as err:
                _LOGGER.debug("check_login: session check failed: %s", err)

        creds = self.store.credentials()
        if creds is None:
            raise MissingCredentials()
        try:
            await self._login(creds.email, creds.password)
        except OlistoError as err:
            raise ReloginFailed(cause=err) from err


__all__ = ["AuthGate"]
