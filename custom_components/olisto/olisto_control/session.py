# custom_components/olisto/olisto_control/session.py
"""Token-gated Olisto operations.

``SessionClient`` is what the hosts (Home Assistant services, the CLI) talk
to. Each operation takes the cached token from the AuthGate, makes exactly
one provider call and maps the result. Nothing is retried here; when the
provider answers 401 the gate is asked to restore the session so the next
invocation succeeds, and the original error still surfaces.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

import aiohttp

from .api import ProviderClient
from .auth import AuthGate
from .const import DEFAULT_TIMEOUT
from .exception import InvalidArgument, NotFound, OlistoError, TransportError
from .models import (
    Automation,
    Button,
    Choice,
    buttons_from_channel_accounts,
    filter_by_name,
)
from .store import CredentialStore

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class SessionClient:
    """Olisto account operations on top of a shared credential store."""

    def __init__(self, provider: ProviderClient, gate: AuthGate) -> None:
        self.provider = provider
        self.gate = gate

    @classmethod
    def create(
        cls,
        session: aiohttp.ClientSession,
        store: CredentialStore,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> "SessionClient":
        provider = ProviderClient(session, timeout=timeout)
        return cls(provider, AuthGate(store, provider))

    # ────────────────────────────────────────────────────────────────
    # Session
    # ────────────────────────────────────────────────────────────────
    async def login(self, email: str, password: str) -> bool:
        return await self.gate.set_credentials(email, password)

    async def check_login(self) -> None:
        await self.gate.check_login()

    async def _with_token(self, fn: Callable[[str], Awaitable[_T]]) -> _T:
        token = self.gate.get_token()
        try:
            return await fn(token)
        except TransportError as err:
            if err.unauthorized:
                _LOGGER.info("Olisto rejected the session token, logging in again")
                try:
                    await self.gate.check_login()
                except OlistoError as relogin_err:
                    _LOGGER.warning("Olisto re-login failed: %s", relogin_err)
            raise

    # ────────────────────────────────────────────────────────────────
    # Triggs
    # ────────────────────────────────────────────────────────────────
    async def _fetch_automations(self) -> list[Automation]:
        raw = await self._with_token(self.provider.get_triggs)
        try:
            return [Automation.from_api(item) for item in raw]
        except (KeyError, TypeError, AttributeError) as err:
            raise TransportError("fetching triggs", err) from err

    async def list_automations(self, query: str = "") -> list[Automation]:
        return filter_by_name(await self._fetch_automations(), query)

    async def search_automations(self, query: str = "") -> list[Choice]:
        return [a.as_choice() for a in await self.list_automations(query)]

    async def check_automation_enabled(self, trigg_id: str) -> bool:
        for automation in await self._fetch_automations():
            if automation.id == trigg_id:
                return automation.enabled
        raise NotFound(f"Trigg not found: {trigg_id}")

    async def set_automation(self, trigg_id: str, enable: bool) -> bool:
        if not trigg_id:
            raise InvalidArgument("Trigg ID is not provided")

        async def _set(token: str) -> bool:
            return await self.provider.set_trigg_enabled(token, trigg_id, enable)

        result = await self._with_token(_set)
        _LOGGER.debug("set_automation(%s, %s) -> %s", trigg_id, enable, result)
        return result

    # ────────────────────────────────────────────────────────────────
    # Buttons
    # ────────────────────────────────────────────────────────────────
    async def list_buttons(self, query: str = "") -> list[Button]:
        raw: list[dict[str, Any]] = await self._with_token(self.provider.get_channel_accounts)
        try:
            buttons = buttons_from_channel_accounts(raw)
        except (KeyError, TypeError) as err:
            raise TransportError("fetching buttons", err) from err
        return filter_by_name(buttons, query)

    async def search_buttons(self, query: str = "") -> list[Choice]:
        return [b.as_choice() for b in await self.list_buttons(query)]

    async def press_button(self, button_id: str) -> bool:
        if not button_id:
            raise InvalidArgument("Button ID is not provided")

        async def _press(token: str) -> bool:
            return await self.provider.push_button(token, button_id)

        return await self._with_token(_press)


__all__ = ["SessionClient"]
