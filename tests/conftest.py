"""
Shared fakes for the Olisto test suite.

No network: ``FakeHttpSession`` stands in for ``aiohttp.ClientSession`` at the
request level, ``FakeProvider`` replaces the whole ProviderClient for
AuthGate/SessionClient tests. The Home Assistant fixtures set the olisto entry
up with that fake provider in place of the real one.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any
from unittest.mock import patch

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.olisto.const import DOMAIN
from custom_components.olisto.olisto_control import (
    AuthGate,
    MemoryCredentialStore,
    ProviderClient,
    SessionClient,
)
from custom_components.olisto.olisto_control.const import BASE_URL


class FakeResponse:
    def __init__(self, status: int = 200, payload: Any = None, raw: str | None = None) -> None:
        self.status = status
        self._payload = payload
        self._raw = raw

    async def json(self, content_type: str | None = None) -> Any:  # noqa: ARG002
        if self._raw is not None:
            return json.loads(self._raw)
        return self._payload

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


class FakeHttpSession:
    """Route (method, path) to canned responses and record every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict[str, Any]] = []

    def add(
        self,
        method: str,
        path: str,
        *,
        status: int = 200,
        payload: Any = None,
        raw: str | None = None,
        exc: BaseException | None = None,
    ) -> None:
        self.routes[(method, path)] = exc if exc is not None else FakeResponse(status, payload, raw)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        assert url.startswith(BASE_URL)
        path = url[len(BASE_URL):]
        self.calls.append({"method": method, "path": path, **kwargs})
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"success": False})
        if isinstance(route, BaseException):
            raise route
        return route

    def paths(self) -> list[str]:
        return [c["path"] for c in self.calls]

    async def __aenter__(self) -> "FakeHttpSession":
        return self

    async def __aexit__(self, *exc: Any) -> bool:
        return False


def _resolve(value: Any) -> Any:
    if isinstance(value, BaseException):
        raise value
    return value


class FakeProvider(ProviderClient):
    """ProviderClient with scripted results instead of HTTP."""

    def __init__(self) -> None:
        super().__init__(session=None)  # type: ignore[arg-type]
        self.login_result: Any = "abc"
        self.check_result: Any = True
        self.triggs: Any = []
        self.accounts: Any = []
        self.set_result: Any = True
        self.push_result: Any = True
        self.login_gate: asyncio.Event | None = None
        self.calls: list[tuple[Any, ...]] = []
        self.active_logins = 0
        self.max_active_logins = 0

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    async def login(self, email: str, password: str) -> str:
        self.calls.append(("login", email, password))
        self.active_logins += 1
        self.max_active_logins = max(self.max_active_logins, self.active_logins)
        try:
            if self.login_gate is not None:
                await self.login_gate.wait()
            return _resolve(self.login_result)
        finally:
            self.active_logins -= 1

    async def check_login(self, token: str) -> bool:
        self.calls.append(("check_login", token))
        return _resolve(self.check_result)

    async def get_triggs(self, token: str) -> list[dict[str, Any]]:
        self.calls.append(("get_triggs", token))
        return _resolve(self.triggs)

    async def set_trigg_enabled(self, token: str, trigg_id: str, enabled: bool) -> bool:
        self.calls.append(("set_trigg_enabled", token, trigg_id, enabled))
        return _resolve(self.set_result)

    async def get_channel_accounts(self, token: str) -> list[dict[str, Any]]:
        self.calls.append(("get_channel_accounts", token))
        return _resolve(self.accounts)

    async def push_button(self, token: str, button_id: str) -> bool:
        self.calls.append(("push_button", token, button_id))
        return _resolve(self.push_result)


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def gate(store: MemoryCredentialStore, provider: FakeProvider) -> AuthGate:
    return AuthGate(store, provider)


@pytest.fixture
def client(provider: FakeProvider, gate: AuthGate) -> SessionClient:
    return SessionClient(provider, gate)


@pytest.fixture
def http() -> FakeHttpSession:
    return FakeHttpSession()


# ────────────────────────────────────────────────────────────────
# Home Assistant fixtures (pytest-homeassistant-custom-component)
# ────────────────────────────────────────────────────────────────
ENTRY_DATA = {
    "username": "me@example.com",
    "password": "pw",
    "token": "abc",
    "pendingLogin": False,
}


@pytest.fixture
def mock_entry(hass):
    entry = MockConfigEntry(
        domain=DOMAIN,
        title="me@example.com",
        unique_id="me@example.com",
        data=dict(ENTRY_DATA),
    )
    entry.add_to_hass(hass)
    return entry


@pytest.fixture
async def loaded_entry(hass, enable_custom_integrations, mock_entry, provider):
    """Set up the olisto entry with the scripted provider behind it."""
    with patch(
        "custom_components.olisto.olisto_control.session.ProviderClient",
        return_value=provider,
    ):
        assert await hass.config_entries.async_setup(mock_entry.entry_id)
        await hass.async_block_till_done()
    return mock_entry
