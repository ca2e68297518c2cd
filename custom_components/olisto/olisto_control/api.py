# custom_components/olisto/olisto_control/api.py
"""Stateless HTTP wrappers for the Olisto cloud.

Nothing here caches a token: every authenticated call takes it as an
argument. Session state is the AuthGate's business (see auth.py).

Notes:
- One aiohttp request per method, bounded by ``ClientTimeout(total=timeout)``.
- Any network, HTTP status or JSON decode failure surfaces as
  ``TransportError(operation, cause)``. HTTP 401 keeps its status so the
  session layer can tell an expired token from an outage.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import aiohttp

from .const import (
    BASE_URL,
    BUTTON_PUSH_PATH,
    CHANNEL_ACCOUNTS_PARAMS,
    CHANNEL_ACCOUNTS_PATH,
    CHECK_LOGIN_PATH,
    DEFAULT_TIMEOUT,
    LOGIN_LOCALE,
    LOGIN_PARAMS,
    LOGIN_PATH,
    TRIGG_ENABLED_PATH,
    TRIGGS_PARAMS,
    TRIGGS_PATH,
)
from .exception import ProviderRejected, TransportError

_LOGGER = logging.getLogger(__name__)


def _success(payload: Any) -> bool:
    return isinstance(payload, Mapping) and payload.get("success") is True


class ProviderClient:
    """Thin async client for the Olisto REST endpoints."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    # ────────────────────────────────────────────────────────────────
    # Request plumbing
    # ────────────────────────────────────────────────────────────────
    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        _LOGGER.debug("%s: %s %s", operation, method, path)
        try:
            async with self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                if resp.status >= 400:
                    raise TransportError(operation, f"HTTP {resp.status}", status=resp.status)
                return await resp.json(content_type=None)
        except TransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
            _LOGGER.debug("%s: request failed: %s", operation, err)
            raise TransportError(operation, err) from err

    # ────────────────────────────────────────────────────────────────
    # Session endpoints
    # ────────────────────────────────────────────────────────────────
    async def login(self, email: str, password: str) -> str:
        """Exchange credentials for a bearer token."""
        payload = await self._request(
            "login",
            "POST",
            LOGIN_PATH,
            params=LOGIN_PARAMS,
            json={
                "email": email,
                "password": password,
                "locale": LOGIN_LOCALE,
                "campaignInfo": None,
            },
        )
        if not _success(payload):
            raise ProviderRejected("login")
        token = payload.get("token")
        if not token:
            raise ProviderRejected("login", "response carried no token")
        return str(token)

    async def check_login(self, token: str) -> bool:
        """True when the provider still accepts ``token``."""
        try:
            payload = await self._request(
                "checking login", "POST", CHECK_LOGIN_PATH, token=token, json={}
            )
        except TransportError as err:
            if err.unauthorized:
                return False
            raise
        return _success(payload)

    # ────────────────────────────────────────────────────────────────
    # Triggs
    # ────────────────────────────────────────────────────────────────
    async def get_triggs(self, token: str) -> list[dict[str, Any]]:
        payload = await self._request(
            "fetching triggs", "GET", TRIGGS_PATH, token=token, params=TRIGGS_PARAMS
        )
        if not isinstance(payload, list):
            raise TransportError("fetching triggs", "expected a list of triggs")
        return payload

    async def set_trigg_enabled(self, token: str, trigg_id: str, enabled: bool) -> bool:
        payload = await self._request(
            "setting trigg",
            "PUT",
            TRIGG_ENABLED_PATH.format(trigg_id=trigg_id),
            token=token,
            json={"enabled": bool(enabled)},
        )
        return _success(payload)

    # ────────────────────────────────────────────────────────────────
    # Buttons
    # ────────────────────────────────────────────────────────────────
    async def get_channel_accounts(self, token: str) -> list[dict[str, Any]]:
        payload = await self._request(
            "fetching buttons",
            "GET",
            CHANNEL_ACCOUNTS_PATH,
            token=token,
            params=CHANNEL_ACCOUNTS_PARAMS,
        )
        if not isinstance(payload, list):
            raise TransportError("fetching buttons", "expected a list of channel accounts")
        return payload

    async def push_button(self, token: str, button_id: str) -> bool:
        payload = await self._request(
            "pressing button",
            "POST",
            BUTTON_PUSH_PATH.format(button_id=button_id),
            token=token,
            json={},
        )
        return _success(payload)


__all__ = ["ProviderClient"]
