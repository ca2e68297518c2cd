"""Tests for the olisto.* services and the button platform."""

from __future__ import annotations

import pytest
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import entity_registry as er

from custom_components.olisto.const import (
    ATTR_BUTTON_ID,
    ATTR_QUERY,
    ATTR_TRIGG_ID,
    DOMAIN,
    SERVICE_ENABLE_TRIGG,
    SERVICE_LOGIN,
    SERVICE_PRESS_BUTTON,
    SERVICE_SEARCH_TRIGGS,
    SERVICE_TRIGG_IS_ENABLED,
)
from custom_components.olisto.olisto_control import ProviderRejected, TransportError

TRIGGS = [
    {"_id": "t1", "name": "Kitchen lights", "category": "Lights", "enabled": True},
    {"_id": "t2", "name": "Garden sprinkler", "category": "Garden", "enabled": False},
]

BUTTON_ACCOUNTS = [
    {"channel": "triggi-buttons", "units": [{"_id": "b1", "name": "Door bell"}]},
]


async def _call(hass, service: str, data: dict, *, response: bool = False):
    return await hass.services.async_call(
        DOMAIN, service, data, blocking=True, return_response=response
    )


class TestOperations:
    async def test_press_button(self, hass, loaded_entry, provider) -> None:
        result = await _call(hass, SERVICE_PRESS_BUTTON, {ATTR_BUTTON_ID: "b1"}, response=True)
        assert result == {"success": True}
        assert provider.calls[-1] == ("push_button", "abc", "b1")

    async def test_rejected_press_fails_the_run(self, hass, loaded_entry, provider) -> None:
        provider.push_result = False
        with pytest.raises(HomeAssistantError, match="rejected press button"):
            await _call(hass, SERVICE_PRESS_BUTTON, {ATTR_BUTTON_ID: "b1"})

    async def test_rejected_enable_fails_the_run(self, hass, loaded_entry, provider) -> None:
        provider.set_result = False
        with pytest.raises(HomeAssistantError, match="rejected enable trigg"):
            await _call(hass, SERVICE_ENABLE_TRIGG, {ATTR_TRIGG_ID: "t1"})

    async def test_transport_error_fails_the_run(self, hass, loaded_entry, provider) -> None:
        provider.push_result = TransportError("pressing button", "HTTP 500", status=500)
        with pytest.raises(HomeAssistantError, match="press button failed"):
            await _call(hass, SERVICE_PRESS_BUTTON, {ATTR_BUTTON_ID: "b1"})

    async def test_pending_login_fails_fast(self, hass, loaded_entry, provider) -> None:
        hass.config_entries.async_update_entry(
            loaded_entry, data={**loaded_entry.data, "pendingLogin": True}
        )
        await hass.async_block_till_done()

        with pytest.raises(HomeAssistantError, match="in progress"):
            await _call(hass, SERVICE_PRESS_BUTTON, {ATTR_BUTTON_ID: "b1"})
        assert provider.count("push_button") == 0

    async def test_trigg_is_enabled(self, hass, loaded_entry, provider) -> None:
        provider.triggs = TRIGGS
        result = await _call(hass, SERVICE_TRIGG_IS_ENABLED, {ATTR_TRIGG_ID: "t2"}, response=True)
        assert result == {"enabled": False}

    async def test_unknown_trigg(self, hass, loaded_entry, provider) -> None:
        provider.triggs = TRIGGS
        with pytest.raises(HomeAssistantError, match="Trigg not found: t9"):
            await _call(hass, SERVICE_TRIGG_IS_ENABLED, {ATTR_TRIGG_ID: "t9"}, response=True)

    async def test_search_triggs(self, hass, loaded_entry, provider) -> None:
        provider.triggs = TRIGGS
        result = await _call(hass, SERVICE_SEARCH_TRIGGS, {ATTR_QUERY: "KITCHEN"}, response=True)
        assert result == {
            "results": [
                {"id": "t1", "name": "Kitchen lights", "description": "Lights • Enabled"}
            ]
        }

    async def test_unknown_entry_id(self, hass, loaded_entry) -> None:
        with pytest.raises(ServiceValidationError):
            await _call(
                hass, SERVICE_PRESS_BUTTON, {ATTR_BUTTON_ID: "b1", "config_entry_id": "nope"}
            )


class TestLoginService:
    async def test_login_updates_credentials(self, hass, loaded_entry, provider) -> None:
        provider.login_result = "fresh"
        result = await _call(
            hass, SERVICE_LOGIN, {"email": "Me@Example.com", "password": "new"}, response=True
        )
        assert result == {"success": True}
        assert loaded_entry.data["password"] == "new"
        assert loaded_entry.data["token"] == "fresh"

    async def test_failed_login_keeps_stored_credentials(
        self, hass, loaded_entry, provider
    ) -> None:
        provider.login_result = ProviderRejected("login")
        result = await _call(
            hass, SERVICE_LOGIN, {"email": "me@example.com", "password": "typo"}, response=True
        )
        assert result == {"success": False}
        assert loaded_entry.data["password"] == "pw"
        assert loaded_entry.data["token"] == "abc"

    async def test_other_account_is_refused(self, hass, loaded_entry, provider) -> None:
        with pytest.raises(ServiceValidationError):
            await _call(hass, SERVICE_LOGIN, {"email": "other@example.com", "password": "pw"})
        assert provider.count("login") == 0
        assert loaded_entry.data["username"] == "me@example.com"


async def test_new_upstream_buttons_are_added(hass, loaded_entry, provider) -> None:
    registry = er.async_get(hass)
    unique_id = f"{loaded_entry.entry_id}-button-b1"
    assert registry.async_get_entity_id("button", DOMAIN, unique_id) is None

    provider.accounts = BUTTON_ACCOUNTS
    await hass.data[DOMAIN][loaded_entry.entry_id].coordinator.async_refresh()
    await hass.async_block_till_done(wait_background_tasks=True)

    assert registry.async_get_entity_id("button", DOMAIN, unique_id) is not None
