# custom_components/olisto/services.py
"""
Olisto: Home Assistant service surface.

Thin adapter between HA service calls and the SessionClient of the loaded
config entry. All Olisto errors become HomeAssistantError so the calling
automation step fails visibly; nothing is retried here.

Services registered:
- olisto.enable_trigg / olisto.disable_trigg   (trigg_id)
- olisto.press_button                          (button_id)
- olisto.trigg_is_enabled                      (trigg_id)        → {enabled}
- olisto.search_triggs / olisto.search_buttons (query)           → {results}
- olisto.login                                 (email, password) → {success}

Every service takes an optional ``config_entry_id``; it may be omitted when a
single Olisto account is configured.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable

import voluptuous as vol
from homeassistant.const import CONF_EMAIL, CONF_PASSWORD
from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse
from homeassistant.exceptions import HomeAssistantError, ServiceValidationError
from homeassistant.helpers import config_validation as cv

from .const import (
    ATTR_BUTTON_ID,
    ATTR_CONFIG_ENTRY_ID,
    ATTR_QUERY,
    ATTR_TRIGG_ID,
    DOMAIN,
    SERVICE_DISABLE_TRIGG,
    SERVICE_ENABLE_TRIGG,
    SERVICE_LOGIN,
    SERVICE_PRESS_BUTTON,
    SERVICE_SEARCH_BUTTONS,
    SERVICE_SEARCH_TRIGGS,
    SERVICE_TRIGG_IS_ENABLED,
)
from .models import OlistoData
from .olisto_control import ErrorKind, OlistoError, ProviderRejected, SessionClient

_LOGGER = logging.getLogger(__name__)

_SERVICES_FLAG = f"{DOMAIN}_services_registered"

# ────────────────────────────────────────────────────────────
# Schemas
# ────────────────────────────────────────────────────────────
_ENTRY = {vol.Optional(ATTR_CONFIG_ENTRY_ID): cv.string}

TRIGG_SCHEMA = vol.Schema({**_ENTRY, vol.Required(ATTR_TRIGG_ID): cv.string})
BUTTON_SCHEMA = vol.Schema({**_ENTRY, vol.Required(ATTR_BUTTON_ID): cv.string})
SEARCH_SCHEMA = vol.Schema({**_ENTRY, vol.Optional(ATTR_QUERY, default=""): cv.string})
LOGIN_SCHEMA = vol.Schema(
    {**_ENTRY, vol.Required(CONF_EMAIL): cv.string, vol.Required(CONF_PASSWORD): cv.string}
)


# ────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────
def _get_entry_id(hass: HomeAssistant, call: ServiceCall) -> str:
    loaded: dict[str, OlistoData] = hass.data.get(DOMAIN, {})
    entry_id = call.data.get(ATTR_CONFIG_ENTRY_ID)
    if entry_id:
        if entry_id not in loaded:
            raise ServiceValidationError(f"Olisto config entry {entry_id} is not loaded")
        return entry_id
    if not loaded:
        raise ServiceValidationError("No Olisto account is set up")
    if len(loaded) > 1:
        raise ServiceValidationError(
            "Several Olisto accounts are configured; pass config_entry_id"
        )
    return next(iter(loaded))


def _get_client(hass: HomeAssistant, call: ServiceCall) -> SessionClient:
    return hass.data[DOMAIN][_get_entry_id(hass, call)].client


async def _run(operation: str, awaitable: Awaitable[Any]) -> Any:
    """Await an Olisto call and turn its errors into a failed service run."""
    try:
        return await awaitable
    except OlistoError as err:
        if err.kind is ErrorKind.LOGIN_PENDING:
            _LOGGER.info("%s: Olisto login in progress", operation)
            raise HomeAssistantError(
                "Olisto login is in progress, try again in a moment"
            ) from err
        _LOGGER.warning("%s failed: %s", operation, err)
        raise HomeAssistantError(f"Olisto {operation} failed: {err}") from err


def _require_success(operation: str, ok: bool) -> dict[str, bool]:
    if not ok:
        err = ProviderRejected(operation)
        _LOGGER.warning("%s", err)
        raise HomeAssistantError(f"Olisto rejected {operation}") from err
    return {"success": True}


# ────────────────────────────────────────────────────────────
# Service registration
# ────────────────────────────────────────────────────────────
async def async_register_services(hass: HomeAssistant) -> None:
    if hass.data.get(_SERVICES_FLAG):
        return
    hass.data[_SERVICES_FLAG] = True

    async def _svc_enable(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        ok = await _run("enable trigg", client.set_automation(call.data[ATTR_TRIGG_ID], True))
        return _require_success("enable trigg", ok)

    async def _svc_disable(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        ok = await _run("disable trigg", client.set_automation(call.data[ATTR_TRIGG_ID], False))
        return _require_success("disable trigg", ok)

    async def _svc_press(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        ok = await _run("press button", client.press_button(call.data[ATTR_BUTTON_ID]))
        return _require_success("press button", ok)

    async def _svc_is_enabled(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        enabled = await _run(
            "trigg status", client.check_automation_enabled(call.data[ATTR_TRIGG_ID])
        )
        return {"enabled": enabled}

    async def _svc_search_triggs(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        choices = await _run("search triggs", client.search_automations(call.data[ATTR_QUERY]))
        return {"results": [c.as_dict() for c in choices]}

    async def _svc_search_buttons(call: ServiceCall) -> ServiceResponse:
        client = _get_client(hass, call)
        choices = await _run("search buttons", client.search_buttons(call.data[ATTR_QUERY]))
        return {"results": [c.as_dict() for c in choices]}

    async def _svc_login(call: ServiceCall) -> ServiceResponse:
        entry_id = _get_entry_id(hass, call)
        email = call.data[CONF_EMAIL].strip()
        entry = hass.config_entries.async_get_entry(entry_id)
        if entry is not None and entry.unique_id and email.lower() != entry.unique_id:
            raise ServiceValidationError(
                f"{email} is not the account of this Olisto entry; add it as a new entry"
            )
        client: SessionClient = hass.data[DOMAIN][entry_id].client
        ok = await client.login(email, call.data[CONF_PASSWORD])
        if not ok:
            _LOGGER.warning("Olisto login via service failed; stored credentials kept")
        return {"success": ok}

    for name, handler, schema, response in (
        (SERVICE_ENABLE_TRIGG, _svc_enable, TRIGG_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_DISABLE_TRIGG, _svc_disable, TRIGG_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_PRESS_BUTTON, _svc_press, BUTTON_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_TRIGG_IS_ENABLED, _svc_is_enabled, TRIGG_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_SEARCH_TRIGGS, _svc_search_triggs, SEARCH_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_SEARCH_BUTTONS, _svc_search_buttons, SEARCH_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_LOGIN, _svc_login, LOGIN_SCHEMA, SupportsResponse.OPTIONAL),
    ):
        hass.services.async_register(DOMAIN, name, handler, schema=schema, supports_response=response)


def async_unregister_services(hass: HomeAssistant) -> None:
    """Drop the services once the last Olisto entry is gone."""
    if not hass.data.pop(_SERVICES_FLAG, False):
        return
    for name in (
        SERVICE_ENABLE_TRIGG,
        SERVICE_DISABLE_TRIGG,
        SERVICE_PRESS_BUTTON,
        SERVICE_TRIGG_IS_ENABLED,
        SERVICE_SEARCH_TRIGGS,
        SERVICE_SEARCH_BUTTONS,
        SERVICE_LOGIN,
    ):
        hass.services.async_remove(DOMAIN, name)
